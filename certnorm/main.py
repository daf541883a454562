import argparse
import sys
from dataclasses import replace
from pathlib import Path

from certnorm.config.settings import Settings
from certnorm.logging.logger import Log
from certnorm.normalization.exceptions import NormalizationError
from certnorm.processor.file_loader import FileLoader
from certnorm.processor.processor import build_normalizer, config_from_settings


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="certnorm",
        description="Normalize an uploaded certificate file (DER, PEM or Base64) to PEM.",
    )
    parser.add_argument("path", type=Path, help="certificate file to normalize")
    parser.add_argument(
        "--auto-build-chain",
        action="store_true",
        default=None,
        help="fetch the issuing intermediate for a single certificate (overrides AUTO_BUILD_CHAIN)",
    )
    parser.add_argument("-o", "--output", type=Path, help="write PEM here instead of stdout")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> logging -> load -> normalize -> write PEM."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    config = config_from_settings(settings)
    if args.auto_build_chain is not None:
        config = replace(config, auto_build_chain=args.auto_build_chain)

    try:
        upload = FileLoader().load(args.path)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        report = build_normalizer(config).normalize(upload)
    except NormalizationError as exc:
        Log.error(f"Normalization failed: {exc.diagnostics()}")
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    if args.output is not None:
        args.output.write_text(report.pem, encoding="ascii")
        Log.info(f"Wrote {report.block_count} certificate(s) to {args.output}")
    else:
        sys.stdout.write(report.pem)
    return 0


if __name__ == "__main__":
    sys.exit(main())

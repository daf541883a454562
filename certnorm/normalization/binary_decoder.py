from certnorm.logging.logger import Log
from certnorm.normalization.exceptions import CorruptBinaryCertificateError
from certnorm.normalization.models import DecodedCandidate, StrategyResult
from certnorm.normalization.strategies import (
    BaseDecodeStrategy,
    ManualWrapStrategy,
    ParserStrategy,
)
from certnorm.parsers.cryptography_adapter import CryptographyParser
from certnorm.parsers.pyopenssl_adapter import PyOpenSSLParser

HEX_PREVIEW_BYTES = 20


def default_strategies(primary: CryptographyParser | None = None) -> list[BaseDecodeStrategy]:
    """direct DER parse -> OpenSSL cross-check -> manual wrap with re-parse."""
    primary = primary if primary is not None else CryptographyParser()
    return [
        ParserStrategy("direct_der", primary),
        ParserStrategy("openssl_der", PyOpenSSLParser()),
        ManualWrapStrategy(primary),
    ]


class BinaryDecoder:
    """Interprets a buffer classified as binary as a DER certificate."""

    def __init__(self, strategies: list[BaseDecodeStrategy] | None = None) -> None:
        self._strategies = strategies if strategies is not None else default_strategies()

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self._strategies]

    def decode(self, data: bytes) -> DecodedCandidate:
        """Run the strategies left to right and return the first success.

        Raises:
            CorruptBinaryCertificateError: if every strategy failed.
        """
        failures: list[StrategyResult] = []
        for strategy in self._strategies:
            result = strategy.attempt(data)
            if result.ok and result.pem is not None:
                Log.info(f"Binary upload decoded with strategy '{result.strategy}'")
                return DecodedCandidate(text=result.pem, source=result.strategy)
            Log.debug(f"Strategy '{result.strategy}' failed: {result.error}")
            failures.append(result)
        raise self._corrupt_error(data, failures)

    @staticmethod
    def _corrupt_error(
        data: bytes, failures: list[StrategyResult]
    ) -> CorruptBinaryCertificateError:
        hex_preview = data[:HEX_PREVIEW_BYTES].hex()
        reasons = "; ".join(f"{f.strategy}: {f.error}" for f in failures)
        return CorruptBinaryCertificateError(
            "Failed to parse binary certificate file. "
            f"File size: {len(data)} bytes. "
            f"First bytes (hex): {hex_preview}. "
            "The buffer could not be interpreted as a valid DER certificate "
            f"(tried {reasons}).",
            byte_length=len(data),
            hex_preview=hex_preview,
        )

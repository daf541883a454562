from certnorm.chain.fetcher_base import BaseIntermediateFetcher
from certnorm.chain.ordering import ChainOrder
from certnorm.chain.resolver import ChainResolver
from certnorm.config.settings import Settings
from certnorm.logging.logger import Log
from certnorm.normalization.binary_decoder import BinaryDecoder, default_strategies
from certnorm.normalization.block_validator import BlockValidator
from certnorm.normalization.exceptions import NormalizationError
from certnorm.normalization.models import RawUpload
from certnorm.normalization.text_decoder import TextDecoder
from certnorm.parsers.cryptography_adapter import CryptographyParser
from certnorm.processor.models import (
    NormalizationConfig,
    NormalizationOutcome,
    NormalizationReport,
)
from certnorm.processor.pipeline import NormalizationContext, PipelineStep
from certnorm.processor.steps import (
    AdmitUploadStep,
    ClassifyStep,
    DecodeStep,
    ExtractMetadataStep,
    ResolveChainStep,
    ValidateBlocksStep,
)
from certnorm.processor.upload_guard import UploadGuard


class CertificateNormalizer:
    """Runs the normalization pipeline for one upload at a time.

    Pipeline: admit -> classify -> decode -> validate -> metadata -> chain.
    The chain step is only present when the config enables it.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def normalize(self, upload: RawUpload) -> NormalizationReport:
        """Normalize an upload into a PEM bundle.

        Raises:
            NormalizationError: any fatal failure, with diagnostics attached.
        """
        context = NormalizationContext(upload=upload)
        for step in self._steps:
            context = step.run(context)

        if context.bundle is None or context.classification is None or context.candidate is None:
            raise ValueError("Pipeline finished without producing a bundle")
        Log.info(
            f"Normalized '{upload.filename}': {context.bundle.block_count} block(s), "
            f"{len(context.bundle.pem)} chars"
        )
        return NormalizationReport(
            bundle=context.bundle,
            classification=context.classification,
            decoded_by=context.candidate.source,
            metadata=context.metadata,
            chain_attempt=context.chain_attempt,
        )


def build_normalizer(
    config: NormalizationConfig,
    fetcher: BaseIntermediateFetcher | None = None,
) -> CertificateNormalizer:
    """Build a CertificateNormalizer with all components for the given config."""
    parser = CryptographyParser()
    steps: list[PipelineStep] = [
        AdmitUploadStep(UploadGuard(config.max_file_size_bytes, config.allowed_extensions)),
        ClassifyStep(),
        DecodeStep(BinaryDecoder(default_strategies(parser)), TextDecoder(parser)),
        ValidateBlocksStep(BlockValidator(parser)),
        ExtractMetadataStep(),
    ]
    if config.auto_build_chain:
        resolver = ChainResolver(
            timeout_ms=config.timeout_ms,
            order=config.chain_order,
            fallback_url=config.fallback_intermediate_url,
            fetcher=fetcher,
            parser=parser,
        )
        steps.append(ResolveChainStep(resolver))
    return CertificateNormalizer(steps)


def config_from_settings(settings: Settings) -> NormalizationConfig:
    return NormalizationConfig(
        auto_build_chain=settings.auto_build_chain,
        timeout_ms=settings.chain_fetch_timeout_ms,
        chain_order=ChainOrder.parse(settings.chain_order),
        fallback_intermediate_url=settings.chain_fallback_intermediate_url,
        max_file_size_bytes=settings.max_file_size_bytes,
    )


def normalize(
    data: bytes,
    filename: str,
    config: NormalizationConfig | None = None,
    fetcher: BaseIntermediateFetcher | None = None,
) -> NormalizationOutcome:
    """Normalize one upload and return the result instead of raising.

    Fatal failures come back in NormalizationOutcome.error; a failed chain
    lookup is never an error.
    """
    normalizer = build_normalizer(config if config is not None else NormalizationConfig(), fetcher)
    try:
        report = normalizer.normalize(RawUpload(data=data, filename=filename))
    except NormalizationError as exc:
        Log.error(f"Normalization of '{filename}' failed: {exc.message}")
        return NormalizationOutcome(error=exc)
    return NormalizationOutcome(report=report)

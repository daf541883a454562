from certnorm.processor.models import (
    NormalizationConfig,
    NormalizationOutcome,
    NormalizationReport,
)
from certnorm.processor.processor import (
    CertificateNormalizer,
    build_normalizer,
    config_from_settings,
    normalize,
)

__all__ = [
    "CertificateNormalizer",
    "NormalizationConfig",
    "NormalizationOutcome",
    "NormalizationReport",
    "build_normalizer",
    "config_from_settings",
    "normalize",
]

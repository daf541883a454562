from dataclasses import dataclass

from certnorm.chain.models import ChainAttempt
from certnorm.chain.ordering import ChainOrder
from certnorm.chain.resolver import DEFAULT_FALLBACK_INTERMEDIATE_URL
from certnorm.normalization.exceptions import NormalizationError
from certnorm.normalization.models import CertificateMetadata, Classification, NormalizedBundle

ALLOWED_EXTENSIONS: tuple[str, ...] = (
    ".pem",
    ".crt",
    ".cer",
    ".key",
    ".ca-bundle",
    ".der",
    ".pfx",
    ".p12",
    ".p7b",
    ".p7c",
    ".csr",
)


@dataclass(frozen=True)
class NormalizationConfig:
    """Capabilities injected into one normalizer; never read from the environment here."""

    auto_build_chain: bool = False
    timeout_ms: int = 20_000
    chain_order: ChainOrder = ChainOrder.INTERMEDIATE_FIRST
    fallback_intermediate_url: str = DEFAULT_FALLBACK_INTERMEDIATE_URL
    max_file_size_bytes: int = 10 * 1024 * 1024
    allowed_extensions: tuple[str, ...] = ALLOWED_EXTENSIONS


@dataclass(frozen=True)
class NormalizationReport:
    """Everything a successful normalization produced."""

    bundle: NormalizedBundle
    classification: Classification
    decoded_by: str
    metadata: CertificateMetadata | None = None
    chain_attempt: ChainAttempt | None = None

    @property
    def pem(self) -> str:
        return self.bundle.pem

    @property
    def block_count(self) -> int:
        return self.bundle.block_count


@dataclass(frozen=True)
class NormalizationOutcome:
    """Result of normalize(): exactly one of report / error is set."""

    report: NormalizationReport | None = None
    error: NormalizationError | None = None

    def __post_init__(self) -> None:
        if (self.report is None) == (self.error is None):
            raise ValueError("NormalizationOutcome needs exactly one of report or error")

    @property
    def ok(self) -> bool:
        return self.report is not None

    @property
    def bundle(self) -> NormalizedBundle | None:
        return self.report.bundle if self.report is not None else None

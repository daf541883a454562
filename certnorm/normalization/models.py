from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class RawUpload:
    """Uploaded bytes and the name the client gave them. Never mutated."""

    data: bytes
    filename: str = ""


class Classification(str, Enum):
    BINARY = "binary"
    TEXT = "text"


@dataclass(frozen=True)
class StrategyResult:
    """Tagged outcome of a single decoding strategy."""

    strategy: str
    pem: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.pem is not None

    @classmethod
    def success(cls, strategy: str, pem: str) -> "StrategyResult":
        return cls(strategy=strategy, pem=pem)

    @classmethod
    def failure(cls, strategy: str, error: str) -> "StrategyResult":
        return cls(strategy=strategy, error=error)


@dataclass(frozen=True)
class DecodedCandidate:
    """Text believed to hold PEM certificate blocks; not yet validated."""

    text: str
    source: str  # decoder path that produced it, e.g. "direct_der", "pem_text"


@dataclass(frozen=True)
class CertificateBlock:
    """One BEGIN/END CERTIFICATE span found in a candidate."""

    index: int
    pem: str
    payload: str
    valid: bool = False


@dataclass(frozen=True)
class NormalizedBundle:
    """Validated certificate blocks joined with single newlines plus one trailing newline."""

    pem: str
    blocks: tuple[str, ...] = field(default_factory=tuple)

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @classmethod
    def from_blocks(cls, blocks: list[str]) -> "NormalizedBundle":
        if not blocks:
            raise ValueError("NormalizedBundle requires at least one certificate block")
        return cls(pem="\n".join(blocks) + "\n", blocks=tuple(blocks))


@dataclass(frozen=True)
class CertificateMetadata:
    """Descriptive fields of the leaf certificate, as stored next to the bundle."""

    common_name: str
    issuer: str
    subject: str
    valid_from: str | None
    valid_to: str | None
    algorithm: str
    serial_number: str
    status: str  # "VALID", "EXPIRING_SOON", "EXPIRED"

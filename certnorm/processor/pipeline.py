from abc import ABC, abstractmethod
from dataclasses import dataclass

from certnorm.chain.models import ChainAttempt
from certnorm.normalization.models import (
    CertificateMetadata,
    Classification,
    DecodedCandidate,
    NormalizedBundle,
    RawUpload,
)


@dataclass(slots=True)
class NormalizationContext:
    """Per-call state handed from step to step. Never shared between uploads."""

    upload: RawUpload
    classification: Classification | None = None
    candidate: DecodedCandidate | None = None
    bundle: NormalizedBundle | None = None
    metadata: CertificateMetadata | None = None
    chain_attempt: ChainAttempt | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: NormalizationContext) -> NormalizationContext:
        raise NotImplementedError

from dataclasses import dataclass
from enum import Enum

from certnorm.normalization.models import NormalizedBundle


class ChainOutcome(str, Enum):
    MERGED = "merged"
    FETCH_FAILED = "fetch_failed"
    UNUSABLE = "unusable"  # fetched, but not a certificate we could merge
    NOT_LONGER = "not_longer"


@dataclass(frozen=True)
class ChainAttempt:
    """Record of one best-effort chain completion."""

    source_url: str
    outcome: ChainOutcome
    merged: NormalizedBundle | None = None
    detail: str = ""

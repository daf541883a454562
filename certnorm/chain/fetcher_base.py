from abc import ABC, abstractmethod


class BaseIntermediateFetcher(ABC):
    """Contract for retrieving an issuer certificate from an AIA URL."""

    @abstractmethod
    def fetch(self, url: str, timeout_seconds: float) -> bytes:
        """Download the certificate at url in a single attempt.

        Raises:
            ChainFetchFailedError: on non-2xx status, timeout or network error.
        """

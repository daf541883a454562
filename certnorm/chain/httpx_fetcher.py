import httpx

from certnorm.chain.exceptions import ChainFetchFailedError
from certnorm.chain.fetcher_base import BaseIntermediateFetcher

_ACCEPT = "application/pkix-cert,application/x-x509-ca-cert,application/x-pem-file,*/*"


class HttpxIntermediateFetcher(BaseIntermediateFetcher):
    """Fetches intermediates with httpx. One request, no retries."""

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def fetch(self, url: str, timeout_seconds: float) -> bytes:
        try:
            with httpx.Client(
                timeout=timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url, headers={"Accept": _ACCEPT})
        except httpx.TimeoutException as exc:
            raise ChainFetchFailedError(f"Timed out fetching {url}: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ChainFetchFailedError(f"Network error fetching {url}: {exc}") from exc

        if not response.is_success:
            raise ChainFetchFailedError(f"Fetching {url} returned HTTP {response.status_code}")
        return response.content

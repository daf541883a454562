import httpx
import pytest

from certnorm.chain.exceptions import ChainFetchFailedError
from certnorm.chain.httpx_fetcher import HttpxIntermediateFetcher

URL = "http://ca.example.test/intermediate.cer"


def _fetcher(handler) -> HttpxIntermediateFetcher:  # type: ignore[no-untyped-def]
    return HttpxIntermediateFetcher(transport=httpx.MockTransport(handler))


class TestFetchSuccess:
    def test_returns_body(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, content=b"\x30\x01"))
        assert fetcher.fetch(URL, timeout_seconds=5) == b"\x30\x01"

    def test_sends_certificate_accept_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"ok")

        _fetcher(handler).fetch(URL, timeout_seconds=5)

        assert "application/pkix-cert" in seen[0].headers["accept"]

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/intermediate.cer":
                return httpx.Response(302, headers={"location": "/moved.cer"})
            return httpx.Response(200, content=b"moved")

        assert _fetcher(handler).fetch(URL, timeout_seconds=5) == b"moved"


class TestFetchFailure:
    def test_non_2xx_raises(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(404))
        with pytest.raises(ChainFetchFailedError, match="HTTP 404"):
            fetcher.fetch(URL, timeout_seconds=5)

    def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ChainFetchFailedError, match="Timed out"):
            _fetcher(handler).fetch(URL, timeout_seconds=0.01)

    def test_network_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ChainFetchFailedError, match="Network error"):
            _fetcher(handler).fetch(URL, timeout_seconds=5)

    def test_does_not_retry(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(503)

        with pytest.raises(ChainFetchFailedError):
            _fetcher(handler).fetch(URL, timeout_seconds=5)
        assert len(calls) == 1

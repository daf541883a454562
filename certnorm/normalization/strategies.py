"""DER decoding strategies tried in order by the binary decoder.

Each strategy turns its parser's exception into a failed StrategyResult, so
the decoder only has to walk the list and stop at the first success.
"""

import base64
from abc import ABC, abstractmethod

from certnorm.normalization.models import StrategyResult
from certnorm.normalization.pem import wrap_base64
from certnorm.parsers.base import BaseCertificateParser
from certnorm.parsers.cryptography_adapter import CryptographyParser
from certnorm.parsers.exceptions import CertificateParseError


class BaseDecodeStrategy(ABC):
    """Contract for a single step of the binary fallback chain."""

    name: str = "base"

    @abstractmethod
    def attempt(self, data: bytes) -> StrategyResult:
        """Try to turn raw bytes into one PEM certificate block. Never raises."""


class ParserStrategy(BaseDecodeStrategy):
    """Let a parser adapter read the DER and serialize it back as PEM."""

    def __init__(self, name: str, parser: BaseCertificateParser) -> None:
        self.name = name
        self._parser = parser

    def attempt(self, data: bytes) -> StrategyResult:
        try:
            return StrategyResult.success(self.name, self._parser.der_to_pem(data))
        except CertificateParseError as exc:
            return StrategyResult.failure(self.name, str(exc))


class ManualWrapStrategy(BaseDecodeStrategy):
    """Base64 the buffer verbatim, frame it, then re-parse it as a gate."""

    name = "manual_wrap"

    def __init__(self, gate: CryptographyParser) -> None:
        self._gate = gate

    def attempt(self, data: bytes) -> StrategyResult:
        if not data:
            return StrategyResult.failure(self.name, "empty buffer")
        pem = wrap_base64(base64.b64encode(data).decode("ascii"))
        try:
            self._gate.load_pem(pem)
        except CertificateParseError as exc:
            return StrategyResult.failure(self.name, f"re-parse rejected wrapped PEM: {exc}")
        return StrategyResult.success(self.name, pem)

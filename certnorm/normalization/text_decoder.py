import binascii
import re

from certnorm.logging.logger import Log
from certnorm.normalization.exceptions import UnrecognizedFormatError
from certnorm.normalization.models import DecodedCandidate
from certnorm.normalization.pem import (
    PEM_HEADER,
    decode_payload,
    pad_base64,
    strip_whitespace,
    wrap_base64,
)
from certnorm.parsers.cryptography_adapter import CryptographyParser
from certnorm.parsers.exceptions import CertificateParseError

TEXT_PREVIEW_CHARS = 100
MIN_BASE64_LENGTH = 40

_BASE64_TEXT_RE = re.compile(r"^[A-Za-z0-9+/=\s]+$")
_NEWLINE_RUN_RE = re.compile(r"\n{2,}")


def normalize_line_endings(text: str) -> str:
    """CRLF/CR to LF, collapse blank lines, trim, end with exactly one newline."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _NEWLINE_RUN_RE.sub("\n", text).strip()
    return text + "\n"


class TextDecoder:
    """Handles uploads classified as text: PEM files and bare Base64."""

    def __init__(self, parser: CryptographyParser | None = None) -> None:
        self._parser = parser if parser is not None else CryptographyParser()

    def decode(self, data: bytes) -> DecodedCandidate:
        """Return a PEM candidate for text input.

        Raises:
            UnrecognizedFormatError: if the text is neither PEM nor a Base64 certificate.
        """
        # utf-8-sig drops the byte order mark some editors prepend
        text = data.decode("utf-8-sig", errors="replace").strip()

        if text.startswith(PEM_HEADER):
            Log.info("Text upload is PEM, normalizing line endings")
            return DecodedCandidate(text=normalize_line_endings(text), source="pem_text")

        pem = self._try_bare_base64(text)
        if pem is not None:
            Log.info("Text upload is bare Base64, wrapped as PEM")
            return DecodedCandidate(text=pem, source="bare_base64")

        raise UnrecognizedFormatError(
            "Uploaded file is not a recognized certificate format. "
            "Supported formats: PEM (text), DER (binary), or Base64 encoded certificates. "
            f"File size: {len(data)} bytes. "
            f"Content preview: {text[:TEXT_PREVIEW_CHARS]}...",
            byte_length=len(data),
            text_preview=text[:TEXT_PREVIEW_CHARS],
        )

    def _try_bare_base64(self, text: str) -> str | None:
        if len(text) <= MIN_BASE64_LENGTH or not _BASE64_TEXT_RE.match(text):
            return None
        payload = pad_base64(strip_whitespace(text))
        try:
            der = decode_payload(payload)
            self._parser.load_der(der)
        except (binascii.Error, CertificateParseError) as exc:
            Log.debug(f"Bare Base64 candidate rejected: {exc}")
            return None
        return wrap_base64(payload)

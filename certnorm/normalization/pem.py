"""PEM framing helpers shared by the decoders, the validator and the chain resolver."""

import base64
import re

PEM_HEADER = "-----BEGIN CERTIFICATE-----"
PEM_FOOTER = "-----END CERTIFICATE-----"
PEM_LINE_WIDTH = 64

# Non-greedy so that back-to-back blocks are matched one at a time.
CERTIFICATE_BLOCK_RE = re.compile(
    re.escape(PEM_HEADER) + r"[\s\S]*?" + re.escape(PEM_FOOTER)
)

_WHITESPACE_RE = re.compile(r"\s+")


def strip_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub("", text)


def wrap_base64(payload: str) -> str:
    """Frame a Base64 payload as a PEM certificate block (no trailing newline)."""
    lines = [
        payload[i : i + PEM_LINE_WIDTH] for i in range(0, len(payload), PEM_LINE_WIDTH)
    ]
    return "\n".join([PEM_HEADER, *lines, PEM_FOOTER])


def der_to_pem(der: bytes) -> str:
    return wrap_base64(base64.b64encode(der).decode("ascii"))


def block_payload(block: str) -> str:
    """Return the whitespace-stripped Base64 between the delimiters of one block."""
    inner = block.replace(PEM_HEADER, "", 1).replace(PEM_FOOTER, "", 1)
    return strip_whitespace(inner)


def pad_base64(payload: str) -> str:
    """Restore the `=` padding that some exporters drop."""
    return payload + "=" * (-len(payload) % 4)


def decode_payload(payload: str) -> bytes:
    """Strictly decode a Base64 payload, tolerating missing padding.

    Raises:
        binascii.Error: if the payload has characters outside the Base64 alphabet.
    """
    return base64.b64decode(pad_base64(payload), validate=True)


def find_blocks(text: str) -> list[str]:
    return CERTIFICATE_BLOCK_RE.findall(text)

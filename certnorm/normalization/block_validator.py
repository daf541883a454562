import binascii

from certnorm.logging.logger import Log
from certnorm.normalization.exceptions import (
    BlockTooShortError,
    EmptyOrNoBlocksError,
    MalformedBlockError,
)
from certnorm.normalization.models import CertificateBlock, NormalizedBundle
from certnorm.normalization.pem import (
    block_payload,
    decode_payload,
    find_blocks,
    pad_base64,
    wrap_base64,
)
from certnorm.parsers.cryptography_adapter import CryptographyParser
from certnorm.parsers.exceptions import CertificateParseError

MIN_BLOCK_PAYLOAD_LENGTH = 40


class BlockValidator:
    """Splits a candidate into certificate blocks and parses each one.

    Validation is all-or-nothing: one bad block fails the whole candidate,
    because the caller cannot tell which block was meant to be authoritative.
    """

    def __init__(self, parser: CryptographyParser | None = None) -> None:
        self._parser = parser if parser is not None else CryptographyParser()

    def validate(self, text: str) -> NormalizedBundle:
        """Return the validated blocks as a NormalizedBundle.

        Raises:
            EmptyOrNoBlocksError: if no BEGIN/END CERTIFICATE span is present.
            BlockTooShortError: if a block payload is under 40 characters.
            MalformedBlockError: if a block does not parse as X.509.
        """
        spans = find_blocks(text)
        if not spans:
            raise EmptyOrNoBlocksError(
                "No certificate blocks found in decoded content.",
                byte_length=len(text.encode("utf-8")),
                text_preview=text[:100],
            )
        blocks = [self._validate_block(index, span) for index, span in enumerate(spans)]
        bundle = NormalizedBundle.from_blocks([b.pem for b in blocks])
        Log.info(f"Validated {bundle.block_count} certificate block(s)")
        return bundle

    def _validate_block(self, index: int, span: str) -> CertificateBlock:
        payload = block_payload(span)
        if len(payload) < MIN_BLOCK_PAYLOAD_LENGTH:
            raise BlockTooShortError(
                f"Certificate block {index} is empty or too short "
                f"({len(payload)} Base64 characters).",
                block_index=index,
            )
        try:
            der = decode_payload(payload)
            self._parser.load_der(der)
        except (binascii.Error, CertificateParseError) as exc:
            raise MalformedBlockError(
                f"Certificate block {index} is not a valid X.509 certificate: {exc}",
                block_index=index,
            ) from exc
        padded = pad_base64(payload)
        if padded != payload:
            Log.debug(f"Certificate block {index} was missing Base64 padding, re-wrapped")
            return CertificateBlock(
                index=index, pem=wrap_base64(padded), payload=padded, valid=True
            )
        return CertificateBlock(index=index, pem=span, payload=payload, valid=True)

class NormalizationError(Exception):
    """Base exception for every fatal normalization failure.

    Carries the diagnostic fields an HTTP layer needs to build a 400 response
    without re-inspecting the upload.
    """

    def __init__(
        self,
        message: str,
        *,
        byte_length: int | None = None,
        hex_preview: str | None = None,
        text_preview: str | None = None,
        block_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.byte_length = byte_length
        self.hex_preview = hex_preview
        self.text_preview = text_preview
        self.block_index = block_index

    def diagnostics(self) -> dict[str, object]:
        """Return the error as a JSON-serializable dict, omitting unset fields."""
        payload: dict[str, object] = {
            "error": type(self).__name__,
            "message": self.message,
        }
        for key in ("byte_length", "hex_preview", "text_preview", "block_index"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


class UploadRejectedError(NormalizationError):
    """Raised when an upload is refused before decoding (empty, too large, bad extension)."""


class UnrecognizedFormatError(NormalizationError):
    """Raised when text content is neither PEM nor bare Base64 of a certificate."""


class CorruptBinaryCertificateError(NormalizationError):
    """Raised when every binary decoding strategy failed."""


class EmptyOrNoBlocksError(NormalizationError):
    """Raised when a decoded candidate holds no certificate blocks."""


class MalformedBlockError(NormalizationError):
    """Raised when one certificate block fails structural X.509 parsing."""

    def __init__(self, message: str, *, block_index: int, **kwargs: object) -> None:
        super().__init__(message, block_index=block_index, **kwargs)  # type: ignore[arg-type]
        self.index = block_index


class BlockTooShortError(MalformedBlockError):
    """Raised when a block's Base64 payload is too short to be a certificate."""

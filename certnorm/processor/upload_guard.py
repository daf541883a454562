from pathlib import PurePath

from certnorm.normalization.exceptions import UploadRejectedError
from certnorm.normalization.models import RawUpload
from certnorm.processor.models import ALLOWED_EXTENSIONS


def file_extension(filename: str) -> str:
    """Lower-cased suffix including the dot; '.ca-bundle' style names are handled too."""
    name = PurePath(filename).name.lower()
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


class UploadGuard:
    """Refuses uploads that should never reach the decoders."""

    def __init__(
        self,
        max_file_size_bytes: int,
        allowed_extensions: tuple[str, ...] = ALLOWED_EXTENSIONS,
    ) -> None:
        self._max_file_size_bytes = max_file_size_bytes
        self._allowed_extensions = tuple(ext.lower() for ext in allowed_extensions)

    def check(self, upload: RawUpload) -> None:
        """Raise UploadRejectedError if the upload is empty, too large or of a refused type.

        An empty filename or an empty allow-list skips the extension check.
        """
        size = len(upload.data)
        if size == 0:
            raise UploadRejectedError("Certificate file is required", byte_length=0)
        if size > self._max_file_size_bytes:
            raise UploadRejectedError(
                f"Certificate file is too large: {size} bytes "
                f"(max {self._max_file_size_bytes})",
                byte_length=size,
            )
        if not upload.filename or not self._allowed_extensions:
            return
        extension = file_extension(upload.filename)
        if extension not in self._allowed_extensions:
            raise UploadRejectedError(
                f"File '{upload.filename}' is not allowed. Only certificate files "
                f"({', '.join(self._allowed_extensions)}) are accepted",
                byte_length=size,
            )

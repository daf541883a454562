from pathlib import Path

from certnorm.normalization.models import RawUpload


class FileLoader:
    """Reads an upload from disk, keeping its original filename."""

    def load(self, path: Path) -> RawUpload:
        """Read file bytes.

        Raises:
            FileNotFoundError: if nothing exists at path.
            IsADirectoryError: if path is a directory.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if path.is_dir():
            raise IsADirectoryError(f"Expected a file, got a directory: {path}")
        return RawUpload(data=path.read_bytes(), filename=path.name)

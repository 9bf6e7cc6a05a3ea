"""
File validation and byte sources.

Single Responsibility: Each class handles one specific task.
"""
import io
import os
from pathlib import Path
from typing import Tuple, Optional, Union, BinaryIO

from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        return path, path.stat().st_size


def remaining_length(file_obj: BinaryIO) -> Optional[int]:
    """
    Bytes left between the current cursor and the end of a file object.

    Uses fstat for real files and the buffer size for BytesIO. Returns None
    when the length cannot be known without consuming the stream.
    """
    try:
        position = file_obj.tell()
    except (AttributeError, OSError, io.UnsupportedOperation):
        return None

    if isinstance(file_obj, io.BytesIO):
        return max(0, file_obj.getbuffer().nbytes - position)

    try:
        size = os.fstat(file_obj.fileno()).st_size
    except (AttributeError, OSError, io.UnsupportedOperation):
        return None
    return max(0, size - position)


class FileByteSource:
    """
    Byte source reading sequentially from a binary file object.

    The source never seeks: each read() continues where the previous one
    stopped, starting at the cursor the file object had on construction.
    """

    def __init__(self, file_obj: BinaryIO, total_size: Optional[int] = None):
        """
        Initialize source.

        Args:
            file_obj: Binary file object opened for reading
            total_size: Bytes to upload; inferred from the file when omitted

        Raises:
            ValueError: If the size is not given and cannot be inferred
        """
        if total_size is None:
            total_size = remaining_length(file_obj)
            if total_size is None:
                raise ValueError(
                    "Cannot determine the size of the file object; pass total_size"
                )
        if total_size < 0:
            raise ValueError("total_size must not be negative")

        self._file = file_obj
        self._total_size = total_size
        self._owns_file = False
        self._logger = get_logger('upload.file')

    @classmethod
    def open(cls, file_path: Union[str, Path]) -> 'FileByteSource':
        """Open a local file for upload; the source closes it on close()."""
        path, size = FileValidator().validate(file_path)
        source = cls(open(path, 'rb'), size)
        source._owns_file = True
        return source

    @property
    def total_size(self) -> int:
        return self._total_size

    def read(self, size: int) -> bytes:
        """Read up to size bytes from the current cursor."""
        data = self._file.read(size)
        if data:
            self._logger.debug(f"Read {len(data)} bytes")
        return data or b''

    def close(self) -> None:
        """Close the file if this source opened it."""
        if self._owns_file:
            self._file.close()

    def __enter__(self) -> 'FileByteSource':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class BytesSource(FileByteSource):
    """Byte source over an in-memory bytes object."""

    def __init__(self, data: bytes):
        super().__init__(io.BytesIO(data), len(data))

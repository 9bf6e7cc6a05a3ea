"""
Data models for upload module.

Uses dataclasses for type-safe data structures.
"""
from dataclasses import dataclass
from typing import Optional, Union, Any

from ...exceptions import ApplicationError

DEFAULT_CHUNK_SIZE = 4 * 1024 * 1024  # 4MB


@dataclass
class UploadSession:
    """
    State of one chunked upload.

    Attributes:
        source: Byte source being uploaded
        total_size: Number of bytes to upload
        upload_id: Server-issued id, None until the first chunk is accepted
        offset: Bytes acknowledged by the server
    """
    source: Any
    total_size: int
    upload_id: Optional[str] = None
    offset: int = 0

    def __post_init__(self):
        if self.total_size < 0:
            raise ValueError("total_size must not be negative")
        if not 0 <= self.offset <= self.total_size:
            raise ValueError(
                f"offset {self.offset} outside of [0, {self.total_size}]"
            )

    @property
    def remaining(self) -> int:
        """Bytes still to be acknowledged."""
        return self.total_size - self.offset

    @property
    def is_complete(self) -> bool:
        return self.offset >= self.total_size


@dataclass(frozen=True)
class ChunkAccepted:
    """The server stored the chunk and reports its new offset."""
    offset: int
    upload_id: Optional[str] = None


@dataclass(frozen=True)
class ChunkConflict:
    """
    The server rejected the chunk because its offset differs from ours.

    The error is kept so that a conflict the coordinator cannot resolve can
    be re-raised unchanged.
    """
    offset: int
    upload_id: Optional[str] = None
    error: Optional[ApplicationError] = None


ChunkResult = Union[ChunkAccepted, ChunkConflict]


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        uploaded_bytes: Bytes acknowledged so far
        total_bytes: Total bytes to upload
        chunks_sent: Chunk requests sent
        resyncs: Offset conflicts resolved
    """
    uploaded_bytes: int = 0
    total_bytes: int = 0
    chunks_sent: int = 0
    resyncs: int = 0

    @property
    def percentage(self) -> float:
        """Progress percentage."""
        if self.total_bytes == 0:
            return 100.0
        return (self.uploaded_bytes / self.total_bytes) * 100

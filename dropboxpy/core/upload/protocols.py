"""
Protocol definitions for upload module.

Defines the interfaces the coordinator depends on, so sources and senders
can be swapped (e.g. fakes in tests).
"""
from typing import Protocol, Dict, Any, Optional, runtime_checkable

from .models import ChunkResult


@runtime_checkable
class ByteSource(Protocol):
    """
    Sequential source of upload bytes.

    The coordinator only ever reads forward from the current cursor.
    """

    @property
    def total_size(self) -> int:
        """Total number of bytes the source will yield."""
        ...

    def read(self, size: int) -> bytes:
        """
        Read the next chunk.

        Args:
            size: Maximum number of bytes

        Returns:
            Up to size bytes, b'' at end of data
        """
        ...


class ChunkSenderProtocol(Protocol):
    """Protocol for the chunk append and commit calls."""

    def send_chunk(
        self,
        data: bytes,
        upload_id: Optional[str] = None,
        offset: Optional[int] = None
    ) -> ChunkResult:
        """
        Append a chunk.

        Args:
            data: Chunk bytes
            upload_id: Upload id, None for the first chunk
            offset: Offset the chunk starts at, None if not yet known

        Returns:
            ChunkAccepted or ChunkConflict
        """
        ...

    def commit(
        self,
        to_path: str,
        upload_id: str,
        overwrite: bool = False,
        parent_rev: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Commit an upload to its final path.

        Returns:
            Metadata of the created file
        """
        ...

"""
Chunked upload coordinator.

Uploads one byte stream as a sequence of append requests and commits it.
The server is the source of truth for the upload offset: when a send is
answered with a conflicting offset (e.g. the previous chunk arrived but its
acknowledgement was lost) the coordinator adopts the server's offset instead
of failing.

Not thread-safe. One upload() call per coordinator at a time; the byte
source has a single cursor.
"""
from typing import Optional, Callable, Dict, Any

from .models import (
    UploadSession,
    UploadProgress,
    ChunkAccepted,
    ChunkConflict,
    ChunkResult,
    DEFAULT_CHUNK_SIZE,
)
from .protocols import ByteSource, ChunkSenderProtocol
from ..exceptions import UploadStateError
from ..logging import get_logger

logger = get_logger('upload.coordinator')


class ChunkedUploadCoordinator:
    """
    Coordinates a resumable chunked upload.

    If upload() raises, offset and upload_id describe the last state the
    server acknowledged, and the chunk that was in flight is kept. Calling
    upload() again resumes from there.

    Example:
        >>> uploader = client.get_chunked_uploader(open('big.iso', 'rb'))
        >>> while True:
        ...     try:
        ...         uploader.upload()
        ...         break
        ...     except TransportError:
        ...         continue
        >>> uploader.finish('/big.iso')
    """

    def __init__(
        self,
        sender: ChunkSenderProtocol,
        source: ByteSource,
        total_size: Optional[int] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize coordinator.

        Args:
            sender: Performs the append and commit calls
            source: Sequential byte source, positioned at the first byte
            total_size: Bytes to upload (defaults to source.total_size)
            progress_callback: Called after every acknowledged chunk
        """
        if total_size is None:
            total_size = source.total_size

        self._sender = sender
        self._state = UploadSession(source=source, total_size=total_size)
        self._pending: Optional[bytes] = None
        self._consumed = 0
        self._progress = UploadProgress(total_bytes=total_size)
        self._progress_callback = progress_callback

    @property
    def state(self) -> UploadSession:
        return self._state

    @property
    def offset(self) -> int:
        """Bytes acknowledged by the server."""
        return self._state.offset

    @property
    def upload_id(self) -> Optional[str]:
        return self._state.upload_id

    @property
    def total_size(self) -> int:
        return self._state.total_size

    @property
    def progress(self) -> UploadProgress:
        return self._progress

    def upload(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Send chunks until the server has acknowledged total_size bytes.

        Chunks are strictly sequential: a chunk is only read and sent after
        the previous response has been processed.

        Args:
            chunk_size: Maximum bytes per request

        Raises:
            ApplicationError: For errors that are not offset conflicts, or a
                conflict that would require rewinding the source
            UploadStateError: If the source ends early or the server reports
                an impossible offset
            DropboxError: For any other failure
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        state = self._state
        total_mb = state.total_size / (1024 * 1024)
        logger.info(f"Uploading {total_mb:.2f} MB from offset {state.offset}")

        if state.total_size == 0 and state.upload_id is None:
            # still need an upload_id to commit
            self._send(b'')

        while state.offset < state.total_size:
            if self._pending is None:
                self._pending = self._read_next(chunk_size)
            self._send(self._pending)

        logger.info(f"All {state.total_size} bytes acknowledged (upload_id={state.upload_id})")

    def finish(
        self,
        to_path: str,
        overwrite: bool = False,
        parent_rev: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Commit the upload to to_path.

        Args:
            to_path: Destination path
            overwrite: Replace an existing file
            parent_rev: Revision the new contents are based on

        Returns:
            Metadata of the new file

        Raises:
            UploadStateError: If upload() has not completed
        """
        state = self._state
        if state.upload_id is None:
            raise UploadStateError("Cannot finish: no chunk has been accepted yet")
        if not state.is_complete:
            raise UploadStateError(
                f"Cannot finish: only {state.offset} of {state.total_size} bytes uploaded"
            )
        return self._sender.commit(to_path, state.upload_id, overwrite, parent_rev)

    def _read_next(self, chunk_size: int) -> bytes:
        """Read the next chunk from the source cursor."""
        state = self._state
        self._skip_to(state.offset)
        data = state.source.read(min(chunk_size, state.remaining))
        if not data:
            raise UploadStateError(
                f"Source ended at offset {state.offset} of {state.total_size}"
            )
        self._consumed += len(data)
        return data

    def _skip_to(self, offset: int) -> None:
        """Drop source bytes the server holds but this coordinator never sent."""
        while self._consumed < offset:
            skipped = self._state.source.read(min(DEFAULT_CHUNK_SIZE, offset - self._consumed))
            if not skipped:
                raise UploadStateError(
                    f"Source ended at {self._consumed} before server offset {offset}"
                )
            self._consumed += len(skipped)

    def _send(self, data: bytes) -> None:
        """Send one chunk and apply the response to the upload state."""
        state = self._state
        start = state.offset
        # offset is only known once the server issued an id or we resynced
        offset = start if (state.upload_id is not None or start) else None

        result = self._sender.send_chunk(data, state.upload_id, offset)
        self._progress.chunks_sent += 1
        self._adopt_upload_id(result)

        if isinstance(result, ChunkConflict):
            if result.offset <= start:
                logger.error(
                    f"Server offset {result.offset} is not ahead of local offset {start}"
                )
                if result.error is not None:
                    raise result.error
                raise UploadStateError(
                    f"Cannot rewind source from {start} to {result.offset}"
                )
            logger.info(f"Resynchronizing offset {start} -> {result.offset}")
            self._advance(result.offset)
            self._progress.resyncs += 1
        elif isinstance(result, ChunkAccepted):
            if data and result.offset == start:
                raise UploadStateError(
                    f"Server accepted chunk at {start} without advancing"
                )
            if result.offset != start + len(data):
                logger.warning(
                    f"Server offset {result.offset} differs from expected {start + len(data)}"
                )
            self._advance(result.offset)
        else:
            raise TypeError(f"Unexpected chunk result: {result!r}")

        acknowledged = state.offset - start
        if acknowledged < len(data):
            # server holds a prefix of the chunk; the tail is sent next
            self._pending = data[acknowledged:]
        else:
            self._pending = None
        self._notify()

    def _advance(self, new_offset: int) -> None:
        state = self._state
        if new_offset < state.offset:
            raise UploadStateError(
                f"Server offset {new_offset} went backwards from {state.offset}"
            )
        if new_offset > state.total_size:
            raise UploadStateError(
                f"Server offset {new_offset} exceeds total size {state.total_size}"
            )
        state.offset = new_offset

    def _adopt_upload_id(self, result: ChunkResult) -> None:
        state = self._state
        if state.upload_id is None and result.upload_id:
            state.upload_id = result.upload_id
            logger.debug(f"Upload id assigned: {result.upload_id}")

    def _notify(self) -> None:
        self._progress.uploaded_bytes = self._state.offset
        if self._progress_callback:
            self._progress_callback(self._progress)

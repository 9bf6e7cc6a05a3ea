"""
Upload module for Dropbox chunked uploads.

Large files are sent as sequential chunks tracked by a server-issued upload
id and byte offset, then committed to their destination path.
"""
from .coordinator import ChunkedUploadCoordinator
from .models import (
    UploadSession,
    UploadProgress,
    ChunkAccepted,
    ChunkConflict,
    DEFAULT_CHUNK_SIZE,
)
from .protocols import ByteSource, ChunkSenderProtocol
from .services import ChunkUploader, FileByteSource, BytesSource, FileValidator

__all__ = [
    # Main classes
    'ChunkedUploadCoordinator',
    'ChunkUploader',

    # Sources
    'FileByteSource',
    'BytesSource',
    'FileValidator',

    # Models
    'UploadSession',
    'UploadProgress',
    'ChunkAccepted',
    'ChunkConflict',
    'DEFAULT_CHUNK_SIZE',

    # Protocols
    'ByteSource',
    'ChunkSenderProtocol',
]

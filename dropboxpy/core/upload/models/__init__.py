"""Upload models."""
from .upload_models import (
    UploadSession,
    ChunkAccepted,
    ChunkConflict,
    ChunkResult,
    UploadProgress,
    DEFAULT_CHUNK_SIZE,
)

__all__ = [
    'UploadSession',
    'ChunkAccepted',
    'ChunkConflict',
    'ChunkResult',
    'UploadProgress',
    'DEFAULT_CHUNK_SIZE',
]

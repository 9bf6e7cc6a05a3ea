"""Upload services module."""
from .file_service import FileValidator, FileByteSource, BytesSource, remaining_length
from .chunk_service import ChunkUploader

__all__ = [
    'FileValidator',
    'FileByteSource',
    'BytesSource',
    'remaining_length',
    'ChunkUploader',
]

"""Tests for upload models."""
import pytest

from dropboxpy.core.upload import UploadSession, UploadProgress, ChunkAccepted, ChunkConflict


class TestUploadSession:
    """Test suite for UploadSession."""

    def test_defaults(self):
        session = UploadSession(source=None, total_size=10)

        assert session.upload_id is None
        assert session.offset == 0
        assert session.remaining == 10
        assert not session.is_complete

    def test_empty_upload_is_complete(self):
        assert UploadSession(source=None, total_size=0).is_complete

    def test_negative_size(self):
        with pytest.raises(ValueError):
            UploadSession(source=None, total_size=-1)

    def test_offset_out_of_range(self):
        with pytest.raises(ValueError):
            UploadSession(source=None, total_size=5, offset=6)


class TestUploadProgress:
    """Test suite for UploadProgress."""

    def test_percentage(self):
        assert UploadProgress(uploaded_bytes=25, total_bytes=100).percentage == 25.0

    def test_percentage_empty(self):
        assert UploadProgress().percentage == 100.0


class TestChunkResults:

    def test_results_are_immutable(self):
        result = ChunkAccepted(offset=4, upload_id='u1')

        with pytest.raises(AttributeError):
            result.offset = 8

    def test_conflict_keeps_error(self):
        assert ChunkConflict(offset=4).error is None

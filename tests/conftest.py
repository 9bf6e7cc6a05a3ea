"""Pytest fixtures for dropboxpy tests."""
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest

from dropboxpy.core.api.transport import HTTPResponse
from dropboxpy.core.auth import AuthSession
from dropboxpy.core.exceptions import ApplicationError, TransportError
from dropboxpy.core.upload.models import ChunkAccepted, ChunkConflict


@dataclass
class RecordedRequest:
    """A request seen by FakeTransport."""
    method: str
    url: str
    headers: Dict[str, str]
    body: Any


class FakeTransport:
    """
    In-memory transport.

    Returns queued responses in order; a queued exception is raised instead.
    """

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.requests: List[RecordedRequest] = []

    def queue(self, *responses) -> 'FakeTransport':
        self.responses.extend(responses)
        return self

    def request(self, method, url, headers=None, body=None) -> HTTPResponse:
        self.requests.append(RecordedRequest(method, url, dict(headers or {}), body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        pass


class FakeChunkServer:
    """
    Simulates the server side of the chunked upload protocol.

    Appends a chunk only when it starts at the server's offset, otherwise
    answers with the server's offset. Call indexes listed in lose_ack are
    stored but answered with a TransportError, as if the acknowledgement
    never arrived. Call indexes in truncate map to the number of bytes
    stored before the connection drops.
    """

    def __init__(self, upload_id: str = 'upload-1'):
        self.upload_id = upload_id
        self.received = bytearray()
        self.calls: List[tuple] = []
        self.lose_ack = set()
        self.truncate = {}
        self.committed: Optional[dict] = None

    def send_chunk(self, data, upload_id=None, offset=None):
        index = len(self.calls)
        self.calls.append((len(data), upload_id, offset))

        start = offset if offset is not None else 0
        if start != len(self.received):
            server_offset = len(self.received)
            error = ApplicationError(
                'Submitted input out of alignment',
                offset=server_offset,
                upload_id=self.upload_id
            )
            return ChunkConflict(offset=server_offset, upload_id=self.upload_id, error=error)

        if index in self.truncate:
            self.received += data[:self.truncate[index]]
            raise TransportError('Connection reset by peer')

        self.received += data
        if index in self.lose_ack:
            raise TransportError('The read operation timed out')
        return ChunkAccepted(offset=len(self.received), upload_id=self.upload_id)

    def commit(self, to_path, upload_id, overwrite=False, parent_rev=None):
        self.committed = {
            'to_path': to_path,
            'upload_id': upload_id,
            'overwrite': overwrite,
            'parent_rev': parent_rev,
        }
        return {'path': to_path, 'bytes': len(self.received), 'size': str(len(self.received))}


def make_json_response(status: int, data: Any, headers: Optional[dict] = None) -> HTTPResponse:
    return HTTPResponse(
        status=status,
        body=json.dumps(data).encode('utf-8'),
        headers=headers or {'Content-Type': 'application/json'},
        reason='OK' if status < 300 else 'Error'
    )


def make_form_response(body: str, status: int = 200) -> HTTPResponse:
    return HTTPResponse(status=status, body=body.encode('utf-8'), reason='OK' if status < 300 else 'Unauthorized')


@pytest.fixture
def fake_transport():
    """Transport with an empty response queue."""
    return FakeTransport()


@pytest.fixture
def json_response():
    """Factory for JSON responses."""
    return make_json_response


@pytest.fixture
def form_response():
    """Factory for URL-encoded form responses (handshake)."""
    return make_form_response


@pytest.fixture
def chunk_server():
    """Simulated chunked upload server."""
    return FakeChunkServer()


@pytest.fixture
def auth_session(fake_transport):
    """Unauthorized session on the fake transport."""
    return AuthSession('app-key', 'app-secret', transport=fake_transport)


@pytest.fixture
def authorized_session(fake_transport):
    """Session holding an access token, on the fake transport."""
    return AuthSession.from_access_token(
        'app-key', 'app-secret', 'access-key', 'access-secret',
        transport=fake_transport
    )

"""
Chunk upload service.

Handles the two HTTP calls of the chunked upload protocol: appending one
chunk and committing the finished upload.
"""
import time
from typing import Optional, Dict, Any

from ..models import ChunkAccepted, ChunkConflict, ChunkResult
from ...api.params import CommitOptions
from ...api.request import RequestBuilder, ResponseHandler
from ...exceptions import ApplicationError, MalformedResponse
from ...logging import get_logger
from ...path import format_path


class ChunkUploader:
    """
    Sends chunks to the chunked_upload endpoint.

    Responsibilities:
    - Build and sign append / commit requests
    - Turn responses into ChunkAccepted or ChunkConflict
    - Raise every other error unchanged
    """

    def __init__(self, session, root: str = 'sandbox', locale: Optional[str] = None):
        """
        Initialize chunk uploader.

        Args:
            session: Authorized AuthSession
            root: URL root component ('sandbox' or 'dropbox')
            locale: Locale appended to API URLs
        """
        self._session = session
        self._root = root
        self._builder = RequestBuilder(session.config, locale)
        self._logger = get_logger('upload.chunk')

    def send_chunk(
        self,
        data: bytes,
        upload_id: Optional[str] = None,
        offset: Optional[int] = None
    ) -> ChunkResult:
        """
        Append one chunk.

        Args:
            data: Chunk bytes
            upload_id: Upload id from a previous response
            offset: Offset the chunk starts at

        Returns:
            ChunkAccepted on success, ChunkConflict when the server reports
            a different offset

        Raises:
            ApplicationError: For application errors without an offset
            DropboxError: For any other failure
        """
        params = {}
        if upload_id is not None:
            params['upload_id'] = upload_id
        if offset is not None:
            params['offset'] = str(offset)

        url = self._builder.build_url('/chunked_upload', params, content_server=True)
        headers = self._builder.build_headers('application/octet-stream')

        start = time.time()
        self._logger.debug(f"Sending chunk: offset={offset} size={len(data)} upload_id={upload_id}")
        response = self._session.request('PUT', url, headers=headers, body=data)

        try:
            body = ResponseHandler.parse_response(response)
        except ApplicationError as e:
            if e.offset is None:
                raise
            self._logger.info(f"Server reports offset {e.offset} (sent {offset})")
            return ChunkConflict(offset=e.offset, upload_id=e.upload_id, error=e)

        try:
            result = ChunkAccepted(offset=int(body['offset']), upload_id=body.get('upload_id'))
        except (KeyError, TypeError, ValueError, AttributeError):
            raise MalformedResponse(
                f"Invalid chunked_upload response: {response.text}",
                response=response
            )

        elapsed = time.time() - start
        self._logger.debug(f"Chunk accepted in {elapsed:.2f}s, server offset {result.offset}")
        return result

    def commit(
        self,
        to_path: str,
        upload_id: str,
        overwrite: bool = False,
        parent_rev: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Commit the uploaded bytes to a path.

        Args:
            to_path: Destination path
            upload_id: Upload id of the finished upload
            overwrite: Replace an existing file instead of renaming
            parent_rev: Revision the upload is based on

        Returns:
            Metadata of the committed file
        """
        options = CommitOptions(upload_id=upload_id, overwrite=overwrite, parent_rev=parent_rev)
        url = self._builder.build_url(
            f"/commit_chunked_upload/{self._root}{format_path(to_path)}",
            content_server=True
        )
        self._logger.info(f"Committing upload {upload_id} to {to_path}")
        response = self._session.request('POST', url, body=options.to_params())
        return ResponseHandler.parse_response(response)

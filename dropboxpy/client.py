"""
DropboxClient - High-level client for the Dropbox API.

Example:
    >>> session = AuthSession.deserialize(open('session.yaml').read())
    >>> client = DropboxClient(session)
    >>> client.put_file('/notes.txt', b'hello')
    >>> for entry in client.metadata('/')['contents']:
    ...     print(entry['path'])
"""
from typing import Optional, Dict, Any, Tuple, Union, BinaryIO, Callable

from .core.api.params import PutFileOptions, MetadataQuery, SearchQuery
from .core.api.request import RequestBuilder, ResponseHandler
from .core.api.transport import HTTPResponse
from .core.auth import AuthSession
from .core.exceptions import DropboxError, NotModified
from .core.logging import get_logger
from .core.path import format_path
from .core.upload import (
    ChunkedUploadCoordinator,
    ChunkUploader,
    ByteSource,
    BytesSource,
    FileByteSource,
    UploadProgress,
    ChunkAccepted,
    ChunkConflict,
)

logger = get_logger('client')

ROOTS = {
    'dropbox': 'dropbox',
    # "App Folder" access type; the URL root is historically "sandbox"
    'app_folder': 'sandbox',
}


class DropboxClient:
    """
    Client for the Dropbox REST API.

    Every call is one signed request whose response goes through
    ResponseHandler; errors are raised as DropboxError subclasses.
    """

    def __init__(
        self,
        session: AuthSession,
        root: str = 'app_folder',
        locale: Optional[str] = None
    ):
        """
        Initialize client.

        The session is authorized on construction: if it has no access
        token yet, its approved request token is exchanged for one.

        Args:
            session: AuthSession with an access token or an approved request token
            root: 'app_folder' or 'dropbox', depending on the app access type
            locale: Locale for translated server messages

        Raises:
            DropboxError: If root is invalid
            AuthProtocolError: If the session cannot be authorized
        """
        root = str(root)
        if root not in ROOTS:
            raise DropboxError("root must be 'dropbox' or 'app_folder'")

        session.exchange_for_access_token()

        self._session = session
        self._root = ROOTS[root]
        self._locale = locale
        self._builder = RequestBuilder(session.config, locale)
        self._chunks = ChunkUploader(session, self._root, locale)

    @property
    def session(self) -> AuthSession:
        return self._session

    @property
    def root(self) -> str:
        """URL root component ('sandbox' or 'dropbox')."""
        return self._root

    # Helpers

    def _url(self, path: str, params: Optional[Dict[str, str]] = None, content_server: bool = False) -> str:
        return self._builder.build_url(path, params, content_server)

    def _root_path(self, endpoint: str, path: str) -> str:
        return f"/{endpoint}/{self._root}{format_path(path)}"

    def _get(self, url: str) -> HTTPResponse:
        return self._session.request('GET', url)

    def _post(self, url: str, params: Optional[Dict[str, str]] = None) -> HTTPResponse:
        return self._session.request('POST', url, body=params)

    # Account

    def account_info(self) -> Dict[str, Any]:
        """Returns information about the user's account."""
        response = self._get(self._url('/account/info'))
        return ResponseHandler.parse_response(response)

    # Files

    def put_file(
        self,
        to_path: str,
        file_obj: Union[bytes, BinaryIO],
        overwrite: bool = False,
        parent_rev: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Upload a small file in a single request.

        Use get_chunked_uploader() for large files.

        Args:
            to_path: Destination path
            file_obj: bytes or a binary file object
            overwrite: Replace an existing file instead of renaming
            parent_rev: Revision the new contents are based on

        Returns:
            Metadata of the uploaded file
        """
        options = PutFileOptions(overwrite=overwrite, parent_rev=parent_rev)
        url = self._url(self._root_path('files_put', to_path), options.to_params(), content_server=True)
        headers = self._builder.build_headers('application/octet-stream')
        logger.info(f"Uploading {to_path}")
        response = self._session.request('PUT', url, headers=headers, body=file_obj)
        return ResponseHandler.parse_response(response)

    def get_file(self, from_path: str, rev: Optional[str] = None) -> bytes:
        """Download a file's contents."""
        response = self._get_file_impl(from_path, rev)
        return ResponseHandler.parse_response(response, raw=True)

    def get_file_and_metadata(self, from_path: str, rev: Optional[str] = None) -> Tuple[bytes, Dict[str, Any]]:
        """Download a file's contents together with its metadata."""
        response = self._get_file_impl(from_path, rev)
        contents = ResponseHandler.parse_response(response, raw=True)
        return contents, ResponseHandler.parse_metadata(response)

    def _get_file_impl(self, from_path: str, rev: Optional[str] = None) -> HTTPResponse:
        params = {'rev': str(rev)} if rev else None
        return self._get(self._url(self._root_path('files', from_path), params, content_server=True))

    # Chunked uploads

    def get_chunked_uploader(
        self,
        file_obj: Union[bytes, BinaryIO, ByteSource],
        total_size: Optional[int] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> ChunkedUploadCoordinator:
        """
        Create a coordinator for a resumable chunked upload.

        Args:
            file_obj: bytes, a binary file object or a ByteSource
            total_size: Bytes to upload (inferred from file_obj when omitted)
            progress_callback: Called after every acknowledged chunk

        Returns:
            ChunkedUploadCoordinator; call upload() then finish()
        """
        if isinstance(file_obj, (bytes, bytearray)):
            source = BytesSource(bytes(file_obj))
        elif isinstance(file_obj, ByteSource):
            source = file_obj
        else:
            source = FileByteSource(file_obj, total_size)
        return ChunkedUploadCoordinator(self._chunks, source, total_size, progress_callback)

    def partial_chunked_upload(
        self,
        data: bytes,
        upload_id: Optional[str] = None,
        offset: Optional[int] = None
    ) -> Union[ChunkAccepted, ChunkConflict]:
        """Append one chunk (low level; see get_chunked_uploader)."""
        return self._chunks.send_chunk(data, upload_id, offset)

    def commit_chunked_upload(
        self,
        to_path: str,
        upload_id: str,
        overwrite: bool = False,
        parent_rev: Optional[str] = None
    ) -> Dict[str, Any]:
        """Commit a finished chunked upload (low level; see get_chunked_uploader)."""
        return self._chunks.commit(to_path, upload_id, overwrite, parent_rev)

    # File operations

    def file_copy(self, from_path: str, to_path: str) -> Dict[str, Any]:
        """Copy a file or folder to a new location."""
        params = {
            'root': self._root,
            'from_path': format_path(from_path, False),
            'to_path': format_path(to_path, False),
        }
        return ResponseHandler.parse_response(self._post(self._url('/fileops/copy'), params))

    def file_create_folder(self, path: str) -> Dict[str, Any]:
        """Create a folder."""
        params = {'root': self._root, 'path': format_path(path, False)}
        return ResponseHandler.parse_response(self._post(self._url('/fileops/create_folder'), params))

    def file_delete(self, path: str) -> Dict[str, Any]:
        """Delete a file or folder."""
        params = {'root': self._root, 'path': format_path(path, False)}
        return ResponseHandler.parse_response(self._post(self._url('/fileops/delete'), params))

    def file_move(self, from_path: str, to_path: str) -> Dict[str, Any]:
        """Move a file or folder to a new location."""
        params = {
            'root': self._root,
            'from_path': format_path(from_path, False),
            'to_path': format_path(to_path, False),
        }
        return ResponseHandler.parse_response(self._post(self._url('/fileops/move'), params))

    # Metadata

    def metadata(
        self,
        path: str,
        file_limit: int = 25000,
        list: bool = True,
        hash: Optional[str] = None,
        rev: Optional[str] = None,
        include_deleted: bool = False
    ) -> Dict[str, Any]:
        """
        Retrieve metadata for a file or folder.

        Args:
            path: File or folder path
            file_limit: Maximum number of folder entries
            list: Include folder contents
            hash: Hash from a previous call; unchanged folders raise NotModified
            rev: Revision of a file
            include_deleted: Include deleted entries

        Raises:
            NotModified: If hash matches the current folder state
        """
        query = MetadataQuery(
            file_limit=file_limit,
            list=list,
            hash=hash,
            rev=rev,
            include_deleted=include_deleted
        )
        response = self._get(self._url(self._root_path('metadata', path), query.to_params()))
        if 300 <= response.status < 400:
            raise NotModified("metadata not modified", response=response)
        return ResponseHandler.parse_response(response)

    def search(
        self,
        path: str,
        query: str,
        file_limit: int = 1000,
        include_deleted: bool = False
    ) -> Any:
        """Search a folder (recursively) for entries whose name contains query."""
        search = SearchQuery(query=query, file_limit=file_limit, include_deleted=include_deleted)
        response = self._get(self._url(self._root_path('search', path), search.to_params()))
        return ResponseHandler.parse_response(response)

    def revisions(self, path: str, rev_limit: int = 1000) -> Any:
        """List the revisions of a file."""
        params = {'rev_limit': str(rev_limit)}
        response = self._get(self._url(self._root_path('revisions', path), params))
        return ResponseHandler.parse_response(response)

    def restore(self, path: str, rev: str) -> Dict[str, Any]:
        """Restore a file to a previous revision."""
        params = {'rev': str(rev)}
        response = self._post(self._url(self._root_path('restore', path)), params)
        return ResponseHandler.parse_response(response)

    # Links

    def media(self, path: str) -> Dict[str, Any]:
        """Temporary direct link for streaming a file."""
        return ResponseHandler.parse_response(self._get(self._url(self._root_path('media', path))))

    def shares(self, path: str) -> Dict[str, Any]:
        """Shareable link to a file or folder."""
        return ResponseHandler.parse_response(self._get(self._url(self._root_path('shares', path))))

    # Thumbnails

    def thumbnail(self, from_path: str, size: str = 'large') -> bytes:
        """Download a thumbnail of an image file."""
        return ResponseHandler.parse_response(self._thumbnail_impl(from_path, size), raw=True)

    def thumbnail_and_metadata(self, from_path: str, size: str = 'large') -> Tuple[bytes, Dict[str, Any]]:
        """Download a thumbnail together with the file's metadata."""
        response = self._thumbnail_impl(from_path, size)
        contents = ResponseHandler.parse_response(response, raw=True)
        return contents, ResponseHandler.parse_metadata(response)

    def _thumbnail_impl(self, from_path: str, size: str) -> HTTPResponse:
        url = self._url(self._root_path('thumbnails', from_path), {'size': size}, content_server=True)
        return self._get(url)

    # Sync

    def delta(self, cursor: Optional[str] = None) -> Dict[str, Any]:
        """
        Changes to the user's files since cursor.

        Applying the entries to a local copy is the caller's job.
        """
        params = {'cursor': cursor} if cursor else None
        return ResponseHandler.parse_response(self._post(self._url('/delta'), params))

    # Copy references

    def create_copy_ref(self, path: str) -> Dict[str, Any]:
        """Create a reference that add_copy_ref can copy from, even across accounts."""
        return ResponseHandler.parse_response(self._get(self._url(self._root_path('copy_ref', path))))

    def add_copy_ref(self, to_path: str, copy_ref: str) -> Dict[str, Any]:
        """Copy the file behind copy_ref to to_path."""
        params = {
            'from_copy_ref': copy_ref,
            'to_path': to_path,
            'root': self._root,
        }
        return ResponseHandler.parse_response(self._post(self._url('/fileops/copy'), params))

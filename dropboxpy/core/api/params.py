"""
Typed request parameters.

One dataclass per operation with optional query or form fields. Values are
validated on construction and rendered to the string form the API expects
by to_params().
"""
from dataclasses import dataclass
from typing import Dict, Optional


def _flag(value: bool) -> str:
    return 'true' if value else 'false'


@dataclass(frozen=True)
class PutFileOptions:
    """Options for files_put."""
    overwrite: bool = False
    parent_rev: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        params = {'overwrite': _flag(self.overwrite)}
        if self.parent_rev is not None:
            params['parent_rev'] = self.parent_rev
        return params


@dataclass(frozen=True)
class CommitOptions:
    """
    Options for commit_chunked_upload.

    parent_rev is always sent; an empty value means "no parent revision".
    """
    upload_id: str
    overwrite: bool = False
    parent_rev: Optional[str] = None

    def __post_init__(self):
        if not self.upload_id:
            raise ValueError("upload_id is required to commit a chunked upload")

    def to_params(self) -> Dict[str, str]:
        return {
            'overwrite': _flag(self.overwrite),
            'upload_id': self.upload_id,
            'parent_rev': self.parent_rev or '',
        }


@dataclass(frozen=True)
class MetadataQuery:
    """Query for the metadata endpoint."""
    file_limit: int = 25000
    list: bool = True
    hash: Optional[str] = None
    rev: Optional[str] = None
    include_deleted: bool = False

    def __post_init__(self):
        if self.file_limit <= 0:
            raise ValueError("file_limit must be positive")

    def to_params(self) -> Dict[str, str]:
        params = {
            'file_limit': str(self.file_limit),
            'list': _flag(self.list),
            'include_deleted': _flag(self.include_deleted),
        }
        if self.hash:
            params['hash'] = self.hash
        if self.rev:
            params['rev'] = self.rev
        return params


@dataclass(frozen=True)
class SearchQuery:
    """Query for the search endpoint."""
    query: str
    file_limit: int = 1000
    include_deleted: bool = False

    def __post_init__(self):
        if not self.query:
            raise ValueError("search query must not be empty")
        if self.file_limit <= 0:
            raise ValueError("file_limit must be positive")

    def to_params(self) -> Dict[str, str]:
        return {
            'query': self.query,
            'file_limit': str(self.file_limit),
            'include_deleted': _flag(self.include_deleted),
        }

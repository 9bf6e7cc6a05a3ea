"""Tests for typed request parameters."""
import pytest

from dropboxpy.core.api.params import PutFileOptions, CommitOptions, MetadataQuery, SearchQuery


class TestPutFileOptions:

    def test_defaults(self):
        assert PutFileOptions().to_params() == {'overwrite': 'false'}

    def test_parent_rev(self):
        params = PutFileOptions(overwrite=True, parent_rev='r1').to_params()

        assert params == {'overwrite': 'true', 'parent_rev': 'r1'}


class TestCommitOptions:

    def test_parent_rev_always_sent(self):
        assert CommitOptions('u1').to_params() == {
            'overwrite': 'false', 'upload_id': 'u1', 'parent_rev': ''
        }

    def test_upload_id_required(self):
        with pytest.raises(ValueError):
            CommitOptions('')


class TestMetadataQuery:

    def test_defaults(self):
        assert MetadataQuery().to_params() == {
            'file_limit': '25000', 'list': 'true', 'include_deleted': 'false'
        }

    def test_hash_and_rev(self):
        params = MetadataQuery(list=False, hash='h', rev='r').to_params()

        assert params['list'] == 'false'
        assert params['hash'] == 'h'
        assert params['rev'] == 'r'

    def test_limit_positive(self):
        with pytest.raises(ValueError):
            MetadataQuery(file_limit=0)


class TestSearchQuery:

    def test_params(self):
        assert SearchQuery('cat', file_limit=5).to_params() == {
            'query': 'cat', 'file_limit': '5', 'include_deleted': 'false'
        }

    def test_empty_query(self):
        with pytest.raises(ValueError):
            SearchQuery('')

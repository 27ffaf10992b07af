"""
In-memory fakes shared by the indexer tests

Nothing here talks to a real MongoDB or Elasticsearch.
"""
import json

import bson
from bson.raw_bson import RawBSONDocument

from mongo_indexer.exceptions import ElasticsearchException, IndexingError
from mongo_indexer.models import IndexResponse


def raw(document):
    """Encode a dict the way the source cursor hands it over"""
    return RawBSONDocument(bson.encode(document))


class FakeCursor:
    """Forward-only cursor that can fail after a number of documents"""

    def __init__(self, documents, error=None, fail_after=None):
        self._documents = list(documents)
        self._error = error
        self._fail_after = fail_after
        self._position = 0
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        if self._error is not None and self._position == self._fail_after:
            raise self._error
        if self._position >= len(self._documents):
            raise StopIteration
        document = self._documents[self._position]
        self._position += 1
        return document

    def close(self):
        self.closed = True


class FakeMongoDBService:
    database_name = "testdb"
    collection_name = "items"

    def __init__(self, documents=(), error=None, fail_after=None):
        self.documents = list(documents)
        self.error = error
        self.fail_after = fail_after
        self.cursors = []

    def count_documents(self):
        return len(self.documents)

    def iter_documents(self):
        cursor = FakeCursor(self.documents, self.error, self.fail_after)
        self.cursors.append(cursor)
        return cursor


class FakeElasticsearchService:
    """In-memory index keyed by document id"""

    def __init__(self, index_name="items", transport_errors=(), indexing_errors=()):
        self.index_name = index_name
        self.store = {}
        self.calls = []
        self.refreshes = 0
        self.transport_errors = set(transport_errors)
        self.indexing_errors = set(indexing_errors)

    def index_document(self, doc_id, body, refresh=None):
        self.calls.append(doc_id)
        if doc_id in self.transport_errors:
            raise ElasticsearchException(
                f"Error indexing document ID {doc_id}",
                original_error=ConnectionError("connection refused")
            )
        if doc_id in self.indexing_errors:
            raise IndexingError(
                "[400 Bad Request] mapper_parsing_exception: failed to parse field [price]",
                status_code=400,
                error_type="mapper_parsing_exception",
                reason="failed to parse field [price]",
                doc_id=doc_id
            )
        result = "updated" if doc_id in self.store else "created"
        self.store[doc_id] = json.loads(body)
        return IndexResponse(doc_id=doc_id, index=self.index_name, result=result, status_code=200)

    def refresh_index(self):
        self.refreshes += 1
        return True

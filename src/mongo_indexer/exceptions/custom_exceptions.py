"""
Custom exception classes for the MongoDB to Elasticsearch indexer
"""
from typing import Optional


class IndexerException(Exception):
    """Base exception for the indexer"""
    def __init__(self, message: str, original_error: Exception = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self):
        if self.original_error is not None:
            return f"{self.message}: {self.original_error}"
        return self.message


class ConfigurationException(IndexerException):
    """Raised when required settings are missing or malformed"""
    pass


class MongoDBException(IndexerException):
    """Exception raised while connecting to or querying MongoDB"""
    pass


class CursorException(MongoDBException):
    """Raised when the source cursor fails while being iterated"""
    pass


class ElasticsearchException(IndexerException):
    """Exception raised during Elasticsearch operations (transport level)"""
    pass


class IndexingError(ElasticsearchException):
    """Error reported by Elasticsearch inside a write response"""
    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: Optional[str] = None,
        reason: Optional[str] = None,
        doc_id: Optional[str] = None
    ):
        self.status_code = status_code
        self.error_type = error_type
        self.reason = reason
        self.doc_id = doc_id
        super().__init__(message)


class DocumentTransformException(IndexerException):
    """Base for per-document transform failures"""
    def __init__(self, message: str, original_error: Exception = None, doc_id: Optional[str] = None):
        self.doc_id = doc_id
        super().__init__(message, original_error=original_error)


class DocumentDecodeException(DocumentTransformException):
    """Raw BSON could not be decoded"""
    pass


class InvalidIdentifierException(DocumentTransformException):
    """_id is missing or is not an ObjectId"""
    pass


class SerializationException(DocumentTransformException):
    """Document body could not be encoded as JSON"""
    pass

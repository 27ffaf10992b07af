"""Custom exceptions for the indexer"""

from .custom_exceptions import (
    IndexerException,
    ConfigurationException,
    MongoDBException,
    CursorException,
    ElasticsearchException,
    IndexingError,
    DocumentTransformException,
    DocumentDecodeException,
    InvalidIdentifierException,
    SerializationException
)

__all__ = [
    "IndexerException",
    "ConfigurationException",
    "MongoDBException",
    "CursorException",
    "ElasticsearchException",
    "IndexingError",
    "DocumentTransformException",
    "DocumentDecodeException",
    "InvalidIdentifierException",
    "SerializationException"
]

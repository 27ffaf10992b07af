"""
MongoDB service: source connection, liveness check and full-collection cursor
"""
import logging
from typing import Optional

from bson.codec_options import CodecOptions
from bson.raw_bson import RawBSONDocument
from pymongo import MongoClient
from pymongo.errors import ConfigurationError, PyMongoError

from ..exceptions import MongoDBException


logger = logging.getLogger(__name__)


class MongoDBService:
    """Read-only access to a single MongoDB collection"""

    def __init__(
        self,
        uri: str,
        database_name: str,
        collection_name: str
    ):
        self.uri = uri
        self.database_name = database_name
        self.collection_name = collection_name
        self.client: Optional[MongoClient] = None

    def connect(self) -> MongoClient:
        """
        Create the MongoDB client

        Returns:
            MongoClient: The connected client

        Raises:
            MongoDBException: If the URI is malformed or the driver rejects it
        """
        try:
            self.client = MongoClient(self.uri)
        except (ConfigurationError, PyMongoError, ValueError, TypeError) as e:
            raise MongoDBException("Error connecting to MongoDB", original_error=e)
        return self.client

    def verify(self) -> bool:
        """
        Ping the server to verify the connection

        Raises:
            MongoDBException: If the ping fails
        """
        if self.client is None:
            raise MongoDBException("MongoDB client is not connected")
        try:
            self.client.admin.command("ping")
        except PyMongoError as e:
            raise MongoDBException("Error pinging MongoDB", original_error=e)
        logger.info("Connected to MongoDB!")
        return True

    @property
    def collection(self):
        """Source collection, returning documents as raw BSON"""
        if self.client is None:
            raise MongoDBException("MongoDB client is not connected")
        return self.client[self.database_name].get_collection(
            self.collection_name,
            codec_options=CodecOptions(document_class=RawBSONDocument)
        )

    def iter_documents(self):
        """
        Query every document in the collection (empty filter)

        Returns:
            Cursor: Lazy, forward-only cursor of RawBSONDocument

        Raises:
            MongoDBException: If the query cannot be issued
        """
        try:
            return self.collection.find({})
        except PyMongoError as e:
            raise MongoDBException("Error finding documents", original_error=e)

    def count_documents(self) -> Optional[int]:
        """Estimated number of documents, or None if the server can't tell"""
        try:
            return self.collection.estimated_document_count()
        except PyMongoError as e:
            logger.warning(f"Could not count documents in {self.collection_name}: {e}")
            return None

    def close(self):
        """Close the client"""
        if self.client is not None:
            self.client.close()
            self.client = None
            logger.info("MongoDB connection closed")

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

"""Source and sink services for the indexer"""

from .mongodb_service import MongoDBService
from .elasticsearch_service import ElasticsearchService

__all__ = [
    "MongoDBService",
    "ElasticsearchService"
]

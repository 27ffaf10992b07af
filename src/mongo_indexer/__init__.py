"""
MongoDB to Elasticsearch indexer

Reads every document of a MongoDB collection and indexes it into an
Elasticsearch index, keyed by the document's ObjectId.
"""

from .config import IndexerConfig
from .pipeline.indexing_pipeline import IndexingPipeline
from .models.schemas import (
    DocumentStatus,
    DocumentResult,
    IndexingSummary,
    IndexResponse
)

__version__ = "0.1.0"

__all__ = [
    "IndexerConfig",
    "IndexingPipeline",
    "DocumentStatus",
    "DocumentResult",
    "IndexingSummary",
    "IndexResponse"
]

"""Indexing pipeline"""

from .indexing_pipeline import IndexingPipeline, COMPLETION_MESSAGE

__all__ = [
    "IndexingPipeline",
    "COMPLETION_MESSAGE"
]

"""Pydantic models for the indexer"""

from .schemas import (
    DocumentStatus,
    IndexResponse,
    DocumentResult,
    IndexingSummary
)

__all__ = [
    "DocumentStatus",
    "IndexResponse",
    "DocumentResult",
    "IndexingSummary"
]

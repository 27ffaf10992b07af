"""
Pydantic models for per-document results and run summaries
"""
from typing import Optional
from pydantic import BaseModel
from enum import Enum


class DocumentStatus(str, Enum):
    """Outcome of a single loop iteration"""
    INDEXED = "indexed"
    SKIPPED = "skipped"
    FAILED = "failed"


class IndexResponse(BaseModel):
    """Successful write acknowledged by Elasticsearch"""
    doc_id: str
    index: str
    result: Optional[str] = None
    status_code: int
    version: Optional[int] = None


class DocumentResult(BaseModel):
    """Result of moving one document from MongoDB to Elasticsearch"""
    success: bool
    status: DocumentStatus
    doc_id: Optional[str] = None
    message: str
    error: Optional[str] = None
    result: Optional[str] = None

    class Config:
        use_enum_values = True


class IndexingSummary(BaseModel):
    """Aggregated counts for one run"""
    total: int = 0
    indexed: int = 0
    skipped: int = 0
    failed: int = 0
    processing_time: float = 0.0

    @property
    def success_rate(self) -> float:
        return (self.indexed / self.total) * 100 if self.total else 0.0

    def add(self, result: DocumentResult) -> None:
        """Count a document result"""
        self.total += 1
        if result.status == DocumentStatus.INDEXED:
            self.indexed += 1
        elif result.status == DocumentStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1

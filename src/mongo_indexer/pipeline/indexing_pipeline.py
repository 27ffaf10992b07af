"""
Indexing pipeline: reads every document from MongoDB and writes it to Elasticsearch
"""
import logging
import time
from typing import Optional

from pymongo.errors import PyMongoError

from ..models.schemas import (
    DocumentResult,
    DocumentStatus,
    IndexingSummary
)
from ..services import MongoDBService, ElasticsearchService
from ..processors import DocumentTransformer
from ..exceptions import (
    CursorException,
    DocumentTransformException,
    ElasticsearchException,
    IndexingError
)


logger = logging.getLogger(__name__)

COMPLETION_MESSAGE = "Finished indexing data from MongoDB to Elasticsearch"


class IndexingPipeline:
    """Sequential MongoDB -> Elasticsearch copy of one collection"""

    def __init__(
        self,
        mongodb_service: MongoDBService,
        elasticsearch_service: ElasticsearchService,
        transformer: Optional[DocumentTransformer] = None,
        refresh_per_write: bool = True
    ):
        """
        Initialize indexing pipeline

        Args:
            mongodb_service: Connected and verified source service
            elasticsearch_service: Verified sink service
            transformer: Document transformer (default instance if omitted)
            refresh_per_write: False when writes don't refresh the index, in which
                case the index is refreshed once after the loop
        """
        self.mongodb_service = mongodb_service
        self.elasticsearch_service = elasticsearch_service
        self.transformer = transformer or DocumentTransformer()
        self.refresh_per_write = refresh_per_write

    def process_document(self, raw) -> DocumentResult:
        """
        Transform and index a single document

        Per-document failures are logged and returned as a result; they never raise.

        Args:
            raw: Document from the source cursor

        Returns:
            DocumentResult: Outcome of this iteration
        """
        try:
            doc_id, body = self.transformer.transform(raw)
        except DocumentTransformException as e:
            logger.error(str(e))
            return DocumentResult(
                success=False,
                status=DocumentStatus.SKIPPED,
                doc_id=e.doc_id,
                message="Document skipped",
                error=str(e)
            )

        try:
            response = self.elasticsearch_service.index_document(doc_id, body)
        except IndexingError as e:
            logger.error(f"{e} (document ID {doc_id})")
            return self._failed(doc_id, str(e))
        except ElasticsearchException as e:
            logger.error(str(e))
            return self._failed(doc_id, str(e))

        logger.info(f"Document ID {doc_id} indexed successfully.")
        return DocumentResult(
            success=True,
            status=DocumentStatus.INDEXED,
            doc_id=doc_id,
            message="Document indexed",
            result=response.result
        )

    def run(self) -> IndexingSummary:
        """
        Index every document of the source collection

        Returns:
            IndexingSummary: Counts for the run

        Raises:
            MongoDBException: If the query can't be issued
            CursorException: If the cursor fails while iterating
        """
        start_time = time.time()
        summary = IndexingSummary()

        expected = self.mongodb_service.count_documents()
        if expected is not None:
            logger.info(
                f"Indexing ~{expected} documents from "
                f"{self.mongodb_service.database_name}.{self.mongodb_service.collection_name} "
                f"into {self.elasticsearch_service.index_name}"
            )

        cursor = self.mongodb_service.iter_documents()
        try:
            while True:
                try:
                    raw = next(cursor)
                except StopIteration:
                    break
                except PyMongoError as e:
                    raise CursorException("Error with cursor", original_error=e)
                summary.add(self.process_document(raw))
        finally:
            cursor.close()

        if not self.refresh_per_write and summary.indexed:
            if self.elasticsearch_service.refresh_index():
                logger.info(f"Refreshed index {self.elasticsearch_service.index_name}")
            else:
                logger.warning(f"Could not refresh index {self.elasticsearch_service.index_name}")

        summary.processing_time = time.time() - start_time
        self._log_summary(summary)
        logger.info(COMPLETION_MESSAGE)
        return summary

    def _failed(self, doc_id: str, error: str) -> DocumentResult:
        return DocumentResult(
            success=False,
            status=DocumentStatus.FAILED,
            doc_id=doc_id,
            message="Indexing failed",
            error=error
        )

    def _log_summary(self, summary: IndexingSummary):
        logger.info("=" * 60)
        logger.info("INDEXING SUMMARY")
        logger.info(f"Total Documents: {summary.total}")
        logger.info(f"Indexed: {summary.indexed}")
        logger.info(f"Skipped: {summary.skipped}")
        logger.info(f"Failed: {summary.failed}")
        logger.info(f"Success Rate: {summary.success_rate:.1f}%")
        logger.info(f"Total Time: {summary.processing_time:.2f}s")
        logger.info("=" * 60)

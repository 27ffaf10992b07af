"""
Elasticsearch service (minimal): info, single-document index and refresh via HTTP.
"""
import logging
from typing import Dict, Any, Optional
import requests

from ..models.schemas import IndexResponse
from ..exceptions import ElasticsearchException, IndexingError


logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ElasticsearchService:
    """Minimal Elasticsearch operations using HTTP requests"""

    def __init__(
        self,
        address: str,
        index_name: str,
        refresh: str = "true",
        timeout: float = 10.0
    ):
        if address.startswith("http://") or address.startswith("https://"):
            self.base_url = address.rstrip("/")
        else:
            self.base_url = f"http://{address.rstrip('/')}"
        self.index_name = index_name
        self.refresh = refresh
        self.timeout = timeout

    def verify(self) -> Dict[str, Any]:
        """
        Call the cluster info endpoint to verify the connection

        Returns:
            dict: Cluster info

        Raises:
            ElasticsearchException: If the cluster is unreachable or answers with an error
        """
        try:
            resp = requests.get(self.base_url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ElasticsearchException("Error pinging Elasticsearch", original_error=e)

        if not resp.ok:
            raise ElasticsearchException(
                f"Error pinging Elasticsearch: status={resp.status_code} body={resp.text}"
            )

        try:
            info = resp.json()
        except ValueError:
            info = {}
        if not isinstance(info, dict):
            info = {}
        version = info.get("version")
        version = version.get("number", "unknown") if isinstance(version, dict) else "unknown"
        logger.info(f"Connected to Elasticsearch! cluster={info.get('cluster_name', 'unknown')} version={version}")
        return info

    def index_document(
        self,
        doc_id: str,
        body: bytes,
        refresh: Optional[str] = None
    ) -> IndexResponse:
        """
        Index (create or overwrite) one document under the given id

        Args:
            doc_id: Document id in the index
            body: JSON encoded document body
            refresh: Refresh option for this write; defaults to the service setting

        Returns:
            IndexResponse: Parsed acknowledgement

        Raises:
            ElasticsearchException: On transport failure
            IndexingError: If Elasticsearch reports an error for the write
        """
        url = f"{self.base_url}/{self.index_name}/_doc/{doc_id}"
        params = {"refresh": refresh or self.refresh}
        try:
            resp = requests.put(
                url,
                data=body,
                params=params,
                headers=JSON_HEADERS,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ElasticsearchException(f"Error indexing document ID {doc_id}", original_error=e)

        if not resp.ok:
            raise self._indexing_error(resp, doc_id)

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        return IndexResponse(
            doc_id=data.get("_id", doc_id),
            index=data.get("_index", self.index_name),
            result=data.get("result"),
            status_code=resp.status_code,
            version=data.get("_version")
        )

    def refresh_index(self) -> bool:
        """
        Refresh the index to make recent changes searchable.

        Returns:
            bool: True if refresh succeeded.
        """
        try:
            resp = requests.post(f"{self.base_url}/{self.index_name}/_refresh", timeout=self.timeout)
            return resp.status_code in (200, 201)
        except requests.RequestException as e:
            logger.warning(f"Index refresh failed: {repr(e)}")
            return False

    def _indexing_error(self, resp: requests.Response, doc_id: str) -> IndexingError:
        status = f"{resp.status_code} {resp.reason or ''}".strip()
        try:
            error = resp.json()["error"]
            if isinstance(error, dict):
                error_type = error.get("type")
                reason = error.get("reason")
            else:
                error_type, reason = None, str(error)
        except (ValueError, KeyError, TypeError):
            return IndexingError(
                f"[{status}] Error parsing the response body: {resp.text}",
                status_code=resp.status_code,
                doc_id=doc_id
            )
        return IndexingError(
            f"[{status}] {error_type}: {reason}",
            status_code=resp.status_code,
            error_type=error_type,
            reason=reason,
            doc_id=doc_id
        )

"""
Firestore Extractor

Reads the club's player and match documents through the Firestore REST
API. Read-only.
"""

from typing import Any, Optional
from urllib.parse import quote

from core.resilience import ClientError, firestore_circuit, resilient_request, with_retry
from core.settings import settings
from pipelines.extractors.base import BaseExtractor
from pipelines.transformers.documents import decode_document, decode_fields


FIRESTORE_DOCUMENTS_ENDPOINT = "{}/projects/{}/databases/{}/documents"


class FirestoreExtractor(BaseExtractor):
    """
    Extractor for the Firestore REST API.

    Collections are read page by page; point lookups map HTTP 404 to None
    since a missing history snapshot is a normal state.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        database: Optional[str] = None,
        api_key: Optional[str] = None,
        page_size: Optional[int] = None,
    ):
        super().__init__("firestore")
        self.project_id = project_id or settings.firestore_project_id
        self.database = database or settings.firestore_database
        if api_key is None and settings.firestore_api_key is not None:
            api_key = settings.firestore_api_key.get_secret_value()
        self.api_key = api_key
        self.page_size = page_size or settings.firestore_page_size
        self.endpoint = FIRESTORE_DOCUMENTS_ENDPOINT.format(
            settings.firestore_base_url.rstrip("/"), self.project_id, self.database
        )

    def _url(self, path: str) -> str:
        return f"{self.endpoint}/{quote(path.strip('/'), safe='/')}"

    def _params(self, **extra: Any) -> dict[str, Any]:
        params = {k: v for k, v in extra.items() if v is not None}
        if self.api_key:
            params["key"] = self.api_key
        return params

    @with_retry(
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay,
        max_delay=settings.retry_max_delay,
    )
    @firestore_circuit
    def _get_page(self, collection: str, page_token: Optional[str]) -> dict[str, Any]:
        response = resilient_request(
            "GET",
            self._url(collection),
            timeout=settings.http_timeout,
            params=self._params(pageSize=self.page_size, pageToken=page_token),
        )
        return response.json()

    def list_collection(self, collection: str) -> dict[str, dict[str, Any]]:
        """
        Read every document of a collection, following page tokens.

        Returns:
            Dict mapping document id to decoded fields, in store order
        """
        self.log.debug("collection_read_start", collection=collection)

        documents: dict[str, dict[str, Any]] = {}
        page_token: Optional[str] = None
        pages = 0
        while True:
            page = self._get_page(collection, page_token)
            pages += 1
            for raw in page.get("documents", []):
                doc_id, fields = decode_document(raw)
                documents[doc_id] = fields
            page_token = page.get("nextPageToken")
            if not page_token:
                break

        self.log.info(
            "collection_read_complete",
            collection=collection,
            document_count=len(documents),
            pages=pages,
        )
        return documents

    @with_retry(
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay,
        max_delay=settings.retry_max_delay,
    )
    @firestore_circuit
    def get_document(self, path: str) -> Optional[dict[str, Any]]:
        """
        Read one document.

        Returns:
            Decoded fields, or None if the document does not exist
        """
        try:
            response = resilient_request(
                "GET",
                self._url(path),
                timeout=settings.http_timeout,
                params=self._params(),
            )
        except ClientError as e:
            if e.is_not_found:
                return None
            raise

        return decode_fields(response.json().get("fields", {}))

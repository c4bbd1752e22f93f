"""
Eitango – Remote vocabulary source
===================================
Fetches a bounded snapshot of the cloud vocabulary collection from an
Appwrite-compatible document REST API.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from core.config import settings
from core.errors import FetchError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteVocabularyRecord:
    """One document as it came over the wire. ``None`` means the field was absent."""
    id: str
    english: Optional[Any]
    japanese: Optional[Any]


def _query(method: str, **kw: Any) -> str:
    return json.dumps({"method": method, **kw}, separators=(",", ":"))


def parse_documents(payload: Any) -> List[RemoteVocabularyRecord]:
    """Turn a ``listDocuments`` response body into records."""
    if not isinstance(payload, dict) or not isinstance(payload.get("documents"), list):
        raise FetchError("malformed response: no documents list")

    records = []
    for doc in payload["documents"]:
        if not isinstance(doc, dict):
            raise FetchError("malformed response: document is not an object")
        records.append(RemoteVocabularyRecord(
            id=str(doc.get("$id", "")),
            english=doc.get("english"),
            japanese=doc.get("japanese"),
        ))
    return records


class RemoteVocabularySource:
    """HTTP client for the vocabulary collection."""

    def __init__(
        self,
        endpoint: str = settings.APPWRITE_ENDPOINT,
        project_id: str = settings.APPWRITE_PROJECT_ID,
        database_id: str = settings.APPWRITE_DATABASE_ID,
        collection_id: str = settings.APPWRITE_COLLECTION_ID,
        *,
        limit: int = settings.FETCH_LIMIT,
        timeout: float = settings.FETCH_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.database_id = database_id
        self.collection_id = collection_id
        self.limit = limit
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {"X-Appwrite-Project": project_id}

    @property
    def documents_url(self) -> str:
        return (
            f"{self.endpoint}/databases/{self.database_id}"
            f"/collections/{self.collection_id}/documents"
        )

    def fetch_snapshot(self) -> List[RemoteVocabularyRecord]:
        """Return up to ``limit`` records, ascending by english."""
        params = [
            ("queries[]", _query("limit", values=[self.limit])),
            ("queries[]", _query("orderAsc", attribute="english")),
        ]
        log.info("Fetching vocabulary from %s", self.documents_url)
        try:
            response = self._client.get(self.documents_url, params=params, headers=self._headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            log.warning("Remote returned HTTP %d", exc.response.status_code)
            raise FetchError(f"remote returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            log.warning("Fetch failed: %s", exc)
            raise FetchError(f"could not reach remote: {exc}") from exc
        except ValueError as exc:
            raise FetchError("malformed response: body is not JSON") from exc

        records = parse_documents(payload)
        log.info("Received %d documents", len(records))
        return records

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "RemoteVocabularySource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

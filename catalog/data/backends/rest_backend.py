from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from catalog.errors import RecordStoreError
from catalog.logging import get_logger

from ..interface import RecordStore
from ..models import ListRequest, RecordResponse

logger = get_logger(__name__)


class RestRecordStore(RecordStore):
    """
    Record store backed by the hosted record API (JSON over HTTPS).

    Each operation is a ``POST {api_url}/records/{action}`` whose body carries the
    collection as ``table``. The session is built once with the static credential
    and reused for every call; nothing is cached.
    """

    def __init__(self, api_url: str, session: requests.Session, timeout: float = 30.0) -> None:
        self.api_url = api_url.rstrip("/")
        self.session = session
        self.timeout = timeout

    # ---------- transport ----------

    def _post(self, action: str, body: Dict[str, Any]) -> RecordResponse:
        url = f"{self.api_url}/records/{action}"
        try:
            r = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise RecordStoreError(f"Record API request failed ({action}): {e}") from e

        try:
            payload = r.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            if not r.ok:
                raise RecordStoreError(f"Record API returned HTTP {r.status_code} ({action})", r.status_code)
            raise RecordStoreError(f"Record API returned a non-JSON body ({action})", r.status_code)

        try:
            response = RecordResponse.model_validate(payload)
        except ValidationError as e:
            raise RecordStoreError(f"Unexpected record API response ({action}): {e}", r.status_code) from e

        if not r.ok and response.status:
            # A failing HTTP status always wins over the body's success flag.
            response = response.model_copy(update={"status": False})
        logger.debug(f"POST {url} -> {r.status_code} status={response.status}")
        return response

    # ---------- interface implementation ----------

    def list_records(self, request: ListRequest) -> RecordResponse:
        return self._post("fetch-all", request.to_payload())

    def fetch_one_record(
        self,
        collection: str,
        where: Dict[str, Any],
        fields: Optional[List[str]] = None,
    ) -> RecordResponse:
        body: Dict[str, Any] = {"table": collection, "where": where}
        if fields:
            body["fields"] = fields
        return self._post("fetch-one", body)

    def create_records(
        self,
        collection: str,
        rows: List[Dict[str, Any]],
        upsert: bool = False,
        conflict_keys: Optional[List[str]] = None,
    ) -> RecordResponse:
        options: Dict[str, Any] = {"upsert": upsert}
        if conflict_keys:
            options["conflictKeys"] = conflict_keys
        return self._post("create", {"table": collection, "data": rows, "options": options})

    def update_records(
        self,
        collection: str,
        patch: Dict[str, Any],
        where: Dict[str, Any],
        validation_rules: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> RecordResponse:
        body: Dict[str, Any] = {"table": collection, "data": patch, "where": where}
        if validation_rules:
            body["options"] = {"validationRule": validation_rules}
        return self._post("update", body)

    def delete_records(self, collection: str, where: Dict[str, Any]) -> RecordResponse:
        return self._post("delete", {"table": collection, "where": where})

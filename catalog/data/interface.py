from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .models import ListRequest, RecordResponse


# ---- Record store protocol ----

class RecordStore(Protocol):
    """
    Backend-agnostic contract for the catalog UI.

    Every call returns a RecordResponse; ``status`` False means the call failed,
    whatever ``message`` says. Implementations raise RecordStoreError only for
    transport failures they cannot express as a response.

    Implementations MUST NOT cache results: the UI re-fetches after every
    mutation and expects to see server truth.
    """

    def list_records(self, request: ListRequest) -> RecordResponse:
        """Fetch one page of records matching the request."""
        ...

    def fetch_one_record(
        self,
        collection: str,
        where: Dict[str, Any],
        fields: Optional[List[str]] = None,
    ) -> RecordResponse:
        """Fetch the first record matching ``where``."""
        ...

    def create_records(
        self,
        collection: str,
        rows: List[Dict[str, Any]],
        upsert: bool = False,
        conflict_keys: Optional[List[str]] = None,
    ) -> RecordResponse:
        """Insert rows, replacing rows with the same conflict keys when ``upsert``."""
        ...

    def update_records(
        self,
        collection: str,
        patch: Dict[str, Any],
        where: Dict[str, Any],
        validation_rules: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> RecordResponse:
        """Apply ``patch`` to every record matching ``where``."""
        ...

    def delete_records(self, collection: str, where: Dict[str, Any]) -> RecordResponse:
        """Delete every record matching ``where``."""
        ...

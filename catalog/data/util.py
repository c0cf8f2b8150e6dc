from __future__ import annotations

from typing import Literal, Optional

from catalog.config import AppConfig, get_config

from .auth import get_record_api_auth
from .backends.pandas_backend import PandasRecordStore
from .backends.rest_backend import RestRecordStore
from .interface import RecordStore


def get_data_access(kind: Optional[Literal["rest", "local"]] = None, config: Optional[AppConfig] = None) -> RecordStore:
    """Construct the record store selected by ``kind`` (defaults to config.data_backend)."""
    config = config or get_config()
    kind = kind or config.data_backend
    if kind == "rest":
        session = get_record_api_auth(config).get_session()
        return RestRecordStore(config.catalog_api_url, session, timeout=config.request_timeout)
    if kind == "local":
        # Reads products.csv from the configured folder; mutations stay in memory
        return PandasRecordStore(data_dir=config.data_dir, collection=config.catalog_collection)
    raise ValueError(f"Unknown data access kind: {kind}")

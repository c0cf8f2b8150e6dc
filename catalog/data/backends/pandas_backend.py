from __future__ import annotations

from math import ceil
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from catalog.config import get_config
from catalog.logging import get_logger

from ..interface import RecordStore
from ..models import PRODUCT_FIELDS, ListRequest, RecordResponse, ResponseMeta

logger = get_logger(__name__)


class PandasRecordStore(RecordStore):
    """
    In-memory implementation backed by a pandas DataFrame.
    - Loads ``products.csv`` from ``data_dir`` once at construction (or takes a frame).
    - Every call performs a fresh filter/sort/slice pass over the frame, so each UI
      interaction does new work, mirroring the remote API.
    - Mutations only live as long as the instance; nothing is written back to disk.
    """

    def __init__(
        self,
        data_dir: Union[str, Path, None] = None,
        frame: Optional[pd.DataFrame] = None,
        collection: Optional[str] = None,
    ) -> None:
        config = get_config()
        self.collection = collection or config.catalog_collection

        if frame is None:
            if data_dir is None:
                data_dir = config.data_dir
            self.data_dir = self._resolve_dir(Path(data_dir))
            frame = self._load_products(self.data_dir)
        else:
            self.data_dir = None

        self._frame = self._normalize(frame)

    # ---------- loading helpers ----------

    @staticmethod
    def _resolve_dir(data_dir: Path) -> Path:
        if data_dir.is_absolute():
            return data_dir
        # Relative paths are taken from the repository root (where pyproject.toml lives)
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            if (parent / "pyproject.toml").exists():
                return parent / data_dir
        return current / data_dir

    @staticmethod
    def _load_products(data_dir: Path) -> pd.DataFrame:
        path = data_dir / "products.csv"
        if not path.exists():
            raise FileNotFoundError(
                f"Product data not found: {path}\n"
                f"Please either:\n"
                f"  1. Set DATA_DIR to a directory containing products.csv\n"
                f"  2. Set DATA_BACKEND=rest and configure CATALOG_API_URL / CATALOG_API_KEY"
            )
        try:
            return pd.read_csv(path, dtype={"product_id": str})
        except Exception as e:
            raise RuntimeError(f"Error reading {path}: {e}") from e

    @staticmethod
    def _normalize(frame: pd.DataFrame) -> pd.DataFrame:
        df = frame.copy()
        for col in PRODUCT_FIELDS:
            if col not in df.columns:
                df[col] = None
        for col in ("name", "category", "description", "image_url"):
            df[col] = df[col].astype(object)
        df["product_id"] = df["product_id"].astype(str)
        df["price"] = pd.to_numeric(df["price"], errors="coerce")
        df["stock"] = pd.to_numeric(df["stock"], errors="coerce")

        bad = df["price"].isna() | df["stock"].isna()
        if bad.any():
            logger.warning(
                f"Dropping {int(bad.sum())} product row(s) with missing or non-numeric price/stock: "
                f"{df.loc[bad, 'product_id'].tolist()}"
            )
            df = df.loc[~bad].copy()

        df["price"] = df["price"].astype(float)
        df["stock"] = df["stock"].astype(int)
        return df.reset_index(drop=True)

    @property
    def frame(self) -> pd.DataFrame:
        """A copy of the current rows."""
        return self._frame.copy()

    # ---------- query helpers ----------

    def _check_collection(self, collection: str) -> Optional[RecordResponse]:
        if collection != self.collection:
            return RecordResponse(status=False, message=f"Unknown collection: {collection}")
        return None

    def _match(self, where: Dict[str, Any]) -> pd.Series:
        mask = pd.Series(True, index=self._frame.index)
        for column, value in (where or {}).items():
            if column not in self._frame.columns:
                return pd.Series(False, index=self._frame.index)
            mask &= self._frame[column] == value
        return mask

    def _search(self, df: pd.DataFrame, columns: List[str], query: str) -> pd.DataFrame:
        if not query or not query.strip():
            return df
        s = query.strip().lower()
        mask = pd.Series(False, index=df.index)
        for col in columns:
            if col in df.columns:
                mask |= df[col].astype("string").str.lower().str.contains(s, regex=False, na=False)
        return df.loc[mask]

    @staticmethod
    def _to_rows(df: pd.DataFrame, fields: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        if fields:
            df = df[[f for f in fields if f in df.columns]]
        cleaned = df.astype(object).where(df.notna(), None)
        return cleaned.to_dict(orient="records")

    # ---------- interface implementation ----------

    def list_records(self, request: ListRequest) -> RecordResponse:
        bad = self._check_collection(request.table)
        if bad:
            return bad

        df = self._frame.loc[self._match(request.where)]
        df = self._search(df, request.search.columns, request.search.query)

        if request.order_by in df.columns:
            df = df.sort_values(request.order_by, ascending=(request.order != "desc"), kind="mergesort")

        total_pages = ceil(len(df) / request.page_size) if len(df) else 0
        start = (request.page - 1) * request.page_size
        page = df.iloc[start:start + request.page_size]

        return RecordResponse(
            status=True,
            data=self._to_rows(page, request.fields),
            meta=ResponseMeta(total_pages=total_pages),
        )

    def fetch_one_record(
        self,
        collection: str,
        where: Dict[str, Any],
        fields: Optional[List[str]] = None,
    ) -> RecordResponse:
        bad = self._check_collection(collection)
        if bad:
            return bad
        df = self._frame.loc[self._match(where)].head(1)
        if df.empty:
            return RecordResponse(status=False, message="No record found")
        return RecordResponse(status=True, data=self._to_rows(df, fields))

    def create_records(
        self,
        collection: str,
        rows: List[Dict[str, Any]],
        upsert: bool = False,
        conflict_keys: Optional[List[str]] = None,
    ) -> RecordResponse:
        bad = self._check_collection(collection)
        if bad:
            return bad
        if not rows:
            return RecordResponse(status=False, message="No rows to create")

        keys = conflict_keys or ["product_id"]
        incoming = self._normalize(pd.DataFrame(rows))
        existing = self._frame.set_index(keys).index
        clashes = existing.isin(incoming.set_index(keys).index)

        if clashes.any() and not upsert:
            return RecordResponse(status=False, message="Duplicate key")

        kept = self._frame.loc[~clashes]
        self._frame = pd.concat([kept, incoming], ignore_index=True)
        logger.debug(f"Created {len(incoming)} record(s) in {collection} (replaced {int(clashes.sum())})")
        return RecordResponse(status=True, data=self._to_rows(incoming))

    def update_records(
        self,
        collection: str,
        patch: Dict[str, Any],
        where: Dict[str, Any],
        validation_rules: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> RecordResponse:
        bad = self._check_collection(collection)
        if bad:
            return bad
        if not where:
            return RecordResponse(status=False, message="Refusing to update without a filter")

        problems = check_rules(patch, validation_rules or {})
        if problems:
            return RecordResponse(status=False, message="; ".join(problems))

        mask = self._match(where)
        if not mask.any():
            return RecordResponse(status=False, message="No records matched")

        for column, value in patch.items():
            if column == "product_id":
                continue
            self._frame.loc[mask, column] = value
        self._frame = self._normalize(self._frame)
        return RecordResponse(status=True, data=self._to_rows(self._frame.loc[mask]))

    def delete_records(self, collection: str, where: Dict[str, Any]) -> RecordResponse:
        bad = self._check_collection(collection)
        if bad:
            return bad
        if not where:
            return RecordResponse(status=False, message="Refusing to delete without a filter")

        mask = self._match(where)
        if not mask.any():
            return RecordResponse(status=False, message="No records matched")

        deleted = self._to_rows(self._frame.loc[mask])
        self._frame = self._frame.loc[~mask].reset_index(drop=True)
        return RecordResponse(status=True, data=deleted)


def check_rules(patch: Dict[str, Any], rules: Dict[str, Dict[str, Any]]) -> List[str]:
    """Evaluate the record API's declarative validation rules against a patch."""
    problems: List[str] = []
    for field, rule in rules.items():
        value = patch.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            if rule.get("required"):
                problems.append(f"{field} is required")
            continue
        if "minLength" in rule and len(str(value)) < rule["minLength"]:
            problems.append(f"{field} must be at least {rule['minLength']} characters")
        if "greaterThan" in rule and not value > rule["greaterThan"]:
            problems.append(f"{field} must be greater than {rule['greaterThan']}")
        if "greaterOrEqual" in rule and not value >= rule["greaterOrEqual"]:
            problems.append(f"{field} must be greater than or equal to {rule['greaterOrEqual']}")
    return problems

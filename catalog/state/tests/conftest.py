import pandas as pd
import pytest

from catalog.config import get_config, set_config_for_test
from catalog.data.backends.pandas_backend import PandasRecordStore
from catalog.data.models import RecordResponse
from catalog.state.controller import CatalogController

ROWS = [
    {"product_id": f"P{i}", "name": name, "category": category, "price": price, "stock": stock,
     "description": description, "image_url": None}
    for i, (name, category, price, stock, description) in enumerate([
        ("Lamp", "Furniture", 20.0, 5, "Desk lamp"),
        ("Headphones", "Audio", 150.0, 40, "Over-ear"),
        ("Smart Watch", "Wearables", 199.0, 12, None),
        ("Laptop", "Electronics", 1200.0, 8, "Ultrabook"),
        ("Monitor", "Electronics", 300.0, 15, "27 inch"),
        ("Phone Case", "Accessories", 15.0, 100, "Slim"),
    ], start=1)
]


class RecordingStore:
    """Wraps a PandasRecordStore, counting calls and optionally failing them."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []
        self.fail_with = {}

    def _call(self, name, *args, **kwargs):
        self.calls.append(name)
        if name in self.fail_with:
            failure = self.fail_with[name]
            if isinstance(failure, Exception):
                raise failure
            return failure
        return getattr(self.inner, name)(*args, **kwargs)

    def list_records(self, request):
        return self._call("list_records", request)

    def fetch_one_record(self, collection, where, fields=None):
        return self._call("fetch_one_record", collection, where, fields)

    def create_records(self, collection, rows, upsert=False, conflict_keys=None):
        return self._call("create_records", collection, rows, upsert=upsert, conflict_keys=conflict_keys)

    def update_records(self, collection, patch, where, validation_rules=None):
        return self._call("update_records", collection, patch, where, validation_rules=validation_rules)

    def delete_records(self, collection, where):
        return self._call("delete_records", collection, where)

    def count(self, name):
        return self.calls.count(name)


FAILED = RecordResponse(status=False, message="backend said no")


@pytest.fixture(autouse=True)
def test_config():
    set_config_for_test(log_level="WARNING", catalog_collection="products2", page_size=4, search_debounce_ms=700)
    yield


@pytest.fixture
def store():
    return RecordingStore(PandasRecordStore(frame=pd.DataFrame(ROWS), collection="products2"))


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def controller(store, notifications):
    return CatalogController(
        store,
        get_config(),
        notify=lambda level, message: notifications.append((level, message)),
        clock=lambda: 1700000000.0,
    )

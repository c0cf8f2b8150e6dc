import pytest
import requests

from catalog.data.backends.rest_backend import RestRecordStore
from catalog.data.models import ProductQuery
from catalog.data.query_builder import PRODUCT_VALIDATION_RULES, build_list_request
from catalog.data.util import get_data_access
from catalog.config import set_config_for_test
from catalog.errors import RecordStoreError

class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.ok = status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response

def _store(session):
    return RestRecordStore("https://api.example.com/v1/", session, timeout=5)

def test_list_records_posts_query():
    session = FakeSession(FakeResponse({
        "status": True,
        "data": [{"product_id": "P1", "name": "Lamp", "category": "Furniture", "price": 20, "stock": 5}],
        "meta": {"totalPages": 3},
    }))
    request = build_list_request(ProductQuery(category="Electronics", sort="highest"), "products2")
    response = _store(session).list_records(request)

    assert response.status
    assert response.meta.total_pages == 3
    call = session.calls[0]
    assert call["url"] == "https://api.example.com/v1/records/fetch-all"
    assert call["timeout"] == 5
    assert call["json"]["where"] == {"category": "Electronics"}
    assert call["json"]["order"] == "desc"
    assert call["json"]["list"] == 4

def test_non_success_status_is_returned():
    session = FakeSession(FakeResponse({"status": False, "message": "table not found"}))
    response = _store(session).delete_records("products2", {"product_id": "P1"})
    assert not response.status
    assert response.message == "table not found"

def test_http_error_overrides_success_flag():
    session = FakeSession(FakeResponse({"status": True}, status_code=500))
    assert not _store(session).delete_records("products2", {"product_id": "P1"}).status

def test_transport_failure_raises():
    session = FakeSession(error=requests.ConnectionError("boom"))
    with pytest.raises(RecordStoreError):
        _store(session).list_records(build_list_request(ProductQuery(), "products2"))

def test_non_json_body_raises():
    session = FakeSession(FakeResponse(ValueError("no json"), status_code=502))
    with pytest.raises(RecordStoreError) as exc:
        _store(session).delete_records("products2", {"product_id": "P1"})
    assert exc.value.status_code == 502

def test_create_sends_upsert_options():
    session = FakeSession(FakeResponse({"status": True}))
    _store(session).create_records("products2", [{"product_id": "P9"}], upsert=True, conflict_keys=["product_id"])
    body = session.calls[0]["json"]
    assert session.calls[0]["url"].endswith("/records/create")
    assert body["options"] == {"upsert": True, "conflictKeys": ["product_id"]}
    assert body["data"] == [{"product_id": "P9"}]

def test_update_sends_filter_and_rules():
    session = FakeSession(FakeResponse({"status": True}))
    _store(session).update_records("products2", {"stock": 3}, {"product_id": "P1"}, PRODUCT_VALIDATION_RULES)
    body = session.calls[0]["json"]
    assert body["where"] == {"product_id": "P1"}
    assert body["options"]["validationRule"]["name"] == {"required": True, "minLength": 3}

def test_fetch_one_accepts_single_object():
    session = FakeSession(FakeResponse({"status": True, "data": {"product_id": "P1"}}))
    response = _store(session).fetch_one_record("products2", {"product_id": "P1"}, ["product_id"])
    assert response.data == [{"product_id": "P1"}]
    assert session.calls[0]["json"]["fields"] == ["product_id"]

def test_factory_builds_rest_store():
    set_config_for_test(data_backend="rest", catalog_api_url="https://api.example.com", catalog_api_key="k",
                        request_timeout=7, log_level="WARNING")
    store = get_data_access()
    assert isinstance(store, RestRecordStore)
    assert store.timeout == 7
    assert store.session.headers["Authorization"] == "Bearer k"

def test_factory_rejects_unknown_kind():
    with pytest.raises(ValueError):
        get_data_access("sqlite")

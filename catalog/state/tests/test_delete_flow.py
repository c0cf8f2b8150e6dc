import pytest

from catalog.data.models import ProductResponse
from catalog.state.modals import ModalState
from catalog.ui.presenters import delete_confirmation

LAMP = ProductResponse(product_id="P123", name="Lamp", price=20, category="Furniture", stock=5)


@pytest.fixture
def lamp_store(store):
    store.inner.create_records("products2", [LAMP.model_dump()])
    return store


def test_confirmation_shows_target_details():
    values = [value for _, value in delete_confirmation(LAMP)]
    assert values == ["Lamp", "$20", "Furniture", "5"]


def test_delete_only_after_explicit_confirm(controller, lamp_store):
    controller.ensure_fresh()
    modal = controller.delete_modal
    modal.open(LAMP)
    assert "delete_records" not in lamp_store.calls

    modal.cancel()
    assert "delete_records" not in lamp_store.calls
    assert "P123" in set(lamp_store.inner.frame["product_id"])

    modal.open(LAMP)
    target = modal.target
    assert modal.submit(lambda: controller.delete_product(target.product_id, target.name))
    assert lamp_store.count("delete_records") == 1
    assert modal.state is ModalState.CLOSED
    assert "P123" not in set(lamp_store.inner.frame["product_id"])


def test_failed_delete_keeps_modal_open(controller, store):
    store.inner.delete_records("products2", {"product_id": "P1"})
    modal = controller.delete_modal
    modal.open(LAMP)
    assert not modal.submit(lambda: controller.delete_product("P1"))
    assert modal.state is ModalState.OPEN
    assert modal.error == "No records matched"

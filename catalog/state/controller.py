from __future__ import annotations

import threading
import time
from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from catalog.config import AppConfig, get_config
from catalog.data.interface import RecordStore
from catalog.data.models import (
    PRODUCT_FIELDS,
    PageResult,
    ProductForm,
    ProductQuery,
    ProductResponse,
    RecordResponse,
    SortToken,
    validation_messages,
)
from catalog.data.query_builder import (
    PRODUCT_VALIDATION_RULES,
    build_list_request,
    product_filter,
)
from catalog.errors import MutationError, ProductValidationError, RecordStoreError
from catalog.logging import get_logger

from .debounce import Debouncer
from .modals import ModalForm
from .pager import Pager

logger = get_logger(__name__)

Notifier = Callable[[str, str], None]

_FAILURE_PREFIX = {
    "create": "Error adding product",
    "update": "Error updating product",
    "delete": "Error deleting product",
}


def _log_notification(level: str, message: str) -> None:
    logger.info(f"[{level}] {message}")


class CatalogController:
    """
    UI state for the product grid plus the fetch / mutation operations that drive it.

    The record store is passed in; the controller never builds its own client.
    ``notify(level, message)`` is how user-facing messages leave the controller
    (``level`` is "success" or "error").

    Fetches are tagged with a sequence number. Only the response to the most
    recently issued fetch is applied; older ones are dropped when they land.
    """

    def __init__(
        self,
        store: RecordStore,
        config: Optional[AppConfig] = None,
        notify: Optional[Notifier] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        config = config or get_config()
        self.store = store
        self.collection = config.catalog_collection
        self.placeholder_image_url = config.placeholder_image_url
        self.notify: Notifier = notify or _log_notification
        self._clock = clock

        self.query = ProductQuery(page_size=config.page_size)
        self.products: List[ProductResponse] = []
        self.total_pages: int = 1
        self.loading: bool = True

        self.search = Debouncer(delay_ms=config.search_debounce_ms, initial="")
        self.create_modal: ModalForm[None] = ModalForm("create")
        self.edit_modal: ModalForm[ProductResponse] = ModalForm("edit")
        self.delete_modal: ModalForm[ProductResponse] = ModalForm("delete")

        self._lock = threading.Lock()
        self._issued = 0
        self._fetched_query: Optional[ProductQuery] = None
        self._last_id_ms = 0

    # ---------- query state ----------

    def set_category(self, category: str) -> None:
        if category != self.query.category:
            self.query = self.query.with_category(category)

    def set_sort(self, sort: SortToken) -> None:
        if sort != self.query.sort:
            self.query = self.query.with_sort(sort)

    def set_page(self, page: int) -> None:
        self.query = self.query.with_page(Pager.clamp(page, self.total_pages))

    def next_page(self) -> None:
        if Pager.can_go_next(self.query.page, self.total_pages):
            self.query = self.query.with_page(Pager.next(self.query.page, self.total_pages))

    def previous_page(self) -> None:
        if Pager.can_go_previous(self.query.page):
            self.query = self.query.with_page(Pager.previous(self.query.page))

    def type_search(self, text: str) -> None:
        """Record a keystroke; the query only changes once the input settles."""
        self.search.push(text)

    def commit_search(self) -> bool:
        """Apply the debounced search text if it has settled. Returns True when the query changed."""
        committed = self.search.poll()
        if committed is None or committed == self.query.search:
            return False
        self.query = self.query.with_search(committed)
        return True

    # ---------- fetch orchestration ----------

    @property
    def is_stale(self) -> bool:
        return self._fetched_query != self.query

    def ensure_fresh(self) -> Optional[PageResult]:
        """Fetch when the query differs from the one last fetched."""
        if self.is_stale:
            return self.fetch_products()
        return None

    def fetch_products(self) -> Optional[PageResult]:
        query = self.query
        ticket = self._issue(query)
        request = build_list_request(query, self.collection)
        try:
            response = self.store.list_records(request)
            if not response.status:
                raise RecordStoreError(response.message or "Failed to fetch products")
            page = PageResult(
                records=[ProductResponse.model_validate(row) for row in response.data],
                total_pages=response.meta.total_pages,
            )
        except (RecordStoreError, ValidationError) as e:
            logger.error(f"Error fetching products: {e}")
            self._settle(ticket, None)
            return None
        return self._settle(ticket, page)

    def fetch_products_async(self, executor: Executor) -> Future:
        """Run fetch_products on ``executor``; overlapping calls are allowed."""
        return executor.submit(self.fetch_products)

    def _issue(self, query: ProductQuery) -> int:
        with self._lock:
            self._issued += 1
            self.loading = True
            self._fetched_query = query
            return self._issued

    def _settle(self, ticket: int, page: Optional[PageResult]) -> Optional[PageResult]:
        with self._lock:
            if ticket != self._issued:
                logger.debug(f"Discarding stale product page (request {ticket}, latest {self._issued})")
                return None
            self.loading = False
            if page is None:
                return None
            self.products = page.records
            self.total_pages = page.total_pages
            if page.total_pages and self.query.page > page.total_pages:
                # The last page emptied out (e.g. after a delete); step back on next render
                self.query = self.query.with_page(page.total_pages)
            return page

    def get_product(self, product_id: str) -> Optional[ProductResponse]:
        """Fetch a single product straight from the store."""
        try:
            response = self.store.fetch_one_record(self.collection, product_filter(product_id), list(PRODUCT_FIELDS))
            if not response.status or not response.data:
                raise RecordStoreError(response.message or f"No product found with id {product_id}")
            return ProductResponse.model_validate(response.data[0])
        except (RecordStoreError, ValidationError) as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            return None

    def open_edit(self, product: ProductResponse) -> None:
        """Open the edit modal pre-filled with the stored record, falling back to the card's copy."""
        current = self.get_product(product.product_id)
        self.edit_modal.open(current or product)

    # ---------- mutations ----------

    def new_product_id(self) -> str:
        """P<epoch ms>, strictly increasing within this controller."""
        now_ms = int(self._clock() * 1000)
        self._last_id_ms = max(now_ms, self._last_id_ms + 1)
        return f"P{self._last_id_ms}"

    def create_product(self, form: Union[ProductForm, Dict[str, Any]]) -> str:
        product = self._validate("create", form)
        product_id = self.new_product_id()
        row = {
            "product_id": product_id,
            "name": product.name,
            "category": product.category,
            "price": product.price,
            "stock": product.stock,
            "description": product.description or "",
            "image_url": product.image_url or self.placeholder_image_url,
        }
        self._mutate(
            "create",
            lambda: self.store.create_records(self.collection, [row], upsert=True, conflict_keys=["product_id"]),
        )
        logger.info(f"Created product {product_id} ({product.name})")
        self.fetch_products()
        self.notify("success", "Product added successfully!")
        return product_id

    def update_product(self, product_id: str, form: Union[ProductForm, Dict[str, Any]]) -> None:
        product = self._validate("update", form)
        patch = {
            "name": product.name,
            "category": product.category,
            "price": product.price,
            "stock": product.stock,
            "description": product.description,
            "image_url": product.image_url,
        }
        self._mutate(
            "update",
            lambda: self.store.update_records(
                self.collection, patch, product_filter(product_id), validation_rules=PRODUCT_VALIDATION_RULES
            ),
        )
        logger.info(f"Updated product {product_id}")
        self.fetch_products()
        self.notify("success", f"Successfully updated product: {product.name}")

    def delete_product(self, product_id: str, name: Optional[str] = None) -> None:
        self._mutate("delete", lambda: self.store.delete_records(self.collection, product_filter(product_id)))
        logger.info(f"Deleted product {product_id}")
        self.fetch_products()
        self.notify("success", f"Deleted product: {name or product_id}")

    def _validate(self, operation: str, form: Union[ProductForm, Dict[str, Any]]) -> ProductForm:
        try:
            data = form.model_dump() if isinstance(form, ProductForm) else form
            return ProductForm.model_validate(data)
        except ValidationError as e:
            error = ProductValidationError(operation, validation_messages(e))
            logger.warning(f"Rejected {operation}: {error.errors}")
            self.notify("error", f"{_FAILURE_PREFIX[operation]}: {error.message}")
            raise error from e

    def _mutate(self, operation: str, call: Callable[[], RecordResponse]) -> RecordResponse:
        try:
            response = call()
        except RecordStoreError as e:
            self._fail(operation, e.message, e)
        if not response.status:
            self._fail(operation, response.message or f"Failed to {operation} product")
        return response

    def _fail(self, operation: str, message: str, cause: Optional[BaseException] = None) -> None:
        logger.error(f"{operation} failed: {message}")
        self.notify("error", f"{_FAILURE_PREFIX[operation]}: {message}")
        raise MutationError(operation, message) from cause

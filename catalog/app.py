import time
from typing import Any, Dict, Optional

import streamlit as st

# Configuration
from catalog.config import get_config
from catalog.logging import get_logger

# RecordStore factory (REST for the hosted API, pandas for local dev)
from catalog.data.util import get_data_access
from catalog.data.models import CATEGORIES, ProductForm, ProductResponse
from catalog.state.controller import CatalogController
from catalog.state.pager import Pager
from catalog.ui.presenters import (
    category_heading,
    delete_confirmation,
    format_price,
    is_low_stock,
    short_description,
    stock_badge,
)

st.set_page_config(page_title="Product Catalog", layout="wide")

config = get_config()
logger = get_logger(__name__)

SORT_LABELS = {"lowest": "Lowest price", "highest": "Highest price"}


# -----------------------------------------------------------------------------
# Session wiring: one controller (and one record store) per browser session
# -----------------------------------------------------------------------------
def _queue_notification(level: str, message: str) -> None:
    st.session_state.setdefault("notifications", []).append((level, message))


def get_controller() -> CatalogController:
    if "controller" not in st.session_state:
        store = get_data_access(config=config)
        st.session_state.controller = CatalogController(store, config, notify=_queue_notification)
    return st.session_state.controller


def show_notifications() -> None:
    for level, message in st.session_state.pop("notifications", []):
        if level == "error":
            st.error(message)
        else:
            st.toast(message)


# -----------------------------------------------------------------------------
# Modals
# -----------------------------------------------------------------------------
def product_fields(prefix: str, product: Optional[ProductResponse] = None) -> Dict[str, Any]:
    """Shared inputs for the create and edit forms."""
    category = product.category if product and product.category in CATEGORIES else CATEGORIES[0]
    return {
        "name": st.text_input("Product Name *", value=product.name if product else "", max_chars=100,
                              placeholder="Enter product name", key=f"{prefix}-name"),
        "category": st.selectbox("Category *", CATEGORIES, index=CATEGORIES.index(category), key=f"{prefix}-category"),
        "price": st.number_input("Price ($) *", min_value=0.0, step=0.01, format="%.2f",
                                 value=float(product.price) if product else 0.0, key=f"{prefix}-price"),
        "stock": st.number_input("Stock *", min_value=0, step=1,
                                 value=int(product.stock) if product else 0, key=f"{prefix}-stock"),
        "description": st.text_area("Description", value=(product.description or "") if product else "",
                                    placeholder="Enter product description", key=f"{prefix}-description"),
        "image_url": st.text_input("Image URL", value=(product.image_url or "") if product else "",
                                   placeholder="https://example.com/image.jpg", key=f"{prefix}-image_url"),
    }


@st.dialog("List an item")
def create_dialog(controller: CatalogController) -> None:
    modal = controller.create_modal
    with st.form("create-product"):
        data = product_fields("create")
        submitted = st.form_submit_button("Add Product", type="primary")
    if st.button("Cancel", key="create-cancel"):
        modal.cancel()
        st.rerun()
    if submitted and modal.submit(lambda: controller.create_product(data)):
        st.rerun()
    if modal.error:
        st.error(modal.error)


@st.dialog("Edit product")
def edit_dialog(controller: CatalogController) -> None:
    modal = controller.edit_modal
    product = modal.target
    if product is None:
        return
    with st.form("edit-product"):
        data = product_fields(f"edit-{product.product_id}", product)
        submitted = st.form_submit_button("Update Product", type="primary")
    if st.button("Cancel", key="edit-cancel"):
        modal.cancel()
        st.rerun()
    if submitted and modal.submit(lambda: controller.update_product(product.product_id, data)):
        st.rerun()
    if modal.error:
        st.error(modal.error)


@st.dialog("Delete Product?")
def delete_dialog(controller: CatalogController) -> None:
    modal = controller.delete_modal
    product = modal.target
    if product is None:
        return
    st.write("Are you sure you want to delete this product? This action cannot be undone.")
    for label, value in delete_confirmation(product):
        st.markdown(f"**{label}:** {value}")
    c1, c2 = st.columns(2)
    if c1.button("Cancel", key="delete-cancel"):
        modal.cancel()
        st.rerun()
    if c2.button("Delete", type="primary", key="delete-confirm"):
        if modal.submit(lambda: controller.delete_product(product.product_id, product.name)):
            st.rerun()
    if modal.error:
        st.error(modal.error)


# -----------------------------------------------------------------------------
# Page sections
# -----------------------------------------------------------------------------
def navigation(controller: CatalogController) -> None:
    c1, c2 = st.columns([4, 1])
    text = c1.text_input("Search", key="search-input", placeholder="What are you shopping for?",
                         label_visibility="collapsed")
    controller.type_search(text)
    controller.commit_search()
    if c2.button("List an item", use_container_width=True):
        controller.create_modal.open()
        create_dialog(controller)


def header(controller: CatalogController) -> None:
    c1, c2, c3 = st.columns([3, 1, 1])
    c1.markdown(f"### {category_heading(controller.query.category)}")
    options = ["all"] + CATEGORIES
    category = c2.selectbox("Category", options, index=options.index(controller.query.category),
                            format_func=lambda c: "All products" if c == "all" else c)
    sort = c3.selectbox("Sort", list(SORT_LABELS), index=list(SORT_LABELS).index(controller.query.sort),
                        format_func=SORT_LABELS.get)
    controller.set_category(category)
    controller.set_sort(sort)


def product_grid(controller: CatalogController) -> None:
    if controller.loading:
        st.info("Loading products...")
        return
    if not controller.products:
        st.write("No products found!")
        return
    columns = st.columns(controller.query.page_size)
    for column, product in zip(columns, controller.products):
        with column.container(border=True):
            st.image(product.image_url or config.placeholder_image_url, use_container_width=True)
            badge = stock_badge(product.stock, config.low_stock_threshold)
            if is_low_stock(product.stock, config.low_stock_threshold):
                badge = f":red[{badge}]"
            st.markdown(f"**{product.name}** • {badge}")
            st.markdown(f"### {format_price(product.price)}")
            st.caption(short_description(product.description))
            st.caption(product.category)
            b1, b2 = st.columns(2)
            if b1.button("Edit Product", key=f"edit-{product.product_id}"):
                controller.open_edit(product)
                edit_dialog(controller)
            if b2.button("Delete", key=f"delete-{product.product_id}"):
                controller.delete_modal.open(product)
                delete_dialog(controller)


def paging(controller: CatalogController) -> None:
    page, total = controller.query.page, controller.total_pages
    c1, c2, c3 = st.columns([1, 2, 1])
    c1.button("← Previous page", disabled=not Pager.can_go_previous(page), on_click=controller.previous_page)
    c2.markdown(f"<div style='text-align:center'>{Pager.label(page, total)}</div>", unsafe_allow_html=True)
    c3.button("Next page →", disabled=not Pager.can_go_next(page, total), on_click=controller.next_page)


def render(controller: CatalogController) -> None:
    navigation(controller)
    header(controller)
    # Every change of category, sort, page or committed search triggers a fresh fetch
    t0 = time.perf_counter()
    fetched = controller.is_stale
    controller.ensure_fresh()
    fetch_ms = (time.perf_counter() - t0) * 1000.0
    show_notifications()
    product_grid(controller)
    paging(controller)

    with st.expander("Data source & timings"):
        st.write(
            {
                "backend": config.data_backend,
                "collection": config.catalog_collection,
                "last_fetch_ms": round(fetch_ms, 2) if fetched else None,
            }
        )

    if controller.search.pending:
        # Wait out the quiet window, then rerun so the search commits
        time.sleep(controller.search.remaining())
        st.rerun()


def fallback(error: Exception) -> None:
    st.error("Something went wrong:")
    st.code(str(error))
    if st.button("Try again"):
        for key in list(st.session_state.keys()):
            del st.session_state[key]
        st.rerun()
    st.text_input("Search", key="fallback-search", placeholder="What are you shopping for?",
                  label_visibility="collapsed")


try:
    render(get_controller())
except Exception as e:
    logger.exception(f"Catalog page failed: {e}")
    fallback(e)

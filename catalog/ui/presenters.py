from __future__ import annotations

from typing import List, Optional, Tuple

from catalog.data.models import ProductResponse

LOW_STOCK_THRESHOLD = 10


def stock_badge(stock: int, threshold: int = LOW_STOCK_THRESHOLD) -> str:
    return f"Only {stock} left" if stock <= threshold else "In stock"


def is_low_stock(stock: int, threshold: int = LOW_STOCK_THRESHOLD) -> bool:
    return stock <= threshold


def short_description(text: Optional[str]) -> str:
    if not text:
        return "No description"
    if len(text) > 30:
        return text[:32] + "..."
    return text


def format_price(price: float) -> str:
    if float(price).is_integer():
        return f"${int(price):,}"
    return f"${price:,.2f}"


def category_heading(category: str) -> str:
    if category == "all":
        return "Showing All Products"
    return f"Showing products in {category[:1].upper()}{category[1:]}"


def delete_confirmation(product: ProductResponse) -> List[Tuple[str, str]]:
    """Label/value pairs shown in the delete-confirm modal."""
    return [
        ("Name", product.name),
        ("Price", format_price(product.price)),
        ("Category", product.category),
        ("Stock", str(product.stock)),
    ]

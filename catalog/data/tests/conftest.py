import pandas as pd
import pytest

from catalog.config import set_config_for_test

ROWS = [
    {"product_id": "P1", "name": "Desk Lamp", "category": "Furniture", "price": 20.0, "stock": 5,
     "description": "Warm light for late nights", "image_url": None},
    {"product_id": "P2", "name": "Headphones", "category": "Audio", "price": 150.0, "stock": 40,
     "description": "Noise cancelling over-ear headphones", "image_url": None},
    {"product_id": "P3", "name": "Smart Watch", "category": "Wearables", "price": 199.0, "stock": 12,
     "description": None, "image_url": None},
    {"product_id": "P4", "name": "Laptop", "category": "Electronics", "price": 1200.0, "stock": 8,
     "description": "14 inch ultrabook", "image_url": None},
    {"product_id": "P5", "name": "Monitor", "category": "Electronics", "price": 300.0, "stock": 15,
     "description": "27 inch display with a lamp mode", "image_url": None},
    {"product_id": "P6", "name": "Phone Case", "category": "Accessories", "price": 15.0, "stock": 100,
     "description": "Slim case", "image_url": None},
    {"product_id": "P7", "name": "Tablet", "category": "Electronics", "price": 450.0, "stock": 3,
     "description": "10 inch tablet", "image_url": None},
]

@pytest.fixture(autouse=True)
def test_config():
    set_config_for_test(log_level="WARNING", catalog_collection="products2", page_size=4)
    yield

@pytest.fixture
def products_frame():
    return pd.DataFrame(ROWS)

import copy
import os
import tempfile

# must be set before catalog_admin.config is imported anywhere
_DB_PATH = os.path.join(tempfile.gettempdir(), f"catalog_admin_test_{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["MEDIA_BACKEND"] = "mock"
os.environ["SEED_REFERENCE_DATA"] = "true"

import pytest

from catalog_admin.db import SessionLocal, engine, init_db
from catalog_admin.models.category import Category

PHONE_PAYLOAD = {
    "name": "Aurora Phone X",
    "description": "A flagship phone with a very bright display.",
    "categoryId": None,  # filled per test from the seeded Electronics row
    "basePrice": 999.00,
    "crossingPrice": 1199.00,
    "variantTypes": [
        {
            "typeName": "Storage",
            "options": [
                {"name": "128GB", "priceAdjustment": 0, "stock": 10},
                {"name": "256GB", "priceAdjustment": 100, "stock": 5},
            ],
        }
    ],
    "colorVariants": [
        {
            "colorName": "Black",
            "colorCode": "#000000",
            "images": ["https://media.example.test/products/black.jpg"],
            "stock": 7,
        },
        {
            "colorName": "Blue",
            "colorCode": "#1E40AF",
            "images": ["https://media.example.test/products/blue.jpg"],
            "stock": 3,
        },
    ],
    "specifications": [
        {
            "groupName": "Display",
            "details": [{"key": "Screen Size", "value": "6.1 inches"}],
        }
    ],
    "images": ["https://media.example.test/products/front.jpg"],
    "status": "draft",
}


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    init_db(reset=True)
    yield
    engine.dispose()
    try:
        os.remove(_DB_PATH)
    except OSError:
        pass


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def category_id():
    with SessionLocal() as s:
        return s.query(Category).filter(Category.slug == "electronics").one().id


@pytest.fixture
def phone_payload(category_id):
    """A fresh copy of the Storage x Color example submission."""
    payload = copy.deepcopy(PHONE_PAYLOAD)
    payload["categoryId"] = category_id
    return payload

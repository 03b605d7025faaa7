from fastapi.testclient import TestClient

from catalog_admin.db import SessionLocal
from catalog_admin.main import app
from catalog_admin.repositories.reference_repo import ReferenceRepository

client = TestClient(app)


def test_list_categories_sorted_by_name():
    res = client.get("/api/categories")
    assert res.status_code == 200
    names = [c["name"] for c in res.json()]
    assert names == sorted(names)
    assert {"Electronics", "Fashion"} <= set(names)


def test_list_subcategories_of_category(category_id):
    res = client.get(f"/api/categories/{category_id}/subcategories")
    assert res.status_code == 200
    subs = res.json()
    assert [s["name"] for s in subs] == ["Laptops", "Smartphones"]
    assert all(s["categoryId"] == category_id for s in subs)


def test_subcategories_of_unknown_category_is_404():
    res = client.get("/api/categories/99999/subcategories")
    assert res.status_code == 404


def test_list_brands():
    res = client.get("/api/brands")
    assert res.status_code == 200
    brands = res.json()
    assert [b["name"] for b in brands][:2] == ["Apple", "Samsung"]
    assert set(brands[0]) == {"id", "name", "slug", "logo"}


def test_reference_seeding_is_idempotent():
    from catalog_admin.db import DEFAULT_REFERENCE_DATA

    with SessionLocal() as s:
        assert ReferenceRepository(s).ensure_reference_data(DEFAULT_REFERENCE_DATA) == 0

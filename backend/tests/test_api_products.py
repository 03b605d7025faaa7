from decimal import Decimal

from fastapi.testclient import TestClient

from catalog_admin.config import settings
from catalog_admin.main import app

client = TestClient(app)


def test_create_and_read_back(phone_payload):
    phone_payload["name"] = "Api Created Phone"
    res = client.post("/api/admin/products", json=phone_payload)
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["variantCount"] == 4

    res = client.get(f"/api/products/{body['productId']}")
    assert res.status_code == 200
    product = res.json()
    assert product["slug"] == "api-created-phone"
    assert Decimal(product["basePrice"]) == Decimal("999.00")
    assert Decimal(product["crossingPrice"]) == Decimal("1199.00")
    assert [vt["typeName"] for vt in product["variantTypes"]] == ["Storage"]
    assert [o["name"] for o in product["variantTypes"][0]["options"]] == ["128GB", "256GB"]
    assert [c["colorName"] for c in product["colorVariants"]] == ["Black", "Blue"]

    variants = product["variants"]
    assert [(Decimal(v["finalPrice"]), v["stock"]) for v in variants] == [
        (Decimal("999.00"), 7),
        (Decimal("999.00"), 3),
        (Decimal("1099.00"), 5),
        (Decimal("1099.00"), 3),
    ]
    option_ids = [o["id"] for o in product["variantTypes"][0]["options"]]
    color_ids = [c["id"] for c in product["colorVariants"]]
    assert [(v["variantOptionIds"], v["colorVariantId"]) for v in variants] == [
        ([option_ids[0]], color_ids[0]),
        ([option_ids[0]], color_ids[1]),
        ([option_ids[1]], color_ids[0]),
        ([option_ids[1]], color_ids[1]),
    ]


def test_validation_failure_is_422_with_field_paths(phone_payload):
    phone_payload["crossingPrice"] = 999.00
    phone_payload["status"] = "scheduled"
    res = client.post("/api/admin/products", json=phone_payload)
    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["errorKind"] == "validation"
    assert set(body["details"]) == {"crossingPrice", "scheduledAt"}


def test_overflow_is_422(phone_payload, monkeypatch):
    monkeypatch.setattr(settings, "MAX_VARIANT_COMBINATIONS", 3)
    res = client.post("/api/admin/products", json=phone_payload)
    assert res.status_code == 422
    assert res.json()["errorKind"] == "combinatorial_overflow"


def test_persistence_failure_is_500_without_internals(phone_payload):
    phone_payload["categoryId"] = 424242
    res = client.post("/api/admin/products", json=phone_payload)
    assert res.status_code == 500
    body = res.json()
    assert body["errorKind"] == "persistence"
    assert body["error"] == "Failed to create product"
    assert "FOREIGN KEY" not in res.text


def test_unknown_product_is_404():
    res = client.get("/api/products/99999999")
    assert res.status_code == 404

"""
Fire the same product submission at a running server from several threads.

Every request should succeed with its own product id and its own SKUs: product
creation is deliberately not idempotent.

    uvicorn catalog_admin.main:app &
    python tools/concurrent_create.py --workers 8
"""
import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import argparse
import concurrent.futures
import json

import requests

BASE = os.environ.get("CATALOG_BASE", "http://127.0.0.1:8000")


def build_payload(name):
    return {
        "name": name,
        "description": "Concurrency probe product, safe to delete.",
        "categoryId": 1,
        "basePrice": 999.0,
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
            {"colorName": "Black", "images": ["https://media.example.test/black.jpg"], "stock": 7},
            {"colorName": "Blue", "images": ["https://media.example.test/blue.jpg"], "stock": 3},
        ],
        "images": ["https://media.example.test/front.jpg"],
        "status": "draft",
    }


def create_task(i, payload):
    try:
        r = requests.post(f"{BASE}/api/admin/products", json=payload, timeout=30)
        return (i, r.status_code, r.text)
    except Exception as e:
        return (i, "ERR", str(e))


def run(workers, name):
    print(f"Running create test: workers={workers}, name={name!r}")
    payload = build_payload(name)
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(create_task, i, payload) for i in range(workers)]
        results = [f.result() for f in futures]
    for r in results:
        print(r)
    ids = [json.loads(r[2]).get("productId") for r in results if r[1] == 201]
    print("Unique product ids:", sorted(set(ids)))

    skus = []
    for pid in ids:
        r = requests.get(f"{BASE}/api/products/{pid}", timeout=10)
        skus.extend(v["sku"] for v in r.json()["variants"])
    print(f"SKUs: {len(skus)} total, {len(set(skus))} unique")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent product creation probe.")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--name", default="Concurrency Probe Phone")
    args = parser.parse_args()
    run(args.workers, args.name)

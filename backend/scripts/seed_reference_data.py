#!/usr/bin/env python3
"""
Seed categories, subcategories and brands from a JSON file (or the built-in
defaults when no file is given). Safe to run repeatedly: rows are matched by slug.

Expected file shape:
    {
      "categories": [{"name": "Electronics", "slug": "electronics",
                      "subcategories": [{"name": "Smartphones", "slug": "smartphones"}]}],
      "brands": [{"name": "Apple", "slug": "apple", "logo": "https://..."}]
    }
Entries without a slug get one derived from the name.

Usage:
    python scripts/seed_reference_data.py --file reference.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from catalog_admin.db import DEFAULT_REFERENCE_DATA, SessionLocal, init_db
from catalog_admin.repositories.reference_repo import ReferenceRepository
from catalog_admin.utils.slug import slugify


def _normalize(data):
    """Fill in missing slugs; accept a bare list as a list of categories."""
    if isinstance(data, list):
        data = {"categories": data}
    for cat in data.get("categories", []):
        cat["slug"] = cat.get("slug") or slugify(cat["name"], fallback="category")
        for sub in cat.get("subcategories", []):
            sub["slug"] = sub.get("slug") or slugify(sub["name"], fallback="subcategory")
    for brand in data.get("brands", []):
        brand["slug"] = brand.get("slug") or slugify(brand["name"], fallback="brand")
    return data


def seed(data):
    init_db(reset=False)
    db = SessionLocal()
    try:
        created = ReferenceRepository(db).ensure_reference_data(_normalize(data))
        db.commit()
        print("Seeded reference rows:", created)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a reference data json file")
    args = parser.parse_args()
    if args.file is None:
        seed(DEFAULT_REFERENCE_DATA)
    elif not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    else:
        with open(args.file, encoding="utf-8") as fh:
            seed(json.load(fh))

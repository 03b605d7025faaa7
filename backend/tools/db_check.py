import json
import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
PRODUCT_ID = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Recent Products ===")
cur.execute(
    "SELECT id, slug, status, base_price, created_at FROM products ORDER BY id DESC LIMIT 20"
)
for r in cur.fetchall():
    print(r)

if PRODUCT_ID:
    print(f"\n=== Axes for product={PRODUCT_ID} ===")
    cur.execute(
        "SELECT vt.type_name, vo.id, vo.name, vo.price_adjustment, vo.stock "
        "FROM variant_types vt JOIN variant_options vo ON vo.variant_type_id = vt.id "
        "WHERE vt.product_id=? ORDER BY vt.position, vo.position",
        (PRODUCT_ID,),
    )
    for r in cur.fetchall():
        print(r)

    print(f"\n=== Colors for product={PRODUCT_ID} ===")
    cur.execute(
        "SELECT id, color_name, color_code, stock FROM color_variants WHERE product_id=? ORDER BY position",
        (PRODUCT_ID,),
    )
    for r in cur.fetchall():
        print(r)

    print(f"\n=== Variants for product={PRODUCT_ID} ===")
    cur.execute(
        "SELECT id, sku, variant_option_ids, color_variant_id, final_price, stock "
        "FROM product_variants WHERE product_id=? ORDER BY id",
        (PRODUCT_ID,),
    )
    for r in cur.fetchall():
        ids = r[2]
        try:
            ids = json.loads(ids) if isinstance(ids, str) else ids
        except Exception:
            pass
        print(
            {
                "id": r[0],
                "sku": r[1],
                "variant_option_ids": ids,
                "color_variant_id": r[3],
                "final_price": r[4],
                "stock": r[5],
            }
        )
else:
    print("\n=== Variant counts ===")
    cur.execute(
        "SELECT product_id, COUNT(*) FROM product_variants GROUP BY product_id ORDER BY product_id DESC LIMIT 20"
    )
    for r in cur.fetchall():
        print(r)

conn.close()

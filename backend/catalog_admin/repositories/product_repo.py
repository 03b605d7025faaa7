from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from catalog_admin.models.color_variant import ColorVariant
from catalog_admin.models.product import Product
from catalog_admin.models.product_variant import ProductVariant
from catalog_admin.models.variant_type import VariantOption, VariantType
from catalog_admin.utils.slug import with_suffix


class ProductRepository:
    """
    Session-bound writes and reads for a product and the rows it owns.
    Writes only flush; the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return (
            self.db.query(Product)
            .options(
                selectinload(Product.variant_types).selectinload(VariantType.options),
                selectinload(Product.color_variants),
                selectinload(Product.variants),
            )
            .filter(Product.id == product_id)
            .first()
        )

    def slug_exists(self, slug: str) -> bool:
        return (
            self.db.query(func.count(Product.id)).filter(Product.slug == slug).scalar()
            or 0
        ) > 0

    def next_available_slug(self, base: str) -> str:
        """base, base-2, base-3, ... whichever is free first."""
        slug = base
        n = 2
        while self.slug_exists(slug):
            slug = with_suffix(base, n)
            n += 1
        return slug

    def add_product(self, **fields) -> Product:
        p = Product(**fields)
        self.db.add(p)
        self.db.flush()  # ensure id assigned
        return p

    def add_variant_type(
        self,
        product_id: int,
        type_name: str,
        position: int,
        options: Sequence[dict],
    ) -> Tuple[VariantType, List[VariantOption]]:
        vt = VariantType(product_id=product_id, type_name=type_name, position=position)
        self.db.add(vt)
        self.db.flush()
        rows = [
            VariantOption(variant_type_id=vt.id, position=i, **opt)
            for i, opt in enumerate(options)
        ]
        self.db.add_all(rows)
        self.db.flush()
        return vt, rows

    def add_color_variants(
        self, product_id: int, colors: Sequence[dict]
    ) -> List[ColorVariant]:
        rows = [
            ColorVariant(product_id=product_id, position=i, **c)
            for i, c in enumerate(colors)
        ]
        if rows:
            self.db.add_all(rows)
            self.db.flush()
        return rows

    def add_variants(self, variants: Sequence[ProductVariant]) -> int:
        if not variants:
            return 0
        self.db.add_all(variants)
        self.db.flush()
        return len(variants)

    def count_rows(self, product_id: Optional[int] = None) -> dict:
        """Row counts per owned table, optionally for one product."""

        def _count(model, fk):
            q = self.db.query(func.count(model.id))
            if product_id is not None:
                q = q.filter(fk == product_id)
            return q.scalar() or 0

        option_q = self.db.query(func.count(VariantOption.id))
        if product_id is not None:
            option_q = option_q.join(VariantType).filter(
                VariantType.product_id == product_id
            )
        return {
            "products": _count(Product, Product.id),
            "variant_types": _count(VariantType, VariantType.product_id),
            "variant_options": option_q.scalar() or 0,
            "color_variants": _count(ColorVariant, ColorVariant.product_id),
            "product_variants": _count(ProductVariant, ProductVariant.product_id),
        }

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from catalog_admin.models.category import Brand, Category, Subcategory


class ReferenceRepository:
    """Read-only lookups backing the admin form's category/brand pickers."""

    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def list_subcategories(self, category_id: int) -> List[Subcategory]:
        return (
            self.db.query(Subcategory)
            .filter(Subcategory.category_id == category_id)
            .order_by(Subcategory.name)
            .all()
        )

    def list_brands(self) -> List[Brand]:
        return self.db.query(Brand).order_by(Brand.name).all()

    def ensure_reference_data(self, data: Dict) -> int:
        """
        Insert categories (with nested subcategories) and brands whose slug is
        missing. Returns the number of rows created; caller commits.
        """
        created = 0
        for ent in data.get("categories", []):
            cat = self.db.query(Category).filter(Category.slug == ent["slug"]).first()
            if not cat:
                cat = Category(name=ent["name"], slug=ent["slug"])
                self.db.add(cat)
                self.db.flush()
                created += 1
            for sub in ent.get("subcategories", []):
                exists = (
                    self.db.query(Subcategory)
                    .filter(Subcategory.slug == sub["slug"])
                    .first()
                )
                if not exists:
                    self.db.add(
                        Subcategory(category_id=cat.id, name=sub["name"], slug=sub["slug"])
                    )
                    created += 1
        for ent in data.get("brands", []):
            if not self.db.query(Brand).filter(Brand.slug == ent["slug"]).first():
                self.db.add(Brand(name=ent["name"], slug=ent["slug"], logo=ent.get("logo")))
                created += 1
        self.db.flush()
        return created

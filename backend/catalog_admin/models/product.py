from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from catalog_admin.db import Base
from catalog_admin.utils.slug import SLUG_MAX_LENGTH


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(500), nullable=False)
    slug = Column(String(SLUG_MAX_LENGTH), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    subcategory_id = Column(Integer, ForeignKey("subcategories.id"), nullable=True)
    brand_id = Column(Integer, ForeignKey("brands.id"), nullable=True)
    base_price = Column(Numeric(10, 2), nullable=False)
    crossing_price = Column(Numeric(10, 2), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    # grouped [{groupName, details: [{key, value}]}] or flat [{key, value}]
    specifications = Column(JSON, nullable=False, default=list)
    status = Column(
        String(20), nullable=False, default="draft"
    )  # draft, published, scheduled
    scheduled_at = Column(DateTime, nullable=True)
    published_at = Column(DateTime, nullable=True)
    created_at = Column(
        DateTime, default=lambda: datetime.now(timezone.utc), nullable=False
    )
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    variant_types = relationship(
        "VariantType",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="VariantType.position",
    )
    color_variants = relationship(
        "ColorVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ColorVariant.position",
    )
    variants = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductVariant.id",
    )

    def __repr__(self):
        return f"<Product id={self.id} slug={self.slug}>"

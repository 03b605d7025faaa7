from datetime import datetime, timezone

from catalog_admin.db import Base
from catalog_admin.utils.sku import SKU_MAX_LENGTH
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship


class ProductVariant(Base):
    """A materialised combination (SKU) of one option per axis and an optional color."""

    __tablename__ = "product_variants"
    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sku = Column(String(SKU_MAX_LENGTH), unique=True, index=True, nullable=False)
    # option ids, one per axis, in axis declaration order
    variant_option_ids = Column(JSON, nullable=False)
    color_variant_id = Column(
        Integer,
        ForeignKey("color_variants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    final_price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    product = relationship("Product", back_populates="variants")
    color_variant = relationship("ColorVariant")

    def __repr__(self):
        return f"<ProductVariant sku={self.sku} price={self.final_price} stock={self.stock}>"

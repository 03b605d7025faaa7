from datetime import datetime, timezone

from catalog_admin.db import Base
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship


class VariantType(Base):
    """One variant axis of a product, e.g. "Storage" or "RAM"."""

    __tablename__ = "variant_types"
    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type_name = Column(String(100), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    product = relationship("Product", back_populates="variant_types")
    options = relationship(
        "VariantOption",
        back_populates="variant_type",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="VariantOption.position",
    )


class VariantOption(Base):
    """One value of an axis, e.g. "256GB", with its price delta and stock."""

    __tablename__ = "variant_options"
    id = Column(Integer, primary_key=True, autoincrement=True)
    variant_type_id = Column(
        Integer,
        ForeignKey("variant_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(100), nullable=False)
    price_adjustment = Column(Numeric(10, 2), nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    variant_type = relationship("VariantType", back_populates="options")

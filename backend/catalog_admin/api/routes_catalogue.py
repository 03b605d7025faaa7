from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from catalog_admin.db import get_db
from catalog_admin.schemas.product_schema import ProductOut
from catalog_admin.services.product_service import ProductService

router = APIRouter(tags=["catalogue"])


@router.get("/{product_id}", summary="Get a product with its axes, colors and SKUs")
def get_product(product_id: int, db: Session = Depends(get_db)):
    p = ProductService(db).get_product(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut.model_validate(p).model_dump(mode="json", by_alias=True)

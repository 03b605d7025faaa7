from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from catalog_admin.db import get_db
from catalog_admin.services.product_service import ErrorKind, ProductService

router = APIRouter(prefix="/api/admin", tags=["admin"])

_FAILURE_STATUS = {
    ErrorKind.VALIDATION.value: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.COMBINATORIAL_OVERFLOW.value: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.PERSISTENCE.value: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post(
    "/products",
    summary="Create a product and materialise every variant combination",
)
def create_product(payload: Any = Body(...), db: Session = Depends(get_db)):
    """
    payload: {
      "name": "Pixel 9", "description": "...", "categoryId": 1, "basePrice": 999.0,
      "variantTypes": [{"typeName": "Storage", "options": [{"name": "128GB", "priceAdjustment": 0, "stock": 10}]}],
      "colorVariants": [{"colorName": "Black", "images": ["https://..."], "stock": 7}],
      "images": ["https://..."], "status": "draft"
    }
    """
    svc = ProductService(db)
    try:
        result = svc.create_product(payload)
    except Exception:
        # internal error
        raise HTTPException(status_code=500, detail="Internal error creating product")
    if result["success"]:
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=result)
    return JSONResponse(status_code=_FAILURE_STATUS[result["errorKind"]], content=result)

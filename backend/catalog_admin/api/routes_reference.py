from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from catalog_admin.db import get_db
from catalog_admin.repositories.reference_repo import ReferenceRepository
from catalog_admin.schemas.reference_schema import BrandOut, CategoryOut, SubcategoryOut

router = APIRouter(prefix="/api", tags=["reference"])


@router.get("/categories", summary="List categories")
def list_categories(db: Session = Depends(get_db)):
    repo = ReferenceRepository(db)
    return [CategoryOut.model_validate(c).model_dump(by_alias=True) for c in repo.list_categories()]


@router.get("/categories/{category_id}/subcategories", summary="List subcategories of a category")
def list_subcategories(category_id: int, db: Session = Depends(get_db)):
    repo = ReferenceRepository(db)
    if not repo.get_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return [
        SubcategoryOut.model_validate(s).model_dump(by_alias=True)
        for s in repo.list_subcategories(category_id)
    ]


@router.get("/brands", summary="List brands")
def list_brands(db: Session = Depends(get_db)):
    repo = ReferenceRepository(db)
    return [BrandOut.model_validate(b).model_dump(by_alias=True) for b in repo.list_brands()]

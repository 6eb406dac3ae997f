from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from storefront.api.deps import get_category_service
from storefront.domain.errors import CategoryNotFound, StorefrontError
from storefront.domain.schemas import CategoryCreate, CategoryRead
from storefront.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, svc: CategoryService = Depends(get_category_service)):
    try:
        return svc.create_category(payload)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=List[CategoryRead])
def list_categories(svc: CategoryService = Depends(get_category_service)):
    return svc.list_categories()


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(
    category_id: int = Path(..., gt=0),
    svc: CategoryService = Depends(get_category_service),
):
    try:
        return svc.get_category(category_id)
    except CategoryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

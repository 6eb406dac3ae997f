# storefront/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from storefront.api.deps import get_product_service
from storefront.domain.errors import ProductNotFound, StorefrontError
from storefront.domain.schemas import ProductCreate, ProductRead, ProductUpdate
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


# fixed paths first, /{product_id} would swallow them
@router.get("/category/{category_id}", response_model=List[ProductRead])
def get_products_by_category(
    category_id: int = Path(..., gt=0),
    sort: Optional[str] = Query(None, description="field,DIR e.g. price,ASC"),
    limit: Optional[int] = Query(None, ge=1),
    offset: Optional[int] = Query(None, ge=0),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.get_products_by_category(category_id, sort=sort, limit=limit, offset=offset)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/categories", response_model=List[ProductRead])
def get_products_by_categories(
    categories: Optional[str] = Query(None, description="comma-separated category ids"),
    sort: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    offset: Optional[int] = Query(None, ge=0),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.get_products_by_categories(categories, sort=sort, limit=limit, offset=offset)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=List[ProductRead])
def list_products(svc: ProductService = Depends(get_product_service)):
    return svc.list_products()


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.create_product(payload)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int = Path(..., gt=0),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.get_product(product_id)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    payload: ProductUpdate,
    product_id: int = Path(..., gt=0),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.update_product(product_id, payload)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int = Path(..., gt=0),
    svc: ProductService = Depends(get_product_service),
):
    try:
        deleted = svc.delete_product(product_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    if deleted == 0:
        raise HTTPException(status_code=404, detail=ProductNotFound.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

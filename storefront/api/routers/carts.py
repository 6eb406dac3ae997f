#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from storefront.api.deps import get_cart_service
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    CartItemRead,
    CartItemsView,
    CartRead,
    ItemIn,
    QuantityIn,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/carts", tags=["carts"])


@router.post("/{user_id}", response_model=CartRead, status_code=status.HTTP_201_CREATED)
def create_cart(
    user_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.create_cart(user_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post(
    "/{cart_id}/items",
    response_model=CartItemRead,
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    payload: ItemIn,
    cart_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item_to_cart(
            cart_id=cart_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{cart_id}/items", response_model=CartItemsView)
def get_cart_items(
    cart_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.get_cart_items(cart_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/items/{item_id}", response_model=CartItemRead)
def update_item(
    payload: QuantityIn,
    item_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_cart_item(item_id, payload.quantity)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(
    item_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.remove_cart_item(item_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

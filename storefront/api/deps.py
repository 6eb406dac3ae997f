# storefront/api/deps.py
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.services.cart_service import CartService
from storefront.services.category_service import CategoryService
from storefront.services.lock_service import LockService
from storefront.services.product_service import ProductService


@lru_cache
def get_lock_service() -> LockService:
    # one redis client (and connection pool) per process
    return LockService()


def get_cart_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, lock_service=lock_service)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)

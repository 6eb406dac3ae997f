# storefront/repos/product_repo.py
from typing import Any, Sequence

from sqlalchemy import asc, delete, desc, select, update

from storefront.data.models.product import ProductModel
from storefront.repos.base import BaseRepo


class ProductRepo(BaseRepo):
    def get_product(self, product_id: int) -> ProductModel | None:
        # inventory is always read fresh from the store
        return self.get(ProductModel, product_id, populate_existing=True)

    def list_products(
        self,
        category_ids: Sequence[int] | None = None,
        sort: tuple[str, str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[ProductModel]:
        stmt = select(ProductModel)
        if category_ids is not None:
            stmt = stmt.where(ProductModel.category_id.in_(category_ids))
        if sort:
            field, direction = sort
            column = getattr(ProductModel, field)
            stmt = stmt.order_by(asc(column) if direction == "ASC" else desc(column))
        else:
            stmt = stmt.order_by(ProductModel.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return list(self.execute(stmt).scalars().all())

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.commit()
        self.refresh(product)
        return product

    def update_product(self, product_id: int, values: dict[str, Any]) -> int:
        result = self.execute(
            update(ProductModel).where(ProductModel.id == product_id).values(**values)
        )
        self.commit()
        return result.rowcount

    def delete_product(self, product_id: int) -> int:
        result = self.execute(delete(ProductModel).where(ProductModel.id == product_id))
        self.commit()
        return result.rowcount

# storefront/repos/cart_repo.py
from sqlalchemy import delete, select, update
from sqlalchemy.orm import joinedload

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.repos.base import BaseRepo


class CartRepo(BaseRepo):
    # ---------- carts ----------
    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.commit()
        self.refresh(cart)
        return cart

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.get(CartModel, cart_id)

    # ---------- cart items ----------
    # populate_existing: rows always reflect the store, not the identity map
    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.execute(
            select(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_cart_item_by_id(self, item_id: int, with_product: bool = False) -> CartItemModel | None:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.id == item_id)
            .execution_options(populate_existing=True)
        )
        if with_product:
            stmt = stmt.options(joinedload(CartItemModel.product))
        return self.execute(stmt).scalar_one_or_none()

    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        return list(
            self.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .options(joinedload(CartItemModel.product))
                .order_by(CartItemModel.id)
                .execution_options(populate_existing=True)
            ).scalars().all()
        )

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.commit()
        self.refresh(item)
        return item

    def update_item_quantity(self, item_id: int, old_quantity: int, new_quantity: int) -> int:
        """
        Compare-and-swap on quantity:
        UPDATE cart_items SET quantity = new WHERE id = :id AND quantity = old

        Returns the number of rows changed, 0 means another writer got there first.
        """
        result = self.execute(
            update(CartItemModel)
            .where(
                CartItemModel.id == item_id,
                CartItemModel.quantity == old_quantity,
            )
            .values(quantity=new_quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart_item(self, item_id: int) -> int:
        result = self.execute(
            delete(CartItemModel).where(CartItemModel.id == item_id)
        )
        return result.rowcount

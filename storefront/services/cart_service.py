from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel
from storefront.domain.errors import (
    CartNotFound,
    ConcurrencyConflict,
    InsufficientInventory,
    InvalidQuantity,
    ItemNotFound,
    ProductNotFound,
    StorageError,
)
from storefront.domain.schemas import (
    CartItemRead,
    CartItemsView,
    CartRead,
    CartSummary,
    PricedCartItem,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService, cart_item_key, cart_line_key
from storefront.services.pricing import price_cart
from storefront.utils.retry import conflict_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases.
    commands (create, add, update, remove) change state
    query (get_cart_items) only reads and prices

    Every read-check-write runs under a Redis lock for its key and writes the
    quantity with a compare-and-swap; a lost race raises ConcurrencyConflict
    and the whole use case is retried against fresh state.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service

    #query
    def get_cart_items(self, cart_id: int) -> CartItemsView:
        items = self.repo.get_cart_items(cart_id)
        lines, totals = price_cart(
            (i.quantity, i.product.price, i.product.tax_rate) for i in items
        )

        return CartItemsView(
            items=[
                PricedCartItem(
                    **CartItemRead.model_validate(item).model_dump(),
                    item_subtotal=line.subtotal,
                    item_tax=line.tax,
                )
                for item, line in zip(items, lines)
            ],
            summary=CartSummary(
                subtotal=totals.subtotal,
                total_tax=totals.total_tax,
                total=totals.total,
            ),
        )

    #commands
    def create_cart(self, user_id: int) -> CartRead:
        created = self.repo.create_cart(CartModel(user_id=user_id))
        logger.info(f"Created cart {created.id} for user {user_id}")
        return CartRead.model_validate(created)

    @conflict_retry()
    def add_item_to_cart(self, cart_id: int, product_id: int, quantity: int) -> CartItemRead:
        self._ensure_positive(quantity)

        product = self.products.get_product(product_id)
        if not product:
            raise ProductNotFound()

        if not self.repo.get_cart(cart_id):
            raise CartNotFound()

        with self.lock_service.hold(cart_line_key(cart_id, product_id)):
            existing = self.repo.get_cart_item(cart_id, product_id)

            if existing is None:
                self._ensure_inventory(product, quantity)
                logger.info(f"Adding product {product_id} x{quantity} to cart {cart_id}")
                try:
                    created = self.repo.add_cart_item(
                        CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity)
                    )
                except IntegrityError as e:
                    # u_cart_product: someone inserted the same line first
                    if self.repo.get_cart_item(cart_id, product_id) is not None:
                        raise ConcurrencyConflict() from e
                    logger.error(f"Inserting cart item failed: {e}")
                    raise StorageError() from e
                return CartItemRead.model_validate(created)

            # merge: the ceiling applies to the merged total, not the delta
            requested_total = existing.quantity + quantity
            self._ensure_inventory(product, requested_total)
            logger.info(
                f"Product {product_id} already in cart {cart_id}, "
                f"quantity {existing.quantity} -> {requested_total}"
            )
            self._swap_quantity(existing, requested_total)
            return CartItemRead.model_validate(existing)

    @conflict_retry()
    def update_cart_item(self, item_id: int, quantity: int) -> CartItemRead:
        self._ensure_positive(quantity)

        with self.lock_service.hold(cart_item_key(item_id)):
            item = self.repo.get_cart_item_by_id(item_id, with_product=True)
            if not item:
                raise ItemNotFound()

            self._ensure_inventory(item.product, quantity)
            logger.info(f"Setting cart item {item_id} quantity {item.quantity} -> {quantity}")
            self._swap_quantity(item, quantity)
            return CartItemRead.model_validate(item)

    @conflict_retry()
    def remove_cart_item(self, item_id: int) -> None:
        with self.lock_service.hold(cart_item_key(item_id)):
            item = self.repo.get_cart_item_by_id(item_id)
            if not item:
                raise ItemNotFound()

            cart_id = item.cart_id
            if self.repo.delete_cart_item(item.id) == 0:
                self.repo.rollback()
                raise ItemNotFound()
            self.repo.commit()

        logger.info(f"Removed cart item {item_id} from cart {cart_id}")

    # ---------- helpers ----------
    def _ensure_positive(self, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantity()

    def _ensure_inventory(self, product: ProductModel, requested: int) -> None:
        if requested > product.inventory:
            logger.warning(
                f"Rejected {requested} units of product {product.id}, "
                f"inventory is {product.inventory}"
            )
            raise InsufficientInventory()

    def _swap_quantity(self, item: CartItemModel, new_quantity: int) -> None:
        # UPDATE ... WHERE id = :id AND quantity = :read_quantity
        rowcount = self.repo.update_item_quantity(item.id, item.quantity, new_quantity)
        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Cart item {item.id} changed concurrently, retrying")
            raise ConcurrencyConflict()
        self.repo.commit()

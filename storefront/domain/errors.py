# storefront/domain/errors.py
"""
Storefront domain errors.

Service layer raises them, routers translate them into HTTP responses
using ``status_code`` and the stable ``message``.
"""


class StorefrontError(Exception):
    status_code = 400
    message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidQuantity(StorefrontError):
    message = "Quantity must be a positive integer"


class ProductNotFound(StorefrontError):
    message = "Product not found"


class CartNotFound(StorefrontError):
    message = "Cart not found"


class ItemNotFound(StorefrontError):
    message = "Item not found"


class InsufficientInventory(StorefrontError):
    message = "Not enough inventory available"


class CategoryNotFound(StorefrontError):
    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(f"Category with id {category_id} does not exist")


class CategoryAlreadyExists(StorefrontError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Category "{name}" already exists')


class InvalidQuery(StorefrontError):
    pass


class ConcurrencyConflict(StorefrontError):
    status_code = 409
    message = "Cart was modified concurrently, retry later"


class CartBusy(ConcurrencyConflict):
    """Lock for a cart line could not be taken in time."""


class ProductInUse(StorefrontError):
    status_code = 409
    message = "Product is still referenced by cart items"


class StorageError(StorefrontError):
    status_code = 500
    message = "Storage failure"

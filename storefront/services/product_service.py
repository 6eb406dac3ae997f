# storefront/services/product_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import CategoryNotFound, InvalidQuery, ProductInUse, ProductNotFound
from storefront.domain.schemas import ProductCreate, ProductRead, ProductUpdate
from storefront.repos.category_repo import CategoryRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SORTABLE_FIELDS = {"id", "name", "price", "tax_rate", "inventory"}
SORT_DIRECTIONS = {"ASC", "DESC"}


def parse_sort(sort: str | None) -> tuple[str, str] | None:
    """
    ``"price,ASC"`` -> ``("price", "ASC")``; direction defaults to ASC.
    ``taxRate`` is accepted as an alias of ``tax_rate``.
    """
    if not sort:
        return None

    field, _, direction = sort.partition(",")
    field = "tax_rate" if field.strip() == "taxRate" else field.strip()
    direction = (direction.strip() or "ASC").upper()

    if field not in SORTABLE_FIELDS:
        raise InvalidQuery(f"Cannot sort by '{field}'")
    if direction not in SORT_DIRECTIONS:
        raise InvalidQuery(f"Sort direction must be ASC or DESC, got '{direction}'")
    return field, direction


def parse_category_ids(categories: str | None) -> list[int]:
    if not categories or not categories.strip():
        raise InvalidQuery("Categories parameter is required")
    try:
        return [int(part) for part in categories.split(",") if part.strip()]
    except ValueError as e:
        raise InvalidQuery("Categories must be a comma-separated list of ids") from e


class ProductService:
    """
    Catalog of products.

    Cart code only needs ``get_product``; the rest backs the product endpoints.
    Every write that names a category checks that the category exists first.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)

    def list_products(self) -> list[ProductRead]:
        return [ProductRead.model_validate(p) for p in self.repo.list_products()]

    def get_product(self, product_id: int) -> ProductRead:
        product = self.repo.get_product(product_id)
        if not product:
            raise ProductNotFound()
        return ProductRead.model_validate(product)

    def create_product(self, payload: ProductCreate) -> ProductRead:
        self._ensure_category(payload.category_id)

        created = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info(f"Created product {created.id} in category {created.category_id}")
        return ProductRead.model_validate(created)

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductRead:
        # explicit nulls only make sense for the description
        values = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k == "description"
        }

        # category is checked only when the payload carries one
        if "category_id" in values:
            self._ensure_category(values["category_id"])

        if values and self.repo.update_product(product_id, values) == 0:
            raise ProductNotFound()

        logger.info(f"Updated product {product_id}: {sorted(values)}")
        return self.get_product(product_id)

    def delete_product(self, product_id: int) -> int:
        try:
            deleted = self.repo.delete_product(product_id)
        except IntegrityError as e:
            # cart_items.product_id still points at it
            logger.warning(f"Product {product_id} is in a cart, not deleted")
            raise ProductInUse() from e
        logger.info(f"Deleted {deleted} product(s) with id {product_id}")
        return deleted

    def get_products_by_category(
        self,
        category_id: int,
        sort: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[ProductRead]:
        return self._list([category_id], sort, limit, offset)

    def get_products_by_categories(
        self,
        categories: str | None,
        sort: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[ProductRead]:
        return self._list(parse_category_ids(categories), sort, limit, offset)

    def _list(self, category_ids, sort, limit, offset) -> list[ProductRead]:
        products = self.repo.list_products(
            category_ids=category_ids,
            sort=parse_sort(sort),
            limit=limit,
            offset=offset,
        )
        return [ProductRead.model_validate(p) for p in products]

    def _ensure_category(self, category_id: int) -> None:
        if not self.categories.get_category(category_id):
            raise CategoryNotFound(category_id)

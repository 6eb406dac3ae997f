from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.domain.errors import CategoryAlreadyExists, CategoryNotFound
from storefront.domain.schemas import CategoryCreate, CategoryRead
from storefront.repos.category_repo import CategoryRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)

    def create_category(self, payload: CategoryCreate) -> CategoryRead:
        if self.repo.get_category_by_name(payload.name):
            raise CategoryAlreadyExists(payload.name)

        try:
            created = self.repo.create_category(CategoryModel(name=payload.name))
        except IntegrityError as e:
            raise CategoryAlreadyExists(payload.name) from e

        logger.info(f"Created category {created.id} ({created.name})")
        return CategoryRead.model_validate(created)

    def list_categories(self) -> list[CategoryRead]:
        return [CategoryRead.model_validate(c) for c in self.repo.list_categories()]

    def get_category(self, category_id: int) -> CategoryRead:
        category = self.repo.get_category(category_id)
        if not category:
            raise CategoryNotFound(category_id)
        return CategoryRead.model_validate(category)

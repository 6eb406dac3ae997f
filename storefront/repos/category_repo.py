# storefront/repos/category_repo.py
from sqlalchemy import select

from storefront.data.models.category import CategoryModel
from storefront.repos.base import BaseRepo


class CategoryRepo(BaseRepo):
    def create_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.commit()
        self.refresh(category)
        return category

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.get(CategoryModel, category_id)

    def get_category_by_name(self, name: str) -> CategoryModel | None:
        return self.execute(
            select(CategoryModel).where(CategoryModel.name == name)
        ).scalar_one_or_none()

    def list_categories(self) -> list[CategoryModel]:
        return list(self.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars().all())

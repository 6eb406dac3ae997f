# storefront/repos/base.py
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import storefront.data.models  # noqa: F401  (registers every mapper for relationship lookups)
from storefront.domain.errors import StorageError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class BaseRepo:
    """
    Every statement, lookup, refresh and commit goes through ``storage``:
    the session is rolled back and the failure surfaces as StorageError.
    IntegrityError is re-raised as is, the caller knows what it means.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def storage(self, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{action} failed: {e}")
            raise StorageError() from e

    def execute(self, stmt):
        with self.storage("Statement"):
            return self.db.execute(stmt)

    def get(self, model, ident: Any, **kwargs):
        with self.storage(f"Loading {model.__name__}"):
            return self.db.get(model, ident, **kwargs)

    def refresh(self, instance) -> None:
        with self.storage("Refresh"):
            self.db.refresh(instance)

    def commit(self) -> None:
        with self.storage("Commit"):
            self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

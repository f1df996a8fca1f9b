"""
Session-backed backend.

One long-lived Session per repository. Writes commit once per call, so a
batch is all-or-nothing; a failed commit rolls the session back before
the store error propagates.
"""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..database import TIME_STAMP_COLUMN
from ..errors import NotSupportedError
from ..logger import get_logger
from .base import DataRepository, Predicate, is_clause


class OrmRepository(DataRepository):
    backend = "orm"

    def __init__(self, poco_cls, session: Session):
        super().__init__(poco_cls)
        self.session = session

    def _loader_options(self, include) -> list:
        options = []
        for relation in include:
            attr = getattr(self.poco_cls, relation) if isinstance(relation, str) else relation
            options.append(selectinload(attr))
        return options

    def _query(self, predicate: Optional[Predicate], include):
        stmt = select(self.poco_cls).options(*self._loader_options(include))
        if predicate is not None and is_clause(predicate):
            stmt = stmt.where(predicate)
        # Reads reflect the store, not rows cached from earlier calls.
        return stmt.execution_options(populate_existing=True)

    def _commit(self, operation: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger = get_logger()
            logger.record_store_error(self.entity_name, type(e).__name__)
            logger.error(
                f"{self.entity_name} {operation} failed",
                backend=self.backend,
                error=str(e.orig) if getattr(e, "orig", None) else str(e),
            )
            raise

    # Contract

    def add(self, *items) -> None:
        get_logger().record_operation(self.entity_name, "add")
        for item in items:
            self.session.add(item)
        self._commit("add")
        get_logger().debug(f"{self.entity_name} added", count=len(items))

    def update(self, *items) -> None:
        get_logger().record_operation(self.entity_name, "update")
        for item in items:
            persistent = self.session.get(self.poco_cls, self.key_of(item))
            if persistent is None:
                get_logger().debug(f"{self.entity_name} update matched no row", key=self.key_of(item))
                continue
            if persistent is item:
                continue
            for column_name, attr in self.columns.items():
                if attr == self.key_attr or column_name == TIME_STAMP_COLUMN:
                    continue
                setattr(persistent, attr, getattr(item, attr))
        self._commit("update")

    def remove(self, *items) -> None:
        get_logger().record_operation(self.entity_name, "remove")
        for item in items:
            persistent = self.session.get(self.poco_cls, self.key_of(item))
            if persistent is None:
                get_logger().debug(f"{self.entity_name} remove matched no row", key=self.key_of(item))
                continue
            self.session.delete(persistent)
        self._commit("remove")

    def get_all(self, *include) -> List[Any]:
        get_logger().record_operation(self.entity_name, "get_all")
        return list(self.session.scalars(self._query(None, include)).all())

    def get_single(self, predicate: Predicate, *include) -> Optional[Any]:
        get_logger().record_operation(self.entity_name, "get_single")
        if is_clause(predicate):
            return self.session.scalars(self._query(predicate, include).limit(1)).first()
        for poco in self.session.scalars(self._query(None, include)).all():
            if predicate(poco):
                return poco
        return None

    def get_filtered(self, predicate: Predicate, *include) -> List[Any]:
        get_logger().record_operation(self.entity_name, "get_filtered")
        rows = self.session.scalars(self._query(predicate, include)).all()
        if is_clause(predicate):
            return list(rows)
        return [poco for poco in rows if predicate(poco)]

    def call_procedure(self, name: str, *parameters) -> None:
        raise NotSupportedError(self.backend, "call_procedure")

    def close(self) -> None:
        self.session.close()

"""
Direct-statement backend.

Every statement runs on its own connection taken from a NullPool engine,
so each call opens a store connection, executes, commits and closes.
Items in one add/update/remove call are not wrapped in a transaction:
a failure on item N leaves items before it persisted and skips the rest.

Relationship attributes are never populated by this backend.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..database import TIME_STAMP_COLUMN
from ..errors import NotSupportedError
from ..logger import get_logger
from .base import DataRepository, Predicate, is_clause


class SqlRepository(DataRepository):
    backend = "sql"

    def __init__(self, poco_cls, engine: Engine):
        super().__init__(poco_cls)
        self.engine = engine

    # Statement helpers

    def _execute(self, operation: str, statement):
        """Run one statement on a fresh connection; returns (rowcount, inserted key)."""
        with self.engine.connect() as conn:
            try:
                result = conn.execute(statement)
                inserted_key = result.inserted_primary_key[0] if result.is_insert else None
                rowcount = result.rowcount
                conn.commit()
            except SQLAlchemyError as e:
                logger = get_logger()
                logger.record_store_error(self.entity_name, type(e).__name__)
                logger.error(
                    f"{self.entity_name} {operation} failed",
                    backend=self.backend,
                    error=str(e.orig) if getattr(e, "orig", None) else str(e),
                )
                raise
        return rowcount, inserted_key

    def _select(self, statement) -> List[Any]:
        with self.engine.connect() as conn:
            rows = conn.execute(statement).mappings().all()
        return [self._to_poco(row) for row in rows]

    def _to_poco(self, row) -> Any:
        poco = self.poco_cls()
        for column_name, attr in self.columns.items():
            setattr(poco, attr, row[column_name])
        return poco

    def _insert_values(self, item) -> Dict[Any, Any]:
        values = {}
        for column in self.table.columns:
            if column.name == TIME_STAMP_COLUMN:
                continue
            value = getattr(item, self.columns[column.name])
            # Leave unset values to the column default (generated id, flags).
            if value is None and column.default is not None:
                continue
            values[column] = value
        return values

    def _update_values(self, item) -> Dict[Any, Any]:
        return {
            column: getattr(item, self.columns[column.name])
            for column in self.table.columns
            if column is not self.key_column and column.name != TIME_STAMP_COLUMN
        }

    # Contract

    def add(self, *items) -> None:
        get_logger().record_operation(self.entity_name, "add")
        for item in items:
            _, inserted_key = self._execute("add", insert(self.table).values(self._insert_values(item)))
            if self.key_of(item) is None:
                setattr(item, self.key_attr, inserted_key)
            get_logger().debug(f"{self.entity_name} inserted", key=self.key_of(item))

    def update(self, *items) -> None:
        get_logger().record_operation(self.entity_name, "update")
        for item in items:
            stmt = (
                update(self.table)
                .where(self.key_column == self.key_of(item))
                .values(self._update_values(item))
            )
            rowcount, _ = self._execute("update", stmt)
            if rowcount == 0:
                get_logger().debug(f"{self.entity_name} update matched no row", key=self.key_of(item))

    def remove(self, *items) -> None:
        get_logger().record_operation(self.entity_name, "remove")
        for item in items:
            stmt = delete(self.table).where(self.key_column == self.key_of(item))
            rowcount, _ = self._execute("remove", stmt)
            if rowcount == 0:
                get_logger().debug(f"{self.entity_name} remove matched no row", key=self.key_of(item))

    def get_all(self, *include) -> List[Any]:
        get_logger().record_operation(self.entity_name, "get_all")
        if include:
            get_logger().debug(
                f"{self.entity_name} relations ignored by sql backend",
                include=[getattr(i, "key", i) for i in include],
            )
        return self._select(select(self.table))

    def get_single(self, predicate: Predicate, *include) -> Optional[Any]:
        get_logger().record_operation(self.entity_name, "get_single")
        if is_clause(predicate):
            rows = self._select(select(self.table).where(predicate).limit(1))
            return rows[0] if rows else None
        # Python callables cannot be translated; filter the full table.
        for poco in self._select(select(self.table)):
            if predicate(poco):
                return poco
        return None

    def get_filtered(self, predicate: Predicate, *include) -> List[Any]:
        raise NotSupportedError(self.backend, "get_filtered")

    def call_procedure(self, name: str, *parameters) -> None:
        raise NotSupportedError(self.backend, "call_procedure")

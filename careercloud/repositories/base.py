"""
Repository contract.

Responsibilities:
- Uniform CRUD + query surface for one entity class.
- Propagate store errors unchanged.

Non-Responsibilities:
- No business rules (see careercloud.logic).
- No retries, no existence checks before update/remove.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple, Union

from sqlalchemy import inspect
from sqlalchemy.sql import ClauseElement

# A store-side boolean clause (pushed down) or a plain Python predicate.
Predicate = Union[ClauseElement, Callable[[Any], bool]]


def is_clause(predicate: Predicate) -> bool:
    return isinstance(predicate, ClauseElement)


class DataRepository(ABC):
    """Persistence contract for one entity class."""

    backend = "abstract"

    def __init__(self, poco_cls):
        self.poco_cls = poco_cls
        self.entity_name = poco_cls.__name__
        mapper = inspect(poco_cls)
        self.table = mapper.local_table
        # Named column mapping: column name -> attribute key.
        self.columns = {}
        for prop in mapper.column_attrs:
            for col in prop.columns:
                self.columns[col.name] = prop.key
        pk_cols = mapper.primary_key
        if len(pk_cols) != 1:
            raise TypeError(f"{self.entity_name} must have exactly one primary key column")
        self.key_column = pk_cols[0]
        self.key_attr = self.columns[self.key_column.name]

    def key_of(self, item) -> Any:
        return getattr(item, self.key_attr)

    @abstractmethod
    def add(self, *items) -> None:
        """Insert every item. Fails on duplicate key or constraint violation."""

    @abstractmethod
    def update(self, *items) -> None:
        """Full-row replace of each item, matched by key. Unknown keys match nothing."""

    @abstractmethod
    def remove(self, *items) -> None:
        """Delete each item by key. Unknown keys match nothing."""

    @abstractmethod
    def get_all(self, *include) -> List[Any]:
        """Every row, store order, optionally eager-loading named relations."""

    @abstractmethod
    def get_single(self, predicate: Predicate, *include) -> Optional[Any]:
        """First row matching predicate, or None."""

    @abstractmethod
    def get_filtered(self, predicate: Predicate, *include) -> List[Any]:
        """Every row matching predicate."""

    @abstractmethod
    def call_procedure(self, name: str, *parameters: Tuple[str, str]) -> None:
        """Invoke a named stored routine."""

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entity_name})"

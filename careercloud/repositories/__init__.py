"""
Repositories: one persistence contract, two interchangeable backends.

    sql  SqlRepository  Core statements, one connection per statement
    orm  OrmRepository  long-lived Session, one commit per call

The backend is chosen by the settings file (Repository.Backend).
"""

from typing import Optional

from sqlalchemy.engine import Engine

from ..config import Settings
from ..database import create_db_engine, get_session
from ..logger import get_logger
from .base import DataRepository, Predicate
from .orm import OrmRepository
from .sql import SqlRepository

__all__ = [
    "DataRepository",
    "OrmRepository",
    "Predicate",
    "SqlRepository",
    "create_repository",
]


def create_repository(poco_cls, settings: Settings, engine: Optional[Engine] = None) -> DataRepository:
    """
    Build the configured repository for one entity class.

    Args:
        poco_cls: Entity class
        settings: Parsed settings; ``settings.backend`` picks the implementation
        engine: Reuse an existing engine instead of building one from the
            connection string

    Returns:
        DataRepository for poco_cls
    """
    get_logger().debug(
        "Creating repository", entity=poco_cls.__name__, backend=settings.backend
    )
    if settings.backend == "sql":
        if engine is None:
            engine = create_db_engine(settings.connection_string, pooled=False)
        return SqlRepository(poco_cls, engine)
    target = engine if engine is not None else settings.connection_string
    return OrmRepository(poco_cls, get_session(target))

"""Shared helpers for the dispatch repositories."""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping

from sqlalchemy.exc import SQLAlchemyError

from src.config.logging import get_logger
from src.domain.exceptions.storage_error import StorageError

logger = get_logger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate driver/ORM failures into StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Storage operation failed", operation=operation, error=str(e))
        raise StorageError(operation=operation) from e


def to_column_value(value: Any) -> Any:
    """Enums are persisted by value."""
    if isinstance(value, Enum):
        return value.value
    return value


def normalize_values(model: type, values: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate column names and convert enum values for an UPDATE."""
    normalized = {}
    for name, value in values.items():
        if name not in model.__table__.columns:
            raise ValueError(f"Unknown column '{name}' for {model.__tablename__}")
        normalized[name] = to_column_value(value)
    return normalized


def build_conditions(model: type, expected: Mapping[str, Any]) -> List[Any]:
    """WHERE clauses for the expected state; None matches NULL."""
    conditions = []
    for name, value in normalize_values(model, expected).items():
        column = getattr(model, name)
        if value is None:
            conditions.append(column.is_(None))
        else:
            conditions.append(column == value)
    return conditions

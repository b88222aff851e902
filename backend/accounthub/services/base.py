"""
Helpers shared by the entity services: pagination, lookups and translating
database failures into ``ServiceError``.
"""
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, col, func, or_, select

from accounthub.core.exceptions import NotFoundError, ServiceError
from accounthub.utils.validation import ensure_uuid, validate_pagination

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def backend_call(session: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise database failures as ``ServiceError``."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        reason = str(getattr(e, "orig", None) or e)
        logger.error("%s failed: %s", operation, reason)
        raise ServiceError(reason, operation=operation) from e


def parse_id(value: str, message: str = "Invalid ID format") -> uuid.UUID:
    return uuid.UUID(ensure_uuid(value, message))


def get_or_404(session: Session, model: Type[ModelType], obj_id: str, operation: str) -> ModelType:
    """Load one row by primary key, raising ``NotFoundError`` when it is missing."""
    pk = parse_id(obj_id)
    with backend_call(session, operation):
        obj = session.get(model, pk)
    if obj is None:
        raise NotFoundError(f"{model.__tablename__} {obj_id} not found", operation=operation)
    return obj


def paginate(session: Session, statement: Any, page: int, page_size: int, operation: str) -> Tuple[List[Any], int, int, int]:
    """
    Run ``statement`` for one page.

    Returns ``(rows, total, page, page_size)`` with the page parameters
    clamped to their allowed range.
    """
    page, page_size = validate_pagination(page, page_size)
    count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
    with backend_call(session, operation):
        total = session.exec(count_statement).one()
        rows = session.exec(statement.offset((page - 1) * page_size).limit(page_size)).all()
    return list(rows), total, page, page_size


def search_clause(term: str, *columns: Any) -> Any:
    """Case-insensitive substring match over any of ``columns``."""
    pattern = f"%{term}%"
    return or_(*(col(column).ilike(pattern) for column in columns))


def apply_update(obj: ModelType, updates: Union[SQLModel, Dict[str, Any]], stamp: bool = True) -> Dict[str, Any]:
    """Copy the set fields of ``updates`` onto ``obj`` and return them."""
    if isinstance(updates, dict):
        update_data = updates
    else:
        update_data = updates.model_dump(exclude_unset=True)
    obj.sqlmodel_update(update_data)
    if stamp and hasattr(obj, "updated_at"):
        obj.updated_at = utcnow()
    return update_data


def save(session: Session, obj: ModelType, operation: str) -> ModelType:
    with backend_call(session, operation):
        session.add(obj)
        session.commit()
        session.refresh(obj)
    return obj


def remove(session: Session, obj: SQLModel, operation: str) -> None:
    with backend_call(session, operation):
        session.delete(obj)
        session.commit()


def optional_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    return parse_id(value) if value else None

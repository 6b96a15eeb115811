"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from iswear_forum.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def coerce_id(value: Any) -> Optional[int]:
    """Parse a primary key; anything that is not a positive integer is None."""
    if isinstance(value, bool):
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def contains_pattern(query: str) -> str:
    """`LIKE` pattern matching `query` literally anywhere; use with `escape="\\"`."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Reusable CRUD helper for SQLAlchemy models.

    Reads never raise on a missing row or a store failure: they log and return
    None. Writes roll back and re-raise so the API layer can map the error.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    # ----- Read -----
    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """Get one record by primary key. Invalid ids are treated as not found."""
        pk = coerce_id(id)
        if pk is None:
            return None
        try:
            return db.get(self.model, pk)
        except SQLAlchemyError:
            logger.exception(f"Failed to load {self.model.__name__} id={pk}")
            return None

    def get_by_field(self, db: Session, field_name: str, value: Any) -> Optional[ModelType]:
        """Get first record where given field equals value."""
        if not hasattr(self.model, field_name):
            raise AttributeError(f"Model '{self.model.__name__}' has no field '{field_name}'")
        stmt = select(self.model).where(getattr(self.model, field_name) == value).limit(1)
        try:
            return db.scalars(stmt).first()
        except SQLAlchemyError:
            logger.exception(f"Failed to load {self.model.__name__} by {field_name}")
            return None

    def get_count(self, db: Session) -> int:
        """Total number of rows."""
        return db.scalar(select(func.count()).select_from(self.model)) or 0

    # ----- Create -----
    def create(
        self,
        db: Session,
        *,
        obj_in: Union[CreateSchemaType, Dict[str, Any]],
        commit: bool = True,
    ) -> ModelType:
        """Create a new record from a Pydantic schema or dict.

        With `commit=False` the row is only flushed; the caller owns the transaction.
        """
        obj_in_data: Dict[str, Any] = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
        db_obj = self.model(**obj_in_data)  # type: ignore[arg-type]
        try:
            db.add(db_obj)
            if not commit:
                db.flush()
                return db_obj
            db.commit()
            db.refresh(db_obj)
        except Exception:
            db.rollback()
            raise
        return db_obj

    # ----- Update -----
    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        """Update a record with fields from a Pydantic schema or dict."""
        update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        try:
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        except Exception:
            db.rollback()
            raise
        return db_obj

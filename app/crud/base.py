from typing import Generic, TypeVar, Type, Optional, List, Any, Dict
from sqlalchemy.orm import Session
from sqlalchemy import select
from pydantic import BaseModel
from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic record store over a SQLAlchemy session.

    Provides create/get/list/update for one entity kind. Identities are
    generated by the model (UUID strings). The store merges fields as
    given and never validates cross-field invariants; that belongs to
    the service layer.

    Type Parameters:
        ModelType: SQLAlchemy model class
        CreateSchemaType: Pydantic schema for creating records
        UpdateSchemaType: Pydantic schema for updating records
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize CRUD object with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def get(self, db: Session, id: str) -> Optional[ModelType]:
        """
        Retrieve a single record by ID.

        Args:
            db: Database session
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        return db.get(self.model, id)

    def get_for_update(self, db: Session, id: str) -> Optional[ModelType]:
        """
        Retrieve a record with a row lock held until the next commit.

        Backends without row locks (SQLite) ignore FOR UPDATE, so callers
        that need serialization also hold a per-record process lock.

        Args:
            db: Database session
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        stmt = (
            select(self.model)
            .where(self.model.id == id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get_multi(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[ModelType]:
        """
        Retrieve multiple records with pagination and equality filters.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records to return
            filters: Column name -> value equality filters

        Returns:
            List of model instances in creation order
        """
        stmt = select(self.model)
        for column, value in (filters or {}).items():
            stmt = stmt.where(getattr(self.model, column) == value)
        stmt = stmt.order_by(self.model.created_at, self.model.id).offset(skip).limit(limit)
        result = db.execute(stmt)
        return list(result.scalars().all())

    def create(
        self,
        db: Session,
        *,
        obj_in: CreateSchemaType | Dict[str, Any],
        **extra: Any
    ) -> ModelType:
        """
        Create a new record.

        Unset optional fields take the model's declared defaults.

        Args:
            db: Database session
            obj_in: Pydantic schema or dict with creation data
            **extra: Additional column values (e.g. owning client_id)

        Returns:
            Created model instance
        """
        if isinstance(obj_in, dict):
            obj_data = dict(obj_in)
        else:
            obj_data = obj_in.model_dump()
        obj_data.update(extra)
        db_obj = self.model(**obj_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def apply(
        self,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """
        Shallow-merge fields into a loaded record without committing.

        Only fields explicitly set on a schema are merged; nested values
        (lists) are replaced, not merged.
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        id: str,
        obj_in: UpdateSchemaType | Dict[str, Any]
    ) -> Optional[ModelType]:
        """
        Merge the given fields into an existing record.

        No optimistic concurrency check: concurrent updates to the same
        id race and the last write wins.

        Args:
            db: Database session
            id: Record ID
            obj_in: Pydantic schema or dict with update data

        Returns:
            Updated model instance or None if not found
        """
        db_obj = self.get(db=db, id=id)
        if db_obj is None:
            return None

        self.apply(db_obj, obj_in)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

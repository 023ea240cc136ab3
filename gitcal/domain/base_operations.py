from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseOperations(Generic[ModelType]):
    """Base lookup and update operations for integer-keyed models."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: int) -> ModelType | None:
        """Get a single record by ID."""
        statement = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        obj_in: dict,
    ) -> ModelType:
        """Update an existing record.

        All keys in obj_in are applied, including None values.
        """
        for field, value in obj_in.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

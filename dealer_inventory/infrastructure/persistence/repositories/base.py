"""Base repositories: generic access by id and tenant-scoped paging over query plans."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dealer_inventory.domain.exceptions import ValidationException
from dealer_inventory.domain.value_objects.query import QueryPlan
from dealer_inventory.infrastructure.persistence.database import Base
from dealer_inventory.infrastructure.persistence.query_compiler import (
    build_count_query,
    build_page_query,
)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create and save."""

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server-side defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj


class TenantScopedRepository(BaseRepository[ModelType]):
    """Repository that enforces dealership isolation.

    Every read is filtered by dealership_id and every write is checked
    against the dealership passed at construction.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType], dealership_id: str) -> None:
        super().__init__(db, model)
        self._dealership_id = dealership_id

    @property
    def dealership_id(self) -> str:
        return self._dealership_id

    def _assert_tenant(self, obj: ModelType, operation: str) -> None:
        """Raise if obj.dealership_id does not match this repo's dealership."""
        if getattr(obj, "dealership_id", None) != self._dealership_id:
            raise ValidationException(
                f"Cannot {operation} entity belonging to another dealership",
                field="dealership_id",
            )

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key and dealership_id, or None."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(
                model.id == entity_id,
                model.dealership_id == self._dealership_id,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        self._assert_tenant(obj, "create")
        return await super().create(obj)

    async def save(self, obj: ModelType) -> ModelType:
        self._assert_tenant(obj, "update")
        return await super().save(obj)

    async def find_page(self, plan: QueryPlan) -> tuple[list[ModelType], int]:
        """Run a query plan: one page of rows plus the total matching count."""
        if plan.tenant_id != self._dealership_id:
            raise ValidationException(
                "Query plan belongs to another dealership", field="dealership_id"
            )
        rows = await self.db.execute(build_page_query(self.model, plan))
        total = await self.db.execute(build_count_query(self.model, plan))
        return list(rows.scalars().all()), int(total.scalar() or 0)


def violates_constraint(exc: IntegrityError, name: str, *markers: str) -> bool:
    """True if exc was raised by the named constraint.

    PostgreSQL reports the constraint name; SQLite reports the columns, so
    callers pass those as extra markers.
    """
    text = str(exc.orig)
    return name in text or any(m in text for m in markers)

"""SQLAlchemy mixins for common model patterns.

Provides: IntPkMixin, DealershipMixin, TimestampMixin, SoftDeleteMixin and
the combined DealershipScopedModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


class IntPkMixin:
    """Mixin for autoincrement integer primary keys."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)


class DealershipMixin:
    """Mixin for tenant-scoped models. Provides dealership_id FK with CASCADE delete."""

    @declared_attr
    def dealership_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("dealership.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class SoftDeleteMixin:
    """Mixin for soft delete (deleted_at). Null means not deleted."""

    @declared_attr
    def deleted_at(cls) -> Mapped[datetime | None]:
        return mapped_column(DateTime(timezone=True), nullable=True, index=True)


class DealershipScopedModel(IntPkMixin, DealershipMixin, TimestampMixin):
    """Combined mixin: int id + dealership_id + created_at/updated_at."""

    __abstract__ = True

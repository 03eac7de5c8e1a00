"""Dealership ORM model (the tenant)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dealer_inventory.infrastructure.persistence.database import Base
from dealer_inventory.infrastructure.persistence.models.mixins import TimestampMixin


class Dealership(TimestampMixin, Base):
    """Dealership entity. Table: dealership. The id is the opaque tenant id."""

    __tablename__ = "dealership"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

"""Vehicle ORM model. Inventory item of a dealership."""

from decimal import Decimal

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dealer_inventory.domain.enums import VehicleStatus
from dealer_inventory.infrastructure.persistence.database import Base
from dealer_inventory.infrastructure.persistence.models.mixins import (
    DealershipScopedModel,
    SoftDeleteMixin,
)


class Vehicle(DealershipScopedModel, SoftDeleteMixin, Base):
    """Vehicle entity. Table: vehicle.

    VIN is unique per dealership including soft-deleted rows.
    """

    __tablename__ = "vehicle"

    vin: Mapped[str] = mapped_column(String(17), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[VehicleStatus] = mapped_column(
        SAEnum(VehicleStatus, name="vehicle_status"),
        nullable=False,
        default=VehicleStatus.AVAILABLE,
    )
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    __table_args__ = (
        UniqueConstraint("dealership_id", "vin", name="uq_vehicle_dealership_vin"),
        Index("ix_vehicle_dealership_created", "dealership_id", "created_at"),
    )

"""Sale record ORM model (bill of sale)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String, text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from dealer_inventory.domain.enums import SaleStatus
from dealer_inventory.infrastructure.persistence.database import Base
from dealer_inventory.infrastructure.persistence.models.mixins import DealershipScopedModel

# Partial unique index: at most one SOLD record per (dealership, vehicle).
SOLD_UNIQUE_INDEX = "uq_sale_record_one_sold_per_vehicle"


class SaleRecord(DealershipScopedModel, Base):
    """Sale record entity. Table: sale_record. References one vehicle of the same dealership."""

    __tablename__ = "sale_record"

    vehicle_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("vehicle.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    final_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    buyer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    buyer_address: Mapped[str] = mapped_column(String(500), nullable=False)
    sale_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    status: Mapped[SaleStatus] = mapped_column(
        SAEnum(SaleStatus, name="sale_status"),
        nullable=False,
        default=SaleStatus.SOLD,
    )

    __table_args__ = (
        Index(
            SOLD_UNIQUE_INDEX,
            "dealership_id",
            "vehicle_id",
            unique=True,
            postgresql_where=text("status = 'SOLD'"),
            sqlite_where=text("status = 'SOLD'"),
        ),
        Index("ix_sale_record_dealership_vehicle", "dealership_id", "vehicle_id"),
    )

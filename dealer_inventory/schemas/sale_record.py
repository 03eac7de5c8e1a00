"""Sale record (bill of sale) API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from dealer_inventory.domain.enums import SaleStatus


class SaleRecordCreateRequest(BaseModel):
    """Request body for creating a sale record. Status defaults to SOLD."""

    vehicle_id: int = Field(..., gt=0)
    final_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    buyer_name: str = Field(..., min_length=1, max_length=255)
    buyer_address: str = Field(..., min_length=1, max_length=500)
    status: SaleStatus = SaleStatus.SOLD
    sale_date: datetime | None = None


class SaleRecordUpdateRequest(BaseModel):
    """Request body for updating a sale record (partial)."""

    final_price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    buyer_name: str | None = Field(default=None, min_length=1, max_length=255)
    buyer_address: str | None = Field(default=None, min_length=1, max_length=500)
    status: SaleStatus | None = None


class SaleRecordResponse(BaseModel):
    """Sale record response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    dealership_id: str
    vehicle_id: int
    final_price: Decimal
    buyer_name: str
    buyer_address: str
    sale_date: datetime
    status: SaleStatus
    created_at: datetime
    updated_at: datetime

"""Vehicle API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from dealer_inventory.domain.enums import VehicleStatus


class VehicleCreateRequest(BaseModel):
    """Request body for creating a vehicle."""

    vin: str = Field(..., min_length=17, max_length=17)
    year: int = Field(..., ge=1900)
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    status: VehicleStatus = VehicleStatus.AVAILABLE


class VehicleUpdateRequest(BaseModel):
    """Request body for updating a vehicle (partial)."""

    price: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    status: VehicleStatus | None = None
    image_url: str | None = Field(default=None, min_length=1, max_length=1024)


class VehicleResponse(BaseModel):
    """Vehicle response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    dealership_id: str
    vin: str
    year: int
    make: str
    model: str
    price: Decimal
    status: VehicleStatus
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

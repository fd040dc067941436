"""Request and response schemas for property verification."""

from datetime import datetime

from pydantic import Field

from crtlo.schemas import CamelModel


class PropertyCreate(CamelModel):
    """Body of POST /api/properties."""

    address: str = Field(..., min_length=1, description="Street address")
    units: int = Field(default=1, ge=1, description="Number of dwelling units")
    is_owner_occupied: bool = Field(
        default=False, description="Whether the owner lives in the building"
    )


class PropertyResponse(CamelModel):
    id: str
    user_id: str
    address: str
    units: int
    is_owner_occupied: bool
    is_rtlo_covered: bool
    verification_date: datetime
    created_at: datetime | None = None

"""
Property router.

Properties are verified against the RTLO when they are created; the
coverage flag is stored and returned with every listing.
"""

from fastapi import APIRouter, Depends

from crtlo.auth.dependencies import get_data_owner_id
from crtlo.db.decorators import handle_route_errors
from crtlo.db.dependencies import get_property_repository
from crtlo.db.properties.repository import PropertyRepository
from crtlo.db.properties.schemas import PropertyCreate, PropertyResponse

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.post("", response_model=PropertyResponse)
@handle_route_errors("create property")
async def create_property(
    request: PropertyCreate,
    owner_id: str = Depends(get_data_owner_id),
    repository: PropertyRepository = Depends(get_property_repository),
) -> PropertyResponse:
    """
    Create a property and record whether the RTLO covers it.

    Args:
        request: Address, unit count and owner occupancy
        owner_id: Owner of the new record
        repository: The property repository instance from dependency injection

    Returns:
        PropertyResponse: The stored property including `isRtloCovered`
    """
    prop = await repository.create_property(owner_id, request)
    await repository.session.commit()
    return PropertyResponse.model_validate(prop)


@router.get("", response_model=list[PropertyResponse])
@handle_route_errors("fetch properties")
async def list_properties(
    owner_id: str = Depends(get_data_owner_id),
    repository: PropertyRepository = Depends(get_property_repository),
) -> list[PropertyResponse]:
    """List the owner's properties, newest first."""
    properties = await repository.list_properties(owner_id)
    return [PropertyResponse.model_validate(p) for p in properties]

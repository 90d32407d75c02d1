"""
Property and location endpoints.
Listings reference both, so sellers need a way to create them.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import uuid
from app.services.property import PropertyService
from app.schemas.property import (
    PropertyCreateRequest,
    PropertyUpdateRequest,
    PropertyResponse,
    LocationCreateRequest,
    LocationResponse
)
from app.schemas.error import ERROR_RESPONSES
from app.utils.auth import TokenPayload
from app.utils.dependencies import (
    get_property_service,
    get_current_actor,
    require_property_manager
)


router = APIRouter(prefix="/properties", tags=["Properties"], responses=ERROR_RESPONSES)
locations_router = APIRouter(prefix="/locations", tags=["Locations"], responses=ERROR_RESPONSES)


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="The caller becomes the owner. Requires seller, agent or admin role."
)
async def create_property(
    data: PropertyCreateRequest,
    actor: TokenPayload = Depends(require_property_manager),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    prop = await property_service.create_property(actor, data)
    return PropertyResponse.model_validate(prop.to_dict())


@router.get("/mine", response_model=List[PropertyResponse], summary="List own properties")
async def list_own_properties(
    actor: TokenPayload = Depends(get_current_actor),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.list_own_properties(actor)
    return [PropertyResponse.model_validate(prop.to_dict()) for prop in properties]


@router.get("/{property_id}", response_model=PropertyResponse, summary="Get property")
async def get_property(
    property_id: uuid.UUID,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    prop = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(prop.to_dict())


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Only the owner or an admin may update a property"
)
async def update_property(
    property_id: uuid.UUID,
    data: PropertyUpdateRequest,
    actor: TokenPayload = Depends(get_current_actor),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    prop = await property_service.update_property(actor, property_id, data)
    return PropertyResponse.model_validate(prop.to_dict())


@locations_router.get("", response_model=List[LocationResponse], summary="List locations")
async def list_locations(
    property_service: PropertyService = Depends(get_property_service)
) -> List[LocationResponse]:
    locations = await property_service.list_locations()
    return [LocationResponse.model_validate(location) for location in locations]


@locations_router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create location",
)
async def create_location(
    data: LocationCreateRequest,
    actor: TokenPayload = Depends(require_property_manager),
    property_service: PropertyService = Depends(get_property_service)
) -> LocationResponse:
    location = await property_service.create_location(data)
    return LocationResponse.model_validate(location)

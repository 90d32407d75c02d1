"""
Inquiry API endpoints.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import uuid
from app.services.inquiry import InquiryService
from app.schemas.inquiry import (
    InquiryCreateRequest,
    InquiryCreatedResponse,
    ListingInquiryResponse,
    UserInquiryResponse
)
from app.schemas.error import ERROR_RESPONSES
from app.utils.auth import TokenPayload
from app.utils.dependencies import get_inquiry_service, get_current_actor


router = APIRouter(prefix="/inquiries", tags=["Inquiries"], responses=ERROR_RESPONSES)


@router.get(
    "/listing/{listing_id}",
    response_model=List[ListingInquiryResponse],
    summary="List inquiries about a listing",
)
async def list_listing_inquiries(
    listing_id: uuid.UUID,
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> List[ListingInquiryResponse]:
    inquiries = await inquiry_service.list_for_listing(listing_id)
    return [ListingInquiryResponse.model_validate(item) for item in inquiries]


@router.get(
    "/user/{user_id}",
    response_model=List[UserInquiryResponse],
    summary="List inquiries sent by a user",
)
async def list_user_inquiries(
    user_id: uuid.UUID,
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> List[UserInquiryResponse]:
    inquiries = await inquiry_service.list_for_user(user_id)
    return [UserInquiryResponse.model_validate(item) for item in inquiries]


@router.post(
    "",
    response_model=InquiryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send an inquiry about an active listing",
)
async def create_inquiry(
    data: InquiryCreateRequest,
    actor: TokenPayload = Depends(get_current_actor),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryCreatedResponse:
    inquiry = await inquiry_service.create_inquiry(actor, data)
    return InquiryCreatedResponse(message="Inquiry created successfully", inquiry_id=inquiry.id)

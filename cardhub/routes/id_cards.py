"""
ID Card Endpoints
Card rendering, bulk issuance and issued card lookups
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from cardhub.dependencies import get_id_card_service
from cardhub.schemas.id_card import (
    IssuedCredential,
    IDCardListFilters,
    IDCardListResponse,
    RenderedCard,
    GenerateIDCardRequest,
    BulkGenerateRequest,
    GroupGenerateRequest,
    BulkGenerationResult,
    AvailableFieldsResponse,
)
from cardhub.schemas.template import IDCardTemplateType
from cardhub.services.field_resolver import available_fields
from cardhub.services.id_card_service import IDCardService

router = APIRouter()


@router.get("", response_model=IDCardListResponse)
async def list_id_cards(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    type: Optional[IDCardTemplateType] = Query(default=None, description="Card type"),
    search: Optional[str] = Query(default=None, description="Holder name or email"),
    is_active: Optional[bool] = Query(default=None, description="Unexpired cards only, or expired only"),
    service: IDCardService = Depends(get_id_card_service),
):
    """List issued ID cards, newest first"""
    filters = IDCardListFilters(page=page, limit=limit, type=type, search=search, is_active=is_active)
    return await service.list_id_cards(filters)


@router.post("/generate", response_model=RenderedCard, status_code=status.HTTP_201_CREATED)
async def generate_id_card(
    request: GenerateIDCardRequest,
    service: IDCardService = Depends(get_id_card_service),
):
    """Render and issue one ID card"""
    return await service.generate_id_card(request)


@router.post("/bulk", response_model=BulkGenerationResult)
async def generate_bulk_id_cards(
    request: BulkGenerateRequest,
    service: IDCardService = Depends(get_id_card_service),
):
    """Issue ID cards for a list of users; failures are reported per user"""
    return await service.generate_bulk(request)


@router.post("/bulk/group", response_model=BulkGenerationResult)
async def generate_group_id_cards(
    request: GroupGenerateRequest,
    service: IDCardService = Depends(get_id_card_service),
):
    """Issue ID cards for a class, all teachers or all staff"""
    return await service.generate_for_group(request)


@router.get("/fields", response_model=AvailableFieldsResponse)
async def list_available_fields():
    """Database field names a template field can bind to"""
    return {"fields": available_fields()}


@router.get("/subject/{subject_id}", response_model=List[IssuedCredential])
async def list_subject_id_cards(
    subject_id: str,
    service: IDCardService = Depends(get_id_card_service),
):
    """All ID cards issued to one user, newest first"""
    return await service.list_subject_id_cards(subject_id)


@router.get("/{id_card_id}", response_model=RenderedCard)
async def get_id_card(
    id_card_id: str,
    service: IDCardService = Depends(get_id_card_service),
):
    """Re-render an issued ID card from current data"""
    return await service.get_id_card(id_card_id)

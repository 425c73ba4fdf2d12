"""
Offices API endpoints
Office CRUD: working hours, working days, and the detail view the admin
calendar uses (non-working days and whether the day is already fully slotted)
"""

import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from office_admin.api.models import (
    OfficeCreateRequest,
    OfficeResponse,
    OfficeUpdateRequest,
    office_to_response,
)
from office_admin.dependencies import get_office_service
from office_admin.services.office_service import OfficeService
from office_admin.services.validation import validate_office_create, validate_office_update

router = APIRouter(prefix="/api/v1/offices", tags=["offices"])


@router.post("", status_code=201, response_model=OfficeResponse)
async def create_office(request: OfficeCreateRequest, service: OfficeService = Depends(get_office_service)):
    validate_office_create(request.payload()).raise_for_errors()

    office = await asyncio.to_thread(
        service.create,
        request.name,
        request.work_start_time,
        request.work_end_time,
        request.working_days,
    )
    detail = await asyncio.to_thread(service.find_one, office.id)
    return office_to_response(detail, detail=True)


@router.get("", response_model=List[OfficeResponse])
async def list_offices(
    search: Optional[str] = Query(None, description="Case-insensitive match on the office name"),
    service: OfficeService = Depends(get_office_service),
):
    offices = await asyncio.to_thread(service.find_all, search)
    return [office_to_response(office) for office in offices]


@router.get("/{office_id}", response_model=OfficeResponse)
async def get_office(office_id: str, service: OfficeService = Depends(get_office_service)):
    """Office detail with its time slots, job positions and calendar hints"""
    office = await asyncio.to_thread(service.find_one, office_id)
    return office_to_response(office, detail=True)


@router.patch("/{office_id}", response_model=OfficeResponse)
async def update_office(
    office_id: str,
    request: OfficeUpdateRequest,
    service: OfficeService = Depends(get_office_service),
):
    validate_office_update(request.payload()).raise_for_errors()

    office = await asyncio.to_thread(service.update, office_id, request.changes())
    return office_to_response(office, detail=True)


@router.delete("/{office_id}", status_code=204)
async def delete_office(office_id: str, service: OfficeService = Depends(get_office_service)):
    """Delete the office together with its time slots and job positions"""
    await asyncio.to_thread(service.remove, office_id)
    return Response(status_code=204)

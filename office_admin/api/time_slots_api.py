"""
Time Slots API endpoints
Create, list, update and delete the time slots of an office.
Slots must stay inside the office working hours and never overlap each other.
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from office_admin.api.models import (
    TimeSlotCreateRequest,
    TimeSlotResponse,
    TimeSlotUpdateRequest,
    time_slot_to_response,
)
from office_admin.dependencies import get_time_slot_service
from office_admin.services.time_slot_service import TimeSlotService
from office_admin.services.validation import validate_time_slot_create, validate_time_slot_update

router = APIRouter(prefix="/api/v1/offices/{office_id}/time-slots", tags=["time-slots"])

logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=TimeSlotResponse)
async def create_time_slot(
    office_id: str,
    request: TimeSlotCreateRequest,
    service: TimeSlotService = Depends(get_time_slot_service),
):
    """Create a time slot inside the office working hours"""
    validate_time_slot_create(request.payload()).raise_for_errors()

    slot = await asyncio.to_thread(service.create, office_id, request.start_time, request.end_time)
    return time_slot_to_response(slot)


@router.get("", response_model=List[TimeSlotResponse])
async def list_time_slots(office_id: str, service: TimeSlotService = Depends(get_time_slot_service)):
    """All time slots of the office ordered by start time"""
    slots = await asyncio.to_thread(service.find_all_for_office, office_id)
    return [time_slot_to_response(slot) for slot in slots]


@router.get("/{slot_id}", response_model=TimeSlotResponse)
async def get_time_slot(office_id: str, slot_id: str, service: TimeSlotService = Depends(get_time_slot_service)):
    slot = await asyncio.to_thread(service.find_one, slot_id, office_id)
    return time_slot_to_response(slot)


async def _update_time_slot(office_id: str, slot_id: str, request: TimeSlotUpdateRequest, service: TimeSlotService):
    validate_time_slot_update(request.payload()).raise_for_errors()

    slot = await asyncio.to_thread(service.update, slot_id, request.changes(), office_id)
    return time_slot_to_response(slot)


@router.put("/{slot_id}", response_model=TimeSlotResponse)
async def replace_time_slot(
    office_id: str,
    slot_id: str,
    request: TimeSlotUpdateRequest,
    service: TimeSlotService = Depends(get_time_slot_service),
):
    """Same semantics as PATCH: any of startTime/endTime may be given"""
    return await _update_time_slot(office_id, slot_id, request, service)


@router.patch("/{slot_id}", response_model=TimeSlotResponse)
async def update_time_slot(
    office_id: str,
    slot_id: str,
    request: TimeSlotUpdateRequest,
    service: TimeSlotService = Depends(get_time_slot_service),
):
    return await _update_time_slot(office_id, slot_id, request, service)


@router.delete("/{slot_id}", status_code=204)
async def delete_time_slot(office_id: str, slot_id: str, service: TimeSlotService = Depends(get_time_slot_service)):
    await asyncio.to_thread(service.remove, slot_id, office_id)
    return Response(status_code=204)


@router.delete("", status_code=204)
async def delete_all_time_slots(office_id: str, service: TimeSlotService = Depends(get_time_slot_service)):
    """Remove every time slot of the office"""
    deleted_count = await asyncio.to_thread(service.remove_all_for_office, office_id)
    logger.info(f"Cleared {deleted_count} time slots for office {office_id}")
    return Response(status_code=204)

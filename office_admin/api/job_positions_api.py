"""
Job Positions API endpoints
Named, colored roles attached to an office
"""

import asyncio
from typing import List

from fastapi import APIRouter, Depends, Response

from office_admin.api.models import (
    JobPositionCreateRequest,
    JobPositionResponse,
    JobPositionUpdateRequest,
    job_position_to_response,
)
from office_admin.dependencies import get_job_position_service
from office_admin.services.job_position_service import JobPositionService
from office_admin.services.validation import validate_job_position_create, validate_job_position_update

router = APIRouter(prefix="/api/v1/offices/{office_id}/job-positions", tags=["job-positions"])


@router.post("", status_code=201, response_model=JobPositionResponse)
async def create_job_position(
    office_id: str,
    request: JobPositionCreateRequest,
    service: JobPositionService = Depends(get_job_position_service),
):
    validate_job_position_create(request.payload()).raise_for_errors()

    job_position = await asyncio.to_thread(service.create, office_id, request.name, request.color)
    return job_position_to_response(job_position)


@router.get("", response_model=List[JobPositionResponse])
async def list_job_positions(office_id: str, service: JobPositionService = Depends(get_job_position_service)):
    job_positions = await asyncio.to_thread(service.find_all_for_office, office_id)
    return [job_position_to_response(jp) for jp in job_positions]


@router.patch("/{job_position_id}", response_model=JobPositionResponse)
async def update_job_position(
    office_id: str,
    job_position_id: str,
    request: JobPositionUpdateRequest,
    service: JobPositionService = Depends(get_job_position_service),
):
    validate_job_position_update(request.payload()).raise_for_errors()

    job_position = await asyncio.to_thread(service.update, job_position_id, request.changes(), office_id)
    return job_position_to_response(job_position)


@router.delete("/{job_position_id}", status_code=204)
async def delete_job_position(
    office_id: str,
    job_position_id: str,
    service: JobPositionService = Depends(get_job_position_service),
):
    await asyncio.to_thread(service.remove, job_position_id, office_id)
    return Response(status_code=204)

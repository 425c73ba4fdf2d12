"""
Shared Pydantic models for the API
Request bodies and response shapes for offices, time slots and job positions.
JSON uses camelCase; times travel as HH:MM:SS strings.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from office_admin.services.entities import JobPosition, Office, TimeSlot
from office_admin.services.schedule_rules import is_schedule_full, non_working_day_numbers
from office_admin.services.time_of_day import format_optional_time


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def payload(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by their JSON names"""
        return self.model_dump(by_alias=True, exclude_unset=True)

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by attribute name"""
        return self.model_dump(exclude_unset=True)


# ========== REQUESTS ==========
# Field rules live in services/validation.py; these only describe the shape.

class TimeSlotCreateRequest(RequestModel):
    start_time: Optional[str] = None  # HH:MM or HH:MM:SS
    end_time: Optional[str] = None


class TimeSlotUpdateRequest(RequestModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class OfficeCreateRequest(RequestModel):
    name: Optional[str] = None
    work_start_time: Optional[str] = None
    work_end_time: Optional[str] = None
    working_days: Optional[List[str]] = None  # e.g. ["MONDAY", "FRIDAY"]


class OfficeUpdateRequest(RequestModel):
    name: Optional[str] = None
    work_start_time: Optional[str] = None
    work_end_time: Optional[str] = None
    working_days: Optional[List[str]] = None


class JobPositionCreateRequest(RequestModel):
    name: Optional[str] = None
    color: Optional[str] = None  # hex, e.g. #3498DB


class JobPositionUpdateRequest(RequestModel):
    name: Optional[str] = None
    color: Optional[str] = None


# ========== RESPONSES ==========

class TimeSlotResponse(ApiModel):
    id: str
    office_id: str
    start_time: str
    end_time: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class JobPositionResponse(ApiModel):
    id: str
    office_id: str
    name: str
    color: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class OfficeResponse(ApiModel):
    id: str
    name: str
    work_start_time: Optional[str] = None
    work_end_time: Optional[str] = None
    working_days: Optional[List[str]] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    time_slots_count: int = 0
    job_positions_count: int = 0
    non_working_days: List[int] = []  # 0=Sunday .. 6=Saturday, for the date picker
    # Detail responses only
    schedule_full: Optional[bool] = None
    time_slots: Optional[List[TimeSlotResponse]] = None
    job_positions: Optional[List[JobPositionResponse]] = None


class HealthResponse(ApiModel):
    status: str
    service: str
    timestamp: str
    database: Dict[str, Any]


def time_slot_to_response(slot: TimeSlot) -> TimeSlotResponse:
    return TimeSlotResponse(
        id=slot.id,
        office_id=slot.office_id,
        start_time=slot.start_time.format(),
        end_time=slot.end_time.format(),
        created_at=slot.created_at,
        updated_at=slot.updated_at,
    )


def job_position_to_response(job_position: JobPosition) -> JobPositionResponse:
    return JobPositionResponse(
        id=job_position.id,
        office_id=job_position.office_id,
        name=job_position.name,
        color=job_position.color,
        created_at=job_position.created_at,
        updated_at=job_position.updated_at,
    )


def office_to_response(office: Office, detail: bool = False) -> OfficeResponse:
    response = OfficeResponse(
        id=office.id,
        name=office.name,
        work_start_time=format_optional_time(office.work_start_time),
        work_end_time=format_optional_time(office.work_end_time),
        working_days=[day.value for day in office.working_days] if office.working_days is not None else None,
        created_at=office.created_at,
        updated_at=office.updated_at,
        time_slots_count=office.time_slots_count,
        job_positions_count=office.job_positions_count,
        non_working_days=sorted(non_working_day_numbers(office.working_days)),
    )
    if detail:
        response.schedule_full = is_schedule_full(
            office.work_start_time, office.work_end_time, office.time_slots
        )
        response.time_slots = [time_slot_to_response(slot) for slot in office.time_slots]
        response.job_positions = [job_position_to_response(jp) for jp in office.job_positions]
    return response

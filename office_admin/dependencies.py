"""
Dependency providers for the API routers
"""

from typing import Optional

from fastapi import Depends

from .config import get_settings
from .services.job_position_service import JobPositionService
from .services.office_service import OfficeService
from .services.schedule_store import ScheduleStore
from .services.time_slot_service import TimeSlotService

_store: Optional[ScheduleStore] = None


def get_store() -> ScheduleStore:
    """Dependency provider for the schedule store (created on first use)"""
    global _store
    if _store is None:
        _store = ScheduleStore(get_settings().database_path)
    return _store


def get_office_service(store: ScheduleStore = Depends(get_store)) -> OfficeService:
    return OfficeService(store)


def get_time_slot_service(store: ScheduleStore = Depends(get_store)) -> TimeSlotService:
    return TimeSlotService(store)


def get_job_position_service(store: ScheduleStore = Depends(get_store)) -> JobPositionService:
    return JobPositionService(store)

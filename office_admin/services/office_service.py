"""
Office Service
Manages offices: working hours, working days and cascade removal
"""

import logging
import sqlite3
import uuid
from typing import Any, Dict, List, Optional

from .entities import Office, Weekday
from .errors import DuplicateOfficeName, InvalidTimeRange, OfficeNotFound
from .schedule_store import ScheduleStore, StoreSession, utc_now
from .time_of_day import TimeOfDay, parse_optional_time

UPDATABLE_FIELDS = ("name", "work_start_time", "work_end_time", "working_days")


def parse_working_days(working_days: Optional[List[str]]) -> Optional[List[Weekday]]:
    """Weekday names to Weekday values; repeats are dropped, first-seen order kept"""
    if working_days is None:
        return None
    return list(dict.fromkeys(Weekday(day) for day in working_days))


class OfficeService:
    def __init__(self, store: ScheduleStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _check_hours(start: Optional[TimeOfDay], end: Optional[TimeOfDay]):
        if start is not None and end is not None and end <= start:
            raise InvalidTimeRange(start.format(), end.format())

    def _check_name_available(self, session: StoreSession, name: str, office_id: Optional[str] = None):
        existing = session.find_office_by_name(name)
        if existing is not None and existing.id != office_id:
            raise DuplicateOfficeName(name)

    def create(
        self,
        name: str,
        work_start_time: Optional[str] = None,
        work_end_time: Optional[str] = None,
        working_days: Optional[List[str]] = None,
    ) -> Office:
        start = parse_optional_time(work_start_time, "workStartTime")
        end = parse_optional_time(work_end_time, "workEndTime")
        self._check_hours(start, end)

        office = Office(
            id=str(uuid.uuid4()),
            name=name,
            work_start_time=start,
            work_end_time=end,
            working_days=parse_working_days(working_days),
            created_at=utc_now(),
        )

        with self.store.session(write=True) as session:
            self._check_name_available(session, name)
            try:
                session.save_office(office)
            except sqlite3.IntegrityError as e:
                if "offices.name" in str(e):
                    raise DuplicateOfficeName(name) from e
                raise

        self.logger.info(f"Created office {office.id} ({office.name})")
        return office

    def find_all(self, search: Optional[str] = None) -> List[Office]:
        self.logger.debug(f"Listing offices (search={search!r})")
        with self.store.session() as session:
            return session.find_offices(search)

    def find_one(self, office_id: str) -> Office:
        """Office with its time slots and job positions loaded"""
        with self.store.session() as session:
            office = session.find_office(office_id)
            if office is None:
                raise OfficeNotFound(office_id)
            office.time_slots = session.find_time_slots_by_office(office_id)
            office.job_positions = session.find_job_positions_by_office(office_id)
        return office

    def update(self, office_id: str, changes: Dict[str, Any]) -> Office:
        """
        Partial update. A key present with value None clears that field
        (hours or working days); absent keys are left as they are.
        """
        values: Dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in changes:
                continue
            value = changes[key]
            if key in ("work_start_time", "work_end_time"):
                label = "workStartTime" if key == "work_start_time" else "workEndTime"
                value = parse_optional_time(value, label)
            elif key == "working_days":
                value = parse_working_days(value)
            values[key] = value

        with self.store.session(write=True) as session:
            office = session.find_office(office_id)
            if office is None:
                raise OfficeNotFound(office_id)

            if values.get("name") is not None and values["name"] != office.name:
                self._check_name_available(session, values["name"], office_id)
            elif "name" in values and values["name"] is None:
                del values["name"]

            self._check_hours(
                values.get("work_start_time", office.work_start_time),
                values.get("work_end_time", office.work_end_time),
            )

            if values:
                try:
                    session.update_office(office_id, values)
                except sqlite3.IntegrityError as e:
                    if "offices.name" in str(e):
                        raise DuplicateOfficeName(values["name"]) from e
                    raise

        self.logger.info(f"Updated office {office_id}: {sorted(values)}")
        return self.find_one(office_id)

    def remove(self, office_id: str) -> None:
        """Delete the office; its time slots and job positions go with it"""
        with self.store.session(write=True) as session:
            office = session.find_office(office_id)
            if office is None:
                raise OfficeNotFound(office_id)
            session.delete_office(office_id)

        self.logger.info(
            f"Deleted office {office_id} with {office.time_slots_count} time slots "
            f"and {office.job_positions_count} job positions"
        )

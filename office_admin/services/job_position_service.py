"""
Job Position Service
Labeled, colored roles scoped to one office. Names are unique per office.
"""

import logging
import sqlite3
import uuid
from typing import Any, Dict, List, Optional

from .entities import JobPosition
from .errors import DuplicateJobPositionName, JobPositionNotFound, OfficeNotFound
from .schedule_store import ScheduleStore, StoreSession, utc_now


class JobPositionService:
    def __init__(self, store: ScheduleStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    def _check_office(self, session: StoreSession, office_id: str):
        if session.find_office(office_id) is None:
            raise OfficeNotFound(office_id)

    def _get(self, session: StoreSession, job_position_id: str, office_id: Optional[str]) -> JobPosition:
        job_position = session.find_job_position_by_id(job_position_id)
        if job_position is None or (office_id is not None and job_position.office_id != office_id):
            raise JobPositionNotFound(job_position_id)
        return job_position

    def create(self, office_id: str, name: str, color: str) -> JobPosition:
        job_position = JobPosition(
            id=str(uuid.uuid4()),
            office_id=office_id,
            name=name,
            color=color,
            created_at=utc_now(),
        )
        with self.store.session(write=True) as session:
            self._check_office(session, office_id)
            if session.job_position_name_exists(office_id, name):
                raise DuplicateJobPositionName(name)
            try:
                session.save_job_position(job_position)
            except sqlite3.IntegrityError as e:
                if "UNIQUE" in str(e):
                    raise DuplicateJobPositionName(name) from e
                raise

        self.logger.info(f'Created job position "{name}" for office {office_id}')
        return job_position

    def find_all_for_office(self, office_id: str) -> List[JobPosition]:
        with self.store.session() as session:
            self._check_office(session, office_id)
            return session.find_job_positions_by_office(office_id)

    def update(self, job_position_id: str, changes: Dict[str, Any], office_id: Optional[str] = None) -> JobPosition:
        values = {key: changes[key] for key in ("name", "color") if changes.get(key) is not None}

        with self.store.session(write=True) as session:
            job_position = self._get(session, job_position_id, office_id)
            if not values:
                return job_position

            new_name = values.get("name")
            if new_name and new_name != job_position.name:
                if session.job_position_name_exists(job_position.office_id, new_name, job_position_id):
                    raise DuplicateJobPositionName(new_name)

            session.update_job_position(job_position_id, values)
            updated = session.find_job_position_by_id(job_position_id)

        self.logger.info(f"Updated job position {job_position_id}")
        return updated

    def remove(self, job_position_id: str, office_id: Optional[str] = None) -> None:
        with self.store.session(write=True) as session:
            self._get(session, job_position_id, office_id)
            session.delete_job_position(job_position_id)
        self.logger.info(f"Deleted job position {job_position_id}")

"""
SQLite storage for offices, time slots and job positions
Each session owns one connection and one transaction; overlap and cascade
rules are also enforced by the schema so concurrent writers cannot bypass them
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import pytz

from .entities import JobPosition, Office, TimeSlot, Weekday
from .time_of_day import TimeOfDay, format_optional_time

logger = logging.getLogger(__name__)

# Message raised by the overlap triggers; services translate it to SlotOverlap
OVERLAP_CONSTRAINT = "time_slot_overlap"

SCHEMA = [
    '''
    CREATE TABLE IF NOT EXISTS offices (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        work_start_time TEXT,
        work_end_time TEXT,
        working_days TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT,
        CHECK (work_start_time IS NULL OR work_end_time IS NULL OR work_end_time > work_start_time)
    )
    ''',
    '''
    CREATE TABLE IF NOT EXISTS time_slots (
        id TEXT PRIMARY KEY,
        office_id TEXT NOT NULL REFERENCES offices(id) ON DELETE CASCADE,
        start_time TEXT NOT NULL,
        end_time TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT,
        CHECK (end_time > start_time)
    )
    ''',
    '''
    CREATE INDEX IF NOT EXISTS idx_time_slots_office_start
    ON time_slots (office_id, start_time)
    ''',
    f'''
    CREATE TRIGGER IF NOT EXISTS time_slots_no_overlap_insert
    BEFORE INSERT ON time_slots
    WHEN EXISTS (
        SELECT 1 FROM time_slots
        WHERE office_id = NEW.office_id
          AND start_time < NEW.end_time
          AND end_time > NEW.start_time
    )
    BEGIN
        SELECT RAISE(ABORT, '{OVERLAP_CONSTRAINT}');
    END
    ''',
    f'''
    CREATE TRIGGER IF NOT EXISTS time_slots_no_overlap_update
    BEFORE UPDATE OF office_id, start_time, end_time ON time_slots
    WHEN EXISTS (
        SELECT 1 FROM time_slots
        WHERE office_id = NEW.office_id
          AND id != NEW.id
          AND start_time < NEW.end_time
          AND end_time > NEW.start_time
    )
    BEGIN
        SELECT RAISE(ABORT, '{OVERLAP_CONSTRAINT}');
    END
    ''',
    '''
    CREATE TABLE IF NOT EXISTS job_positions (
        id TEXT PRIMARY KEY,
        office_id TEXT NOT NULL REFERENCES offices(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        color TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT,
        UNIQUE (office_id, name)
    )
    ''',
]

OFFICE_COLUMNS = {"name", "work_start_time", "work_end_time", "working_days"}
TIME_SLOT_COLUMNS = {"start_time", "end_time"}
JOB_POSITION_COLUMNS = {"name", "color"}


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def is_overlap_violation(error: sqlite3.IntegrityError) -> bool:
    return OVERLAP_CONSTRAINT in str(error)


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def _contains_pattern(search: str) -> str:
    """LIKE pattern matching search literally anywhere in the value"""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _encode_value(value: Any) -> Any:
    if isinstance(value, TimeOfDay):
        return value.format()
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _encode_working_days(working_days: Optional[List[Weekday]]) -> Optional[str]:
    if working_days is None:
        return None
    return json.dumps([Weekday(day).value for day in working_days])


class StoreSession:
    """Data access bound to one open transaction"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    # ---------- offices ----------

    def _office_query(self, where: str = "") -> str:
        return f'''
            SELECT o.*,
                (SELECT COUNT(*) FROM time_slots t WHERE t.office_id = o.id) AS time_slots_count,
                (SELECT COUNT(*) FROM job_positions j WHERE j.office_id = o.id) AS job_positions_count
            FROM offices o
            {where}
        '''

    def find_office(self, office_id: str) -> Optional[Office]:
        row = self.conn.execute(self._office_query("WHERE o.id = ?"), (office_id,)).fetchone()
        return self._row_to_office(row) if row else None

    def find_office_by_name(self, name: str) -> Optional[Office]:
        row = self.conn.execute(self._office_query("WHERE o.name = ?"), (name,)).fetchone()
        return self._row_to_office(row) if row else None

    def find_offices(self, search: Optional[str] = None) -> List[Office]:
        if search:
            rows = self.conn.execute(
                self._office_query(
                    "WHERE casefold(o.name) LIKE casefold(?) ESCAPE '\\' ORDER BY o.name"
                ),
                (_contains_pattern(search),),
            ).fetchall()
        else:
            rows = self.conn.execute(self._office_query("ORDER BY o.name")).fetchall()
        return [self._row_to_office(row) for row in rows]

    def save_office(self, office: Office) -> Office:
        self.conn.execute(
            '''
            INSERT INTO offices (id, name, work_start_time, work_end_time, working_days, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ''',
            (
                office.id,
                office.name,
                format_optional_time(office.work_start_time),
                format_optional_time(office.work_end_time),
                _encode_working_days(office.working_days),
                office.created_at.isoformat(),
                None,
            ),
        )
        return office

    def update_office(self, office_id: str, changes: Dict[str, Any]) -> int:
        values = dict(changes)
        if "working_days" in values:
            values["working_days"] = _encode_working_days(values["working_days"])
        return self._update("offices", OFFICE_COLUMNS, office_id, values)

    def delete_office(self, office_id: str) -> int:
        return self.conn.execute("DELETE FROM offices WHERE id = ?", (office_id,)).rowcount

    # ---------- time slots ----------

    def find_time_slots_by_office(self, office_id: str) -> List[TimeSlot]:
        rows = self.conn.execute(
            '''
            SELECT * FROM time_slots
            WHERE office_id = ?
            ORDER BY start_time
            ''',
            (office_id,),
        ).fetchall()
        return [self._row_to_time_slot(row) for row in rows]

    def find_time_slot_by_id(self, slot_id: str) -> Optional[TimeSlot]:
        row = self.conn.execute("SELECT * FROM time_slots WHERE id = ?", (slot_id,)).fetchone()
        return self._row_to_time_slot(row) if row else None

    def find_overlapping_time_slot(
        self,
        office_id: str,
        start_time: TimeOfDay,
        end_time: TimeOfDay,
        exclude_slot_id: Optional[str] = None,
    ) -> Optional[TimeSlot]:
        """First slot of the office whose half-open window intersects [start_time, end_time)"""
        query = '''
            SELECT * FROM time_slots
            WHERE office_id = ?
              AND start_time < ?
              AND end_time > ?
        '''
        params: List[Any] = [office_id, end_time.format(), start_time.format()]
        if exclude_slot_id:
            query += " AND id != ?"
            params.append(exclude_slot_id)
        query += " ORDER BY start_time LIMIT 1"

        row = self.conn.execute(query, params).fetchone()
        return self._row_to_time_slot(row) if row else None

    def save_time_slot(self, slot: TimeSlot) -> TimeSlot:
        self.conn.execute(
            '''
            INSERT INTO time_slots (id, office_id, start_time, end_time, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ''',
            (
                slot.id,
                slot.office_id,
                slot.start_time.format(),
                slot.end_time.format(),
                slot.created_at.isoformat(),
                None,
            ),
        )
        return slot

    def update_time_slot(self, slot_id: str, changes: Dict[str, Any]) -> int:
        return self._update("time_slots", TIME_SLOT_COLUMNS, slot_id, changes)

    def delete_time_slot(self, slot_id: str) -> int:
        return self.conn.execute("DELETE FROM time_slots WHERE id = ?", (slot_id,)).rowcount

    def delete_time_slots_for_office(self, office_id: str) -> int:
        return self.conn.execute(
            "DELETE FROM time_slots WHERE office_id = ?", (office_id,)
        ).rowcount

    # ---------- job positions ----------

    def find_job_positions_by_office(self, office_id: str) -> List[JobPosition]:
        rows = self.conn.execute(
            "SELECT * FROM job_positions WHERE office_id = ? ORDER BY name",
            (office_id,),
        ).fetchall()
        return [self._row_to_job_position(row) for row in rows]

    def find_job_position_by_id(self, job_position_id: str) -> Optional[JobPosition]:
        row = self.conn.execute(
            "SELECT * FROM job_positions WHERE id = ?", (job_position_id,)
        ).fetchone()
        return self._row_to_job_position(row) if row else None

    def job_position_name_exists(
        self, office_id: str, name: str, exclude_job_position_id: Optional[str] = None
    ) -> bool:
        query = "SELECT 1 FROM job_positions WHERE office_id = ? AND name = ?"
        params: List[Any] = [office_id, name]
        if exclude_job_position_id:
            query += " AND id != ?"
            params.append(exclude_job_position_id)
        return self.conn.execute(query, params).fetchone() is not None

    def save_job_position(self, job_position: JobPosition) -> JobPosition:
        self.conn.execute(
            '''
            INSERT INTO job_positions (id, office_id, name, color, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ''',
            (
                job_position.id,
                job_position.office_id,
                job_position.name,
                job_position.color,
                job_position.created_at.isoformat(),
                None,
            ),
        )
        return job_position

    def update_job_position(self, job_position_id: str, changes: Dict[str, Any]) -> int:
        return self._update("job_positions", JOB_POSITION_COLUMNS, job_position_id, changes)

    def delete_job_position(self, job_position_id: str) -> int:
        return self.conn.execute(
            "DELETE FROM job_positions WHERE id = ?", (job_position_id,)
        ).rowcount

    # ---------- helpers ----------

    def _update(self, table: str, allowed: set, row_id: str, changes: Dict[str, Any]) -> int:
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Cannot update columns {sorted(unknown)} on {table}")
        if not changes:
            return 0

        assignments = ", ".join(f"{column} = ?" for column in changes)
        params = [_encode_value(value) for value in changes.values()]
        params.extend([utc_now().isoformat(), row_id])
        return self.conn.execute(
            f"UPDATE {table} SET {assignments}, updated_at = ? WHERE id = ?", params
        ).rowcount

    @staticmethod
    def _row_to_office(row: sqlite3.Row) -> Office:
        working_days = row["working_days"]
        return Office(
            id=row["id"],
            name=row["name"],
            work_start_time=TimeOfDay.parse(row["work_start_time"]) if row["work_start_time"] else None,
            work_end_time=TimeOfDay.parse(row["work_end_time"]) if row["work_end_time"] else None,
            working_days=[Weekday(day) for day in json.loads(working_days)] if working_days is not None else None,
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
            time_slots_count=row["time_slots_count"],
            job_positions_count=row["job_positions_count"],
        )

    @staticmethod
    def _row_to_time_slot(row: sqlite3.Row) -> TimeSlot:
        return TimeSlot(
            id=row["id"],
            office_id=row["office_id"],
            start_time=TimeOfDay.parse(row["start_time"]),
            end_time=TimeOfDay.parse(row["end_time"]),
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )

    @staticmethod
    def _row_to_job_position(row: sqlite3.Row) -> JobPosition:
        return JobPosition(
            id=row["id"],
            office_id=row["office_id"],
            name=row["name"],
            color=row["color"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class ScheduleStore:
    def __init__(self, db_path: Union[str, Path] = "office_admin.db"):
        """Initialize the store and make sure the schema exists"""
        self.db_path = Path(db_path)
        self.init_database()

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=10)
        conn.row_factory = sqlite3.Row
        # transactions are opened explicitly by session()
        conn.isolation_level = None
        conn.execute("PRAGMA foreign_keys = ON")
        # LOWER() folds ASCII only
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        return conn

    def init_database(self):
        """Create tables, triggers and indexes if they are missing"""
        conn = self.connect()
        try:
            for statement in SCHEMA:
                conn.execute(statement)
        finally:
            conn.close()
        logger.info(f"Schedule store ready at {self.db_path}")

    @contextmanager
    def session(self, write: bool = False) -> Iterator[StoreSession]:
        """
        Open a transaction for one unit of work
        Write sessions take the database write lock up front (BEGIN IMMEDIATE)
        so the read-validate-write sequence of a request is serialized.
        """
        conn = self.connect()
        try:
            conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
            try:
                yield StoreSession(conn)
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        finally:
            conn.close()

    def ping(self) -> bool:
        conn = self.connect()
        try:
            return conn.execute("SELECT 1").fetchone()[0] == 1
        finally:
            conn.close()

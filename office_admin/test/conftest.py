"""
Pytest configuration and fixtures

Every test gets its own SQLite file so slots and offices never leak between tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from office_admin.services.job_position_service import JobPositionService  # noqa: E402
from office_admin.services.office_service import OfficeService  # noqa: E402
from office_admin.services.schedule_store import ScheduleStore  # noqa: E402
from office_admin.services.time_slot_service import TimeSlotService  # noqa: E402


@pytest.fixture
def store(tmp_path):
    return ScheduleStore(tmp_path / "office_admin_test.db")


@pytest.fixture
def office_service(store):
    return OfficeService(store)


@pytest.fixture
def time_slot_service(store):
    return TimeSlotService(store)


@pytest.fixture
def job_position_service(store):
    return JobPositionService(store)


@pytest.fixture
def office(office_service):
    """Office open 09:00-17:00, Monday to Friday"""
    return office_service.create(
        "Consultorio Principal",
        "09:00:00",
        "17:00:00",
        ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY"],
    )


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from office_admin.dependencies import get_store
    from office_admin.main import app

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

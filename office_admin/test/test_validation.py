"""Tests for request payload validation"""

import pytest

from office_admin.services.errors import PayloadValidationError
from office_admin.services.validation import (
    validate_job_position_create,
    validate_job_position_update,
    validate_office_create,
    validate_office_update,
    validate_time_slot_create,
    validate_time_slot_update,
)


def fields(result):
    return [error.field for error in result.errors]


def test_valid_time_slot_payload():
    assert validate_time_slot_create({"startTime": "09:00", "endTime": "10:00:00"}).ok


def test_time_slot_create_requires_both_times():
    result = validate_time_slot_create({})
    assert fields(result) == ["startTime", "endTime"]


@pytest.mark.parametrize("value", ["9:00", "25:00", "", "   ", 900, "09:00:00\n"])
def test_time_slot_create_rejects_bad_time_values(value):
    result = validate_time_slot_create({"startTime": value, "endTime": "10:00"})
    assert fields(result) == ["startTime"]


def test_time_slot_end_must_follow_start():
    result = validate_time_slot_create({"startTime": "10:00:00", "endTime": "10:00"})
    assert fields(result) == ["endTime"]
    assert "after startTime" in result.errors[0].message


def test_mixed_precision_times_are_compared_by_value():
    # "10:00" is before "10:00:30" even though the strings differ in length
    assert validate_time_slot_create({"startTime": "10:00", "endTime": "10:00:30"}).ok


def test_time_slot_update_allows_partial_and_empty_payloads():
    assert validate_time_slot_update({}).ok
    assert validate_time_slot_update({"endTime": "12:00"}).ok
    assert fields(validate_time_slot_update({"startTime": "12:00", "endTime": "11:00"})) == ["endTime"]


def test_raise_for_errors_carries_every_problem():
    result = validate_time_slot_create({"startTime": "bad", "endTime": None})

    with pytest.raises(PayloadValidationError) as exc_info:
        result.raise_for_errors()

    error = exc_info.value
    assert error.status_code == 400
    assert error.code == "validation_error"
    assert error.errors == [
        {"field": "startTime", "message": "startTime must use the format HH:MM or HH:MM:SS"},
        {"field": "endTime", "message": "endTime is required"},
    ]


def test_raise_for_errors_is_silent_when_valid():
    validate_time_slot_update({"startTime": "08:00"}).raise_for_errors()


# ========== OFFICES ==========

def test_office_create_needs_a_name():
    assert fields(validate_office_create({"workStartTime": "09:00"})) == ["name"]
    assert fields(validate_office_create({"name": "  "})) == ["name"]
    assert fields(validate_office_create({"name": "x" * 256})) == ["name"]


def test_office_hours_are_validated_together():
    result = validate_office_create({"name": "Consultorio", "workStartTime": "18:00", "workEndTime": "08:00"})
    assert fields(result) == ["workEndTime"]


def test_office_working_days_must_be_weekday_names():
    assert validate_office_create({"name": "Consultorio", "workingDays": ["MONDAY", "SUNDAY"]}).ok
    assert validate_office_create({"name": "Consultorio", "workingDays": []}).ok

    result = validate_office_create({"name": "Consultorio", "workingDays": ["monday", "FUNDAY"]})
    assert fields(result) == ["workingDays", "workingDays"]

    assert fields(validate_office_update({"workingDays": "MONDAY"})) == ["workingDays"]


def test_office_update_accepts_empty_payload():
    assert validate_office_update({}).ok


# ========== JOB POSITIONS ==========

def test_job_position_create():
    assert validate_job_position_create({"name": "Recepción", "color": "#FF5733"}).ok
    assert validate_job_position_create({"name": "Recepción", "color": "#abc"}).ok
    assert fields(validate_job_position_create({})) == ["name", "color"]


@pytest.mark.parametrize("color", ["FF5733", "#FF573", "#GGGGGG", "red"])
def test_job_position_color_must_be_hex(color):
    result = validate_job_position_create({"name": "Higienista", "color": color})
    assert fields(result) == ["color"]


def test_job_position_name_length():
    result = validate_job_position_update({"name": "n" * 101})
    assert fields(result) == ["name"]
    assert validate_job_position_update({}).ok

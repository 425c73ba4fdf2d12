"""
Request payload validation
Runs before any service call and reports every field problem at once
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .entities import Weekday
from .errors import PayloadValidationError
from .time_of_day import TIME_PATTERN

HEX_COLOR_PATTERN = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
WEEKDAY_NAMES = [day.value for day in Weekday]


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str):
        self.errors.append(FieldError(field_name, message))

    def as_detail(self) -> List[Dict[str, str]]:
        return [{"field": error.field, "message": error.message} for error in self.errors]

    def raise_for_errors(self):
        if self.errors:
            raise PayloadValidationError(self.as_detail())


def _check_time(result: ValidationResult, payload: Dict[str, Any], name: str, required: bool) -> Optional[str]:
    """Returns the value when it is a well-formed time string"""
    if name not in payload or payload[name] is None:
        if required:
            result.add(name, f"{name} is required")
        return None

    value = payload[name]
    if not isinstance(value, str) or not value.strip():
        result.add(name, f"{name} must be a non-empty string")
        return None
    if not TIME_PATTERN.fullmatch(value):
        result.add(name, f"{name} must use the format HH:MM or HH:MM:SS")
        return None
    return value


def _normalize(value: str) -> str:
    # 'HH:MM' sorts before 'HH:MM:SS' otherwise
    return value if len(value) == 8 else f"{value}:00"


def _check_order(result: ValidationResult, start: Optional[str], end: Optional[str], end_field: str, start_field: str):
    if start and end and _normalize(end) <= _normalize(start):
        result.add(end_field, f"{end_field} must be after {start_field}")


def _check_text(
    result: ValidationResult, payload: Dict[str, Any], name: str, max_length: int, required: bool
) -> Optional[str]:
    if name not in payload or payload[name] is None:
        if required:
            result.add(name, f"{name} is required")
        return None

    value = payload[name]
    if not isinstance(value, str) or not value.strip():
        result.add(name, f"{name} cannot be empty")
        return None
    if len(value) > max_length:
        result.add(name, f"{name} must be at most {max_length} characters")
        return None
    return value


def validate_time_slot_create(payload: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    start = _check_time(result, payload, "startTime", required=True)
    end = _check_time(result, payload, "endTime", required=True)
    _check_order(result, start, end, "endTime", "startTime")
    return result


def validate_time_slot_update(payload: Dict[str, Any]) -> ValidationResult:
    """Both fields optional; ordering is only checked when both are present"""
    result = ValidationResult()
    start = _check_time(result, payload, "startTime", required=False)
    end = _check_time(result, payload, "endTime", required=False)
    _check_order(result, start, end, "endTime", "startTime")
    return result


def _check_working_days(result: ValidationResult, payload: Dict[str, Any]):
    if "workingDays" not in payload or payload["workingDays"] is None:
        return
    days = payload["workingDays"]
    if not isinstance(days, list):
        result.add("workingDays", "workingDays must be a list of weekday names")
        return
    for day in days:
        if day not in WEEKDAY_NAMES:
            result.add("workingDays", f"'{day}' is not a valid weekday. Use one of {WEEKDAY_NAMES}")


def validate_office_create(payload: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _check_text(result, payload, "name", 255, required=True)
    start = _check_time(result, payload, "workStartTime", required=False)
    end = _check_time(result, payload, "workEndTime", required=False)
    _check_order(result, start, end, "workEndTime", "workStartTime")
    _check_working_days(result, payload)
    return result


def validate_office_update(payload: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _check_text(result, payload, "name", 255, required=False)
    start = _check_time(result, payload, "workStartTime", required=False)
    end = _check_time(result, payload, "workEndTime", required=False)
    _check_order(result, start, end, "workEndTime", "workStartTime")
    _check_working_days(result, payload)
    return result


def _check_color(result: ValidationResult, payload: Dict[str, Any], required: bool):
    color = _check_text(result, payload, "color", 50, required=required)
    if color is not None and not HEX_COLOR_PATTERN.fullmatch(color):
        result.add("color", "color must be a hex code such as #FF5733")


def validate_job_position_create(payload: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _check_text(result, payload, "name", 100, required=True)
    _check_color(result, payload, required=True)
    return result


def validate_job_position_update(payload: Dict[str, Any]) -> ValidationResult:
    result = ValidationResult()
    _check_text(result, payload, "name", 100, required=False)
    _check_color(result, payload, required=False)
    return result

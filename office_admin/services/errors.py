"""
Domain errors for office scheduling
Each error carries the HTTP status and a stable code the API layer reports
"""

from typing import Optional


class SchedulingError(Exception):
    """Base class for every error the services raise on purpose"""

    status_code = 500
    code = "scheduling_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidTimeFormat(SchedulingError, ValueError):
    status_code = 400
    code = "invalid_format"

    def __init__(self, value, field: Optional[str] = None):
        self.value = value
        self.field = field
        label = f"{field} " if field else ""
        super().__init__(f"Invalid {label}time format '{value}'. Expected HH:MM or HH:MM:SS")


class InvalidTimeRange(SchedulingError):
    status_code = 400
    code = "invalid_time_range"

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(f"End time ({end}) must be after start time ({start})")


class OfficeNotFound(SchedulingError):
    status_code = 404
    code = "office_not_found"

    def __init__(self, office_id: str):
        self.office_id = office_id
        super().__init__(f'Office with ID "{office_id}" not found')


class TimeSlotNotFound(SchedulingError):
    status_code = 404
    code = "slot_not_found"

    def __init__(self, slot_id: str):
        self.slot_id = slot_id
        super().__init__(f'Time slot with ID "{slot_id}" not found')


class JobPositionNotFound(SchedulingError):
    status_code = 404
    code = "job_position_not_found"

    def __init__(self, job_position_id: str):
        self.job_position_id = job_position_id
        super().__init__(f'Job position with ID "{job_position_id}" not found')


class OutOfOfficeHours(SchedulingError):
    """Slot falls outside the office working-hours window"""

    status_code = 409
    code = "out_of_office_hours"

    def __init__(self, boundary: str, slot_value: str, office_value: str):
        self.boundary = boundary
        self.slot_value = slot_value
        self.office_value = office_value
        if boundary == "start":
            message = (
                f"Start time ({slot_value}) cannot be earlier than the office "
                f"work start time ({office_value})"
            )
        else:
            message = (
                f"End time ({slot_value}) cannot be later than the office "
                f"work end time ({office_value})"
            )
        super().__init__(message)


class SlotOverlap(SchedulingError):
    status_code = 409
    code = "slot_overlap"

    def __init__(
        self,
        start: str,
        end: str,
        existing_start: Optional[str] = None,
        existing_end: Optional[str] = None,
    ):
        self.start = start
        self.end = end
        self.existing_start = existing_start
        self.existing_end = existing_end
        if existing_start and existing_end:
            message = (
                f"Time slot {start} - {end} overlaps the existing time slot "
                f"{existing_start} - {existing_end} for this office"
            )
        else:
            message = f"Time slot {start} - {end} overlaps an existing time slot for this office"
        super().__init__(message)


class DuplicateOfficeName(SchedulingError):
    status_code = 409
    code = "duplicate_office_name"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Another office named "{name}" already exists')


class DuplicateJobPositionName(SchedulingError):
    status_code = 409
    code = "duplicate_job_position_name"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'A job position named "{name}" already exists in this office')


class PayloadValidationError(SchedulingError):
    """Request body failed field validation; errors holds one entry per problem"""

    status_code = 400
    code = "validation_error"

    def __init__(self, errors):
        self.errors = errors
        fields = ", ".join(sorted({error["field"] for error in errors}))
        super().__init__(f"Invalid request fields: {fields}")

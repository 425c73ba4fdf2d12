"""End-to-end tests for the office, time slot and job position endpoints"""

import pytest

OFFICES = "/api/v1/offices"


@pytest.fixture
def office_id(client):
    response = client.post(
        OFFICES,
        json={
            "name": "Consultorio Central",
            "workStartTime": "08:00",
            "workEndTime": "12:00",
            "workingDays": ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY"],
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


def slots_url(office_id):
    return f"{OFFICES}/{office_id}/time-slots"


# ========== OFFICES ==========

def test_create_office_returns_calendar_hints(client):
    response = client.post(
        OFFICES,
        json={"name": "Consultorio Norte", "workStartTime": "09:00", "workEndTime": "17:00:00", "workingDays": ["MONDAY"]},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["workStartTime"] == "09:00:00"
    assert body["workEndTime"] == "17:00:00"
    assert body["workingDays"] == ["MONDAY"]
    assert body["nonWorkingDays"] == [0, 2, 3, 4, 5, 6]
    assert body["scheduleFull"] is False
    assert body["timeSlots"] == []


def test_office_without_working_days_has_no_restrictions(client):
    body = client.post(OFFICES, json={"name": "Consultorio Libre"}).json()
    assert body["workingDays"] is None
    assert body["nonWorkingDays"] == []

    body = client.patch(f"{OFFICES}/{body['id']}", json={"workingDays": []}).json()
    assert body["workingDays"] == []
    assert body["nonWorkingDays"] == []


def test_office_detail_reports_schedule_full(client, office_id):
    client.post(slots_url(office_id), json={"startTime": "08:00", "endTime": "10:00"})
    assert client.get(f"{OFFICES}/{office_id}").json()["scheduleFull"] is False

    client.post(slots_url(office_id), json={"startTime": "10:00", "endTime": "12:00"})
    body = client.get(f"{OFFICES}/{office_id}").json()

    assert body["scheduleFull"] is True
    assert body["timeSlotsCount"] == 2
    assert body["nonWorkingDays"] == [0, 6]
    assert [slot["startTime"] for slot in body["timeSlots"]] == ["08:00:00", "10:00:00"]


def test_duplicate_office_name_conflicts(client, office_id):
    response = client.post(OFFICES, json={"name": "Consultorio Central"})
    assert response.status_code == 409
    assert response.json()["error"] == "duplicate_office_name"


def test_office_with_inverted_hours_is_rejected(client):
    response = client.post(OFFICES, json={"name": "Consultorio", "workStartTime": "17:00", "workEndTime": "09:00"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "workEndTime"


def test_list_offices_with_search(client, office_id):
    client.post(OFFICES, json={"name": "Sede Sur"})

    names = [office["name"] for office in client.get(OFFICES).json()]
    assert names == ["Consultorio Central", "Sede Sur"]

    found = client.get(OFFICES, params={"search": "central"}).json()
    assert [office["id"] for office in found] == [office_id]


def test_unknown_office_is_404(client):
    response = client.get(f"{OFFICES}/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "office_not_found",
        "detail": 'Office with ID "does-not-exist" not found',
    }


def test_delete_office_removes_its_slots(client, office_id):
    slot = client.post(slots_url(office_id), json={"startTime": "08:00", "endTime": "09:00"}).json()

    assert client.delete(f"{OFFICES}/{office_id}").status_code == 204
    assert client.get(f"{OFFICES}/{office_id}").status_code == 404
    assert client.get(f"{slots_url(office_id)}/{slot['id']}").status_code == 404


# ========== TIME SLOTS ==========

def test_create_and_fetch_time_slot(client, office_id):
    response = client.post(slots_url(office_id), json={"startTime": "08:30", "endTime": "09:15"})

    assert response.status_code == 201
    slot = response.json()
    assert slot["officeId"] == office_id
    assert slot["startTime"] == "08:30:00"
    assert slot["endTime"] == "09:15:00"
    assert slot["updatedAt"] is None

    assert client.get(f"{slots_url(office_id)}/{slot['id']}").json() == slot


def test_time_slot_outside_hours_conflicts(client, office_id):
    response = client.post(slots_url(office_id), json={"startTime": "11:30", "endTime": "12:30"})

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "out_of_office_hours"
    assert "12:00:00" in body["detail"]


def test_overlapping_time_slot_conflicts(client, office_id):
    client.post(slots_url(office_id), json={"startTime": "09:00", "endTime": "10:00"})

    response = client.post(slots_url(office_id), json={"startTime": "09:30", "endTime": "10:30"})

    assert response.status_code == 409
    assert response.json()["error"] == "slot_overlap"
    assert client.post(slots_url(office_id), json={"startTime": "10:00", "endTime": "10:30"}).status_code == 201


@pytest.mark.parametrize(
    "body, field",
    [
        ({"startTime": "8am", "endTime": "09:00"}, "startTime"),
        ({"startTime": "09:00"}, "endTime"),
        ({"startTime": "10:00", "endTime": "09:00"}, "endTime"),
        ({"startTime": 900, "endTime": "10:00"}, "startTime"),
        ({"startTime": "09:00", "endTime": "10:00", "room": "A"}, "room"),
    ],
)
def test_invalid_time_slot_payloads_are_400(client, office_id, body, field):
    response = client.post(slots_url(office_id), json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"] == "validation_error"
    assert field in [error["field"] for error in payload["errors"]]


def test_time_slot_for_unknown_office_is_404(client):
    response = client.post(slots_url("missing"), json={"startTime": "09:00", "endTime": "10:00"})
    assert response.status_code == 404
    assert response.json()["error"] == "office_not_found"


@pytest.mark.parametrize("method", ["put", "patch"])
def test_update_time_slot(client, office_id, method):
    slot = client.post(slots_url(office_id), json={"startTime": "08:00", "endTime": "09:00"}).json()

    response = getattr(client, method)(f"{slots_url(office_id)}/{slot['id']}", json={"endTime": "09:30"})

    assert response.status_code == 200
    body = response.json()
    assert (body["startTime"], body["endTime"]) == ("08:00:00", "09:30:00")
    assert body["updatedAt"] is not None


def test_empty_update_returns_slot_unchanged(client, office_id):
    slot = client.post(slots_url(office_id), json={"startTime": "08:00", "endTime": "09:00"}).json()

    response = client.patch(f"{slots_url(office_id)}/{slot['id']}", json={})

    assert response.status_code == 200
    assert response.json() == slot


def test_update_into_another_slot_conflicts(client, office_id):
    client.post(slots_url(office_id), json={"startTime": "08:00", "endTime": "09:00"})
    slot = client.post(slots_url(office_id), json={"startTime": "09:00", "endTime": "10:00"}).json()

    response = client.patch(f"{slots_url(office_id)}/{slot['id']}", json={"startTime": "08:45"})

    assert response.status_code == 409
    assert response.json()["error"] == "slot_overlap"


def test_update_with_end_before_existing_start_is_400(client, office_id):
    slot = client.post(slots_url(office_id), json={"startTime": "10:00", "endTime": "11:00"}).json()

    response = client.patch(f"{slots_url(office_id)}/{slot['id']}", json={"endTime": "09:00"})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_time_range"


def test_slot_of_another_office_is_404(client, office_id):
    other_id = client.post(OFFICES, json={"name": "Sede Sur"}).json()["id"]
    slot = client.post(slots_url(office_id), json={"startTime": "08:00", "endTime": "09:00"}).json()

    response = client.get(f"{slots_url(other_id)}/{slot['id']}")
    assert response.status_code == 404
    assert response.json()["error"] == "slot_not_found"


def test_delete_time_slot(client, office_id):
    slot = client.post(slots_url(office_id), json={"startTime": "08:00", "endTime": "09:00"}).json()

    assert client.delete(f"{slots_url(office_id)}/{slot['id']}").status_code == 204
    assert client.delete(f"{slots_url(office_id)}/{slot['id']}").status_code == 404


def test_delete_all_time_slots(client, office_id):
    for start, end in [("08:00", "09:00"), ("09:00", "10:00")]:
        client.post(slots_url(office_id), json={"startTime": start, "endTime": end})

    assert client.delete(slots_url(office_id)).status_code == 204
    assert client.get(slots_url(office_id)).json() == []


# ========== JOB POSITIONS ==========

def test_job_position_lifecycle(client, office_id):
    url = f"{OFFICES}/{office_id}/job-positions"

    created = client.post(url, json={"name": "Recepción", "color": "#3498DB"})
    assert created.status_code == 201
    job_position = created.json()

    assert client.post(url, json={"name": "Recepción", "color": "#000000"}).status_code == 409

    updated = client.patch(f"{url}/{job_position['id']}", json={"color": "#FF5733"})
    assert updated.json()["color"] == "#FF5733"

    assert client.get(f"{OFFICES}/{office_id}").json()["jobPositionsCount"] == 1
    assert client.delete(f"{url}/{job_position['id']}").status_code == 204
    assert client.get(url).json() == []


def test_job_position_color_is_validated(client, office_id):
    response = client.post(f"{OFFICES}/{office_id}/job-positions", json={"name": "Higienista", "color": "blue"})
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "color", "message": "color must be a hex code such as #FF5733"}]


# ========== HEALTH ==========

def test_health_check(client, store):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == {"path": str(store.db_path), "reachable": True}


def test_liveness_probe(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_repeated_working_days_are_echoed_once(client):
    body = client.post(OFFICES, json={"name": "Consultorio Doble", "workingDays": ["MONDAY", "MONDAY"]}).json()

    assert body["workingDays"] == ["MONDAY"]
    assert body["nonWorkingDays"] == [0, 2, 3, 4, 5, 6]

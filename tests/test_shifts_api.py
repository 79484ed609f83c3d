import pytest

from syncworks.domain.shifts.service import is_time_overlap, shift_work_minutes


class TestShiftTimeMath:
    def test_overlap(self):
        assert is_time_overlap("09:00", "12:00", "11:00", "13:00")
        assert is_time_overlap("09:00", "18:00", "10:00", "11:00")

    def test_touching_ranges_do_not_overlap(self):
        assert not is_time_overlap("09:00", "12:00", "12:00", "15:00")

    def test_compares_numerically(self):
        # "9:00" sorts after "10:00" as text
        assert not is_time_overlap("9:00", "10:00", "10:00", "11:00")

    @pytest.mark.parametrize(
        "start,end,break_minutes,expected",
        [
            ("09:00", "18:00", 60, 480),
            ("09:00", "10:00", 90, 0),
            ("22:00", "00:00", 0, 120),
            ("00:00", "23:59", 60, 1379),
        ],
    )
    def test_work_minutes(self, start, end, break_minutes, expected):
        assert shift_work_minutes(start, end, break_minutes) == expected


def test_create_defaults_to_whole_day(client, make_employee):
    employee = make_employee()
    response = client.post("/api/shifts", json={"employee_id": employee.id, "shift_date": "2025/6/2"})
    assert response.status_code == 201
    shift = response.json()["data"]
    assert shift["shift_date"] == "2025-06-02"
    assert shift["start_time"] == "00:00"
    assert shift["end_time"] == "23:59"
    assert shift["status"] == "scheduled"
    assert shift["employee"]["employee_number"] == "E001"


def test_create_accepts_end_of_day(client, make_employee):
    employee = make_employee()
    response = client.post(
        "/api/shifts",
        json={"employee_id": employee.id, "shift_date": "2025-06-02", "start_time": "13:00", "end_time": "24:00"},
    )
    assert response.json()["data"]["end_time"] == "23:59"


def test_create_rejects_bad_time(client, make_employee):
    employee = make_employee()
    response = client.post(
        "/api/shifts",
        json={"employee_id": employee.id, "shift_date": "2025-06-02", "start_time": "25:00"},
    )
    assert response.status_code == 400
    assert "start_time" in response.json()["error"]


def test_one_shift_per_employee_per_day(client, make_employee):
    employee = make_employee()
    body = {"employee_id": employee.id, "shift_date": "2025-06-02"}
    assert client.post("/api/shifts", json=body).status_code == 201
    assert client.post("/api/shifts", json=body).status_code == 409


def test_create_for_unknown_employee(client):
    response = client.post("/api/shifts", json={"employee_id": "ghost", "shift_date": "2025-06-02"})
    assert response.status_code == 404


def test_list_filters_by_range(client, make_employee):
    employee = make_employee()
    other = make_employee(employee_number="E002")
    for day in ("2025-06-01", "2025-06-10", "2025-06-20"):
        client.post("/api/shifts", json={"employee_id": employee.id, "shift_date": day})
    client.post("/api/shifts", json={"employee_id": other.id, "shift_date": "2025-06-10"})

    body = client.get(
        f"/api/shifts?employee_id={employee.id}&start_date=2025-06-05&end_date=2025-06-30"
    ).json()
    assert body["count"] == 2
    assert [s["shift_date"] for s in body["data"]] == ["2025-06-10", "2025-06-20"]

    assert client.get("/api/shifts").json()["count"] == 4


def test_list_rejects_bad_date(client):
    response = client.get("/api/shifts?start_date=June")
    assert response.status_code == 400


def test_update_and_move_date(client, make_employee):
    employee = make_employee()
    first = client.post("/api/shifts", json={"employee_id": employee.id, "shift_date": "2025-06-02"}).json()["data"]
    client.post("/api/shifts", json={"employee_id": employee.id, "shift_date": "2025-06-03"})

    response = client.put(
        f"/api/shifts/{first['id']}",
        json={"start_time": "08:30", "end_time": "17:30", "status": "working", "notes": "Early start"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert (data["start_time"], data["end_time"], data["status"]) == ("08:30", "17:30", "working")
    assert data["notes"] == "Early start"

    clash = client.put(f"/api/shifts/{first['id']}", json={"shift_date": "2025-06-03"})
    assert clash.status_code == 409

    moved = client.put(f"/api/shifts/{first['id']}", json={"shift_date": "2025-06-04"})
    assert moved.json()["data"]["shift_date"] == "2025-06-04"


def test_update_ignores_null_on_required_columns(client, make_employee):
    employee = make_employee()
    shift = client.post("/api/shifts", json={"employee_id": employee.id, "shift_date": "2025-06-02"}).json()["data"]
    response = client.put(f"/api/shifts/{shift['id']}", json={"status": None, "notes": None})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "scheduled"


def test_delete(client, make_employee):
    employee = make_employee()
    shift = client.post("/api/shifts", json={"employee_id": employee.id, "shift_date": "2025-06-02"}).json()["data"]

    assert client.delete(f"/api/shifts/{shift['id']}").status_code == 200
    assert client.get(f"/api/shifts/{shift['id']}").status_code == 404
    assert client.delete(f"/api/shifts/{shift['id']}").status_code == 404

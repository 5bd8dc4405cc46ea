"""
Tests for the jobs list and delete endpoints
"""
from sqlalchemy.orm import Session

from jobdash.db import create_db_engine, get_db

JOB_FIELDS = {
    "jobID", "wo_no_sec", "wo_desc", "service_ro_no", "operation_no", "task_desc",
    "customer_name", "ar_account_rep_account_rep_email", "startTime", "endTime",
    "currentWorkflow", "status",
}


def _ids(response):
    return [r["jobID"] for r in response.json()["rows"]]


def test_list_jobs_default_order(client):
    response = client.get("/api/jobs")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["count"] == 4
    # newest start first
    assert [r["jobID"] for r in data["rows"]] == [10004, 10003, 10002, 10001]
    assert set(data["rows"][0]) == JOB_FIELDS


def test_list_jobs_row_shape(client):
    rows = {r["jobID"]: r for r in client.get("/api/jobs").json()["rows"]}
    running = rows[10001]
    assert running["wo_no_sec"] == "MO-2025-0001"
    assert running["customer_name"] == "ACME Studios"
    assert running["status"] == "running"
    assert running["endTime"] is None
    assert running["startTime"].endswith("Z")
    assert rows[10002]["endTime"].endswith("Z")


def test_status_filter_and_limit(client):
    response = client.get("/api/jobs", params={"status": "error", "limit": "1"})
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["rows"][0]["jobID"] == 10003
    assert data["rows"][0]["status"] == "error"


def test_unknown_status_returns_no_rows(client):
    response = client.get("/api/jobs", params={"status": "exploded"})
    assert response.status_code == 200
    assert response.json() == {"ok": True, "count": 0, "rows": []}


def test_empty_status_means_no_filter(client):
    assert client.get("/api/jobs", params={"status": ""}).json()["count"] == 4


def test_sort_ascending_by_job_id(client):
    assert _ids(client.get("/api/jobs", params={"sort": "jobID:asc"})) == [10001, 10002, 10003, 10004]
    assert _ids(client.get("/api/jobs", params={"sort": "jobID:ASC"})) == [10001, 10002, 10003, 10004]


def test_sort_direction_falls_back_to_desc(client):
    assert _ids(client.get("/api/jobs", params={"sort": "jobID:up"})) == [10004, 10003, 10002, 10001]


def test_bad_sort_column_falls_back_to_start_time(client):
    expected = _ids(client.get("/api/jobs", params={"sort": "startTime:asc"}))
    assert expected == [10001, 10002, 10003, 10004]
    assert _ids(client.get("/api/jobs", params={"sort": "1;DELETE FROM job_queue:asc"})) == expected
    assert client.get("/api/jobs").json()["count"] == 4


def test_limit_clamped(client):
    assert client.get("/api/jobs", params={"limit": "0"}).json()["count"] == 1
    assert client.get("/api/jobs", params={"limit": "2"}).json()["count"] == 2
    assert client.get("/api/jobs", params={"limit": "nope"}).json()["count"] == 4


def test_delete_requires_token(client):
    response = client.delete("/api/jobs/10001")
    assert response.status_code == 403
    assert response.json() == {"ok": False, "error": "Forbidden"}


def test_delete_wrong_token(client):
    response = client.delete("/api/jobs/10001", headers={"x-admin-token": "nope"})
    assert response.status_code == 403
    assert response.json() == {"ok": False, "error": "Forbidden"}
    assert client.get("/api/jobs").json()["count"] == 4


def test_delete_forbidden_checked_before_job_id(client):
    response = client.delete("/api/jobs/not-a-number")
    assert response.status_code == 403


def test_delete_forbidden_when_no_token_configured(make_client):
    client = make_client(admin_token="")
    for headers in ({}, {"x-admin-token": ""}, {"x-admin-token": "TEST_ADMIN_TOKEN"}):
        response = client.delete("/api/jobs/10001", headers=headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"
    assert client.get("/api/jobs").json()["count"] == 4


def test_delete_invalid_job_id(client, admin_headers):
    response = client.delete("/api/jobs/abc", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Invalid jobID"}


def test_delete_job(client, admin_headers):
    response = client.delete("/api/jobs/10003", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"ok": True, "affectedRows": 1}

    assert 10003 not in _ids(client.get("/api/jobs"))
    assert client.get("/api/jobs", params={"status": "error"}).json()["count"] == 0


def test_delete_missing_job_is_not_an_error(client, admin_headers):
    response = client.delete("/api/jobs/99999", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"ok": True, "affectedRows": 0}


def test_delete_twice(client, admin_headers):
    assert client.delete("/api/jobs/10002", headers=admin_headers).json()["affectedRows"] == 1
    assert client.delete("/api/jobs/10002", headers=admin_headers).json()["affectedRows"] == 0


def test_database_errors_return_500(client, admin_headers, tmp_path):
    broken = create_db_engine(f"sqlite:///{tmp_path / 'missing' / 'broken.db'}")

    def broken_db():
        db = Session(broken)
        try:
            yield db
        finally:
            db.close()

    client.app.dependency_overrides[get_db] = broken_db
    try:
        response = client.get("/api/jobs")
        assert response.status_code == 500
        assert response.json()["ok"] is False
        assert "unable to open database file" in response.json()["error"]

        response = client.delete("/api/jobs/10001", headers=admin_headers)
        assert response.status_code == 500
        assert response.json()["ok"] is False
    finally:
        client.app.dependency_overrides.clear()
        broken.dispose()

    # other requests are unaffected
    assert client.get("/api/jobs").json()["count"] == 4


def test_delete_out_of_range_job_id(client, admin_headers):
    response = client.delete("/api/jobs/99999999999999999999999", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Invalid jobID"}
    assert client.get("/api/jobs").json()["count"] == 4


def test_delete_underscored_job_id(client, admin_headers):
    response = client.delete("/api/jobs/10_001", headers=admin_headers)
    assert response.status_code == 400
    assert 10001 in _ids(client.get("/api/jobs"))


def test_limit_uses_leading_integer(client):
    assert client.get("/api/jobs", params={"limit": "3.7"}).json()["count"] == 3
    assert client.get("/api/jobs", params={"limit": "2rows"}).json()["count"] == 2

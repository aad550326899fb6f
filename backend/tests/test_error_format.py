from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import StoreUnavailable
from app.services import applications as application_service


def _assert_error_shape(res, *, error: str | None = None):
    data = res.json()
    assert isinstance(data, dict)
    assert isinstance(data.get("error"), str) and data["error"]
    assert isinstance(data.get("message"), str) and data["message"]
    if error is not None:
        assert data["error"] == error


def test_error_shape_401_missing_token(anon_client):
    res = anon_client.get("/applications/")
    assert res.status_code == 401
    assert res.headers.get("www-authenticate") == "Bearer"
    _assert_error_shape(res, error="UNAUTHORIZED")


def test_error_shape_404_application_not_found(client):
    res = client.get("/applications/999999")
    assert res.status_code == 404
    _assert_error_shape(res, error="NOT_FOUND")


def test_error_shape_404_unknown_route(anon_client):
    res = anon_client.get("/no-such-route")
    assert res.status_code == 404
    _assert_error_shape(res, error="NOT_FOUND")


def test_error_shape_405_wrong_method(anon_client):
    res = anon_client.put("/health")
    assert res.status_code == 405
    _assert_error_shape(res, error="METHOD_NOT_ALLOWED")


def test_error_shape_409_company_in_use(client):
    company = client.post("/companies/", json={"name": "Acme"}).json()
    client.post("/applications/", json={"position": "Engineer", "company_id": company["id"]})
    res = client.delete(f"/companies/{company['id']}")
    assert res.status_code == 409
    _assert_error_shape(res, error="CONFLICT")


def test_error_shape_422_request_validation_error(client):
    res = client.post("/applications/", json={"company_id": "not-a-number"})
    assert res.status_code == 422
    _assert_error_shape(res, error="VALIDATION_ERROR")
    body = res.json()
    assert isinstance(body.get("details"), dict)
    assert isinstance(body["details"].get("errors"), list)


def test_error_shape_503_store_unavailable(client, db_session, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(db_session, "query", boom)
    res = client.get("/applications/")
    assert res.status_code == 503
    _assert_error_shape(res, error="STORE_UNAVAILABLE")


def test_store_failure_on_commit_rolls_back(db_session, company_for, monkeypatch):
    company = company_for("user-a")

    def boom():
        raise OperationalError("COMMIT", {}, Exception("connection reset"))

    monkeypatch.setattr(db_session, "commit", boom)
    with pytest.raises(StoreUnavailable):
        application_service.create_application(
            db_session,
            "user-a",
            {"position": "Engineer", "company_id": company.id, "date_applied": "2023-10-01", "status": "Applied"},
        )
    monkeypatch.undo()
    assert application_service.list_applications(db_session, "user-a") == []

"""Integration tests for the report template API endpoints."""

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.infrastructure.database import get_db
from app.infrastructure.repositories import DepartmentRepository
from app.main import create_app

BASE_URL = "/workspaces/ws-1/templates"
OWNER = {"X-User-Id": "owner-1", "X-User-Role": "owner"}
FINANCE_MEMBER = {
    "X-User-Id": "member-1",
    "X-User-Role": "member",
    "X-User-Department": "Finance",
}
SALES_MEMBER = {
    "X-User-Id": "member-2",
    "X-User-Role": "member",
    "X-User-Department": "Sales",
}


@pytest.fixture()
def client(session_factory):
    """Return a test client whose sessions use the in-memory database."""

    app = create_app()

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)


def _payload(**overrides):
    payload = {
        "name": "Expense claim",
        "description": "Monthly expenses",
        "category": "Finance",
        "fields": [
            {"id": "amount", "label": "Amount", "type": "number", "order": 0,
             "validation": {"min": 0, "max": 10000}},
            {"id": "receipt", "label": "Receipt", "type": "file", "order": 1,
             "max_files": 3, "max_file_size": 2048, "accepted_file_types": ["pdf"]},
        ],
        "department_access": {
            "type": "custom",
            "allowed_departments": ["Finance"],
            "restricted_departments": [],
        },
    }
    payload.update(overrides)
    return payload


def _create(client, **overrides):
    response = client.post(f"{BASE_URL}/", json=_payload(**overrides), headers=OWNER)
    assert response.status_code == 201, response.text
    return response.json()


def test_template_lifecycle_over_http(client: TestClient) -> None:
    created = _create(client)
    template_id = created["id"]
    assert created["version"] == 1
    assert created["status"] == "active"
    assert created["fields"][0]["validation"]["max"] == 10000
    assert created["fields"][1]["max_files"] == 3

    response = client.patch(
        f"{BASE_URL}/{template_id}",
        json={"fields": [{"id": "total", "label": "Total", "type": "number"}]},
        headers=OWNER,
    )
    assert response.status_code == 200, response.text
    updated = response.json()
    assert updated["version"] == 2
    assert updated["change_log"][0]["changes"] == "Template fields updated"

    response = client.post(
        f"{BASE_URL}/{template_id}/usage",
        json={"status": "submitted"},
        headers=FINANCE_MEMBER,
    )
    assert response.status_code == 200
    usage = response.json()
    assert usage["total_reports"] == 1
    assert usage["department_usage"][0]["department"] == "Finance"

    response = client.delete(f"{BASE_URL}/{template_id}", headers=OWNER)
    assert response.status_code == 200
    assert response.json()["status"] == "archived"

    response = client.get(f"{BASE_URL}/{template_id}", headers=OWNER)
    assert response.status_code == 200
    assert response.json()["status"] == "archived"


def test_validation_errors_are_returned_together(client: TestClient) -> None:
    fields = [
        {"id": "a", "label": "Name", "type": "text"},
        {"id": "b", "label": "name", "type": "dropdown", "options": []},
        {"id": "c", "label": "Signature", "type": "signature"},
    ]

    response = client.post(f"{BASE_URL}/", json=_payload(fields=fields), headers=OWNER)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["template_errors"] == {"fields": "field labels must be unique"}
    assert detail["field_errors"] == {
        "b": ["Dropdown fields must have at least one option"],
        "c": ["Unsupported field type 'signature'"],
    }


def test_members_cannot_mutate_templates(client: TestClient) -> None:
    created = _create(client)

    assert client.post(f"{BASE_URL}/", json=_payload(), headers=FINANCE_MEMBER).status_code == 403
    response = client.delete(f"{BASE_URL}/{created['id']}", headers=FINANCE_MEMBER)
    assert response.status_code == 403


def test_member_access_follows_department_rules(client: TestClient) -> None:
    restricted = _create(client)
    _create(
        client,
        name="Travel request",
        department_access={"type": "global"},
    )

    response = client.get(f"{BASE_URL}/available", headers=SALES_MEMBER)
    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Travel request"]

    response = client.get(f"{BASE_URL}/available", headers=FINANCE_MEMBER)
    assert sorted(item["name"] for item in response.json()) == [
        "Expense claim",
        "Travel request",
    ]

    assert client.get(f"{BASE_URL}/{restricted['id']}", headers=SALES_MEMBER).status_code == 403
    assert client.get(f"{BASE_URL}/{restricted['id']}", headers=FINANCE_MEMBER).status_code == 200


def test_missing_template_returns_404(client: TestClient) -> None:
    response = client.patch(f"{BASE_URL}/999", json={"description": "x"}, headers=OWNER)

    assert response.status_code == 404


def test_immutable_attributes_are_rejected(client: TestClient) -> None:
    created = _create(client)

    response = client.patch(
        f"{BASE_URL}/{created['id']}", json={"version": 7}, headers=OWNER
    )

    assert response.status_code == 400
    assert response.json()["detail"]["template_errors"] == {
        "version": "Attribute cannot be updated"
    }


def test_clone_and_delete_unused_template(client: TestClient) -> None:
    created = _create(client)

    response = client.post(
        f"{BASE_URL}/{created['id']}/clone", json={"name": "Expense claim v2"}, headers=OWNER
    )
    assert response.status_code == 201
    clone = response.json()
    assert clone["status"] == "draft"
    assert clone["version"] == 1

    response = client.delete(f"{BASE_URL}/{clone['id']}", headers=OWNER)
    assert response.status_code == 204
    assert client.get(f"{BASE_URL}/{clone['id']}", headers=OWNER).status_code == 404


def test_department_access_endpoint(client: TestClient) -> None:
    created = _create(client)

    response = client.put(
        f"{BASE_URL}/{created['id']}/department-access",
        json={"type": "department_specific", "owner_department": "Sales"},
        headers=OWNER,
    )
    assert response.status_code == 200
    assert response.json()["version"] == 1
    assert client.get(f"{BASE_URL}/{created['id']}", headers=SALES_MEMBER).status_code == 200

    response = client.put(
        f"{BASE_URL}/{created['id']}/department-access",
        json={"type": "everyone"},
        headers=OWNER,
    )
    assert response.status_code == 400
    assert "department_access" in response.json()["detail"]["template_errors"]


def test_statistics_categories_and_departments(client: TestClient, session_factory) -> None:
    first = _create(client)
    _create(client, name="Leave request", category="HR")
    _create(client, name="Draft form", category="Ops", status="draft", fields=[])
    for status in ("draft", "submitted"):
        client.post(
            f"{BASE_URL}/{first['id']}/usage", json={"status": status}, headers=OWNER
        )

    session = session_factory()
    try:
        DepartmentRepository(session).add("ws-1", "Field Services")
    finally:
        session.close()

    statistics = client.get(f"{BASE_URL}/statistics", headers=OWNER).json()
    assert statistics["total_templates"] == 3
    assert statistics["active_templates"] == 2
    assert statistics["draft_templates"] == 1
    assert statistics["total_reports"] == 2
    assert [item["id"] for item in statistics["popular_templates"]] == [first["id"]]
    assert [item["id"] for item in statistics["recently_used"]] == [first["id"]]

    categories = client.get(f"{BASE_URL}/categories", headers=OWNER).json()
    assert categories == ["Finance", "HR"]

    departments = client.get(f"{BASE_URL}/departments", headers=OWNER).json()
    assert "Field Services" in departments
    assert "Human Resources" in departments
    assert departments == sorted(departments)

    response = client.get(f"{BASE_URL}/{first['id']}/department-usage", headers=OWNER)
    assert response.status_code == 200
    assert response.json() == []


def test_field_defaults(client: TestClient) -> None:
    response = client.get(f"{BASE_URL}/field-defaults/file", headers=OWNER)

    assert response.status_code == 200
    field = response.json()
    assert field["id"].startswith("field_")
    assert len(field["id"]) == len("field_") + 12
    assert field["label"] == "File Upload"
    assert field["max_file_size"] == 10 * 1024 * 1024
    assert field["accepted_file_types"] == ["pdf", "doc", "docx"]

    assert client.get(f"{BASE_URL}/field-defaults/signature", headers=OWNER).status_code == 400


def test_unknown_order_field_is_a_bad_request(client: TestClient) -> None:
    response = client.get(f"{BASE_URL}/?order_by=colour", headers=OWNER)

    assert response.status_code == 400

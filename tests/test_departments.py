import pytest

from app.application.use_cases.departments import register_department
from app.application.use_cases.templates import list_available_departments
from app.application.use_cases.templates.list_available_departments import (
    COMMON_DEPARTMENTS,
)
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import DepartmentRepository


def test_common_departments_are_always_available(session):
    assert list_available_departments(session, workspace_id="ws-1") == sorted(
        COMMON_DEPARTMENTS
    )


def test_workspace_departments_are_merged_and_sorted(session):
    register_department(session, workspace_id="ws-1", name="  Field Services ")
    register_department(session, workspace_id="ws-1", name="Finance")
    register_department(session, workspace_id="ws-2", name="Logistics")

    departments = list_available_departments(session, workspace_id="ws-1")

    assert "Field Services" in departments
    assert "Logistics" not in departments
    assert departments.count("Finance") == 1
    assert departments == sorted(departments)


def test_registering_twice_is_a_no_op(session):
    register_department(session, workspace_id="ws-1", name="Audit")
    register_department(session, workspace_id="ws-1", name="Audit")

    assert DepartmentRepository(session).list_names("ws-1") == {"Audit"}


def test_blank_department_names_are_rejected(session):
    with pytest.raises(ValidationError) as exc_info:
        register_department(session, workspace_id="ws-1", name="   ")

    assert exc_info.value.template_errors == {"name": "Department name is required"}

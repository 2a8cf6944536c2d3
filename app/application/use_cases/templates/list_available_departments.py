"""Use case for listing the departments templates can be scoped to."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import DepartmentRepository

COMMON_DEPARTMENTS: tuple[str, ...] = (
    "Administration",
    "Customer Service",
    "Finance",
    "Human Resources",
    "Information Technology",
    "Legal",
    "Marketing",
    "Operations",
    "Project Management",
    "Quality Assurance",
    "Research & Development",
    "Sales",
)


def list_available_departments(session: Session, *, workspace_id: str) -> list[str]:
    """Return the workspace departments merged with :data:`COMMON_DEPARTMENTS`."""

    names = DepartmentRepository(session).list_names(workspace_id)
    departments = {name.strip() for name in names if name and name.strip()}
    departments.update(COMMON_DEPARTMENTS)
    return sorted(departments)


__all__ = ["COMMON_DEPARTMENTS", "list_available_departments"]

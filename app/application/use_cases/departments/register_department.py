"""Use case for adding a department to a workspace directory."""

from sqlalchemy.orm import Session

from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import DepartmentRepository

MAX_DEPARTMENT_NAME_LENGTH = 100


def register_department(session: Session, *, workspace_id: str, name: str) -> str:
    """Store ``name`` for the workspace and return it trimmed.

    Registering a department that already exists is a no-op.
    """

    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError({"name": "Department name is required"})
    if len(normalized) > MAX_DEPARTMENT_NAME_LENGTH:
        raise ValidationError(
            {"name": f"Department name must be {MAX_DEPARTMENT_NAME_LENGTH} characters or less"}
        )

    DepartmentRepository(session).add(workspace_id, normalized)
    return normalized


__all__ = ["register_department"]

"""Use case for reading per-department usage of a template."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import DepartmentUsage

from .get_template import get_template


def get_department_usage(
    session: Session, *, workspace_id: str, template_id: int
) -> Sequence[DepartmentUsage]:
    """Return the department usage entries ordered by department name."""

    template = get_template(session, workspace_id=workspace_id, template_id=template_id)
    return sorted(template.usage.department_usage, key=lambda entry: entry.department)


__all__ = ["get_department_usage"]

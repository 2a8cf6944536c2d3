"""Use case for replacing the department access policy of a template."""

from sqlalchemy.orm import Session

from app.domain.entities import ACCESS_TYPES, DepartmentAccess, ReportTemplate
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import TemplateRepository
from app.utils import now_in_app_timezone

from .activity import log_template_activity


def update_template_department_access(
    session: Session,
    *,
    workspace_id: str,
    template_id: int,
    department_access: DepartmentAccess,
    updated_by: str,
) -> ReportTemplate:
    """Replace ``department_access`` without bumping the template version."""

    if department_access is None or department_access.type not in ACCESS_TYPES:
        access_type = getattr(department_access, "type", None)
        raise ValidationError(
            {"department_access": f"Unsupported department access type '{access_type}'"}
        )

    repository = TemplateRepository(session)
    if repository.get(workspace_id, template_id) is None:
        raise NotFoundError(workspace_id, template_id)

    saved_template = repository.update(
        workspace_id,
        template_id,
        {
            "department_access": department_access,
            "updated_by": updated_by,
            "updated_at": now_in_app_timezone(),
        },
    )

    log_template_activity(
        session,
        action="department_access_updated",
        template_id=template_id,
        workspace_id=workspace_id,
        actor_id=updated_by,
        details={
            "template_name": saved_template.name,
            "access_type": department_access.type,
        },
    )
    return saved_template


__all__ = ["update_template_department_access"]

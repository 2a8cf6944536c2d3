"""Use case to clone an existing report template."""

from sqlalchemy.orm import Session

from app.domain.entities import TEMPLATE_STATUS_DRAFT, ReportTemplate
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import TemplateRepository

from .activity import log_template_activity
from .create_template import NewReportTemplateData, create_template


def clone_template(
    session: Session,
    *,
    workspace_id: str,
    template_id: int,
    new_name: str,
    cloned_by: str,
) -> ReportTemplate:
    """Copy ``template_id`` into a new draft named ``new_name``.

    The clone starts over at version 1 with an empty change log and no usage.
    """

    source_template = TemplateRepository(session).get(workspace_id, template_id)
    if source_template is None:
        raise NotFoundError(workspace_id, template_id)

    cloned_template = create_template(
        session,
        workspace_id=workspace_id,
        data=NewReportTemplateData(
            name=new_name,
            fields=list(source_template.fields),
            description=source_template.description,
            category=source_template.category,
            department=source_template.department,
            tags=source_template.tags,
            visibility=source_template.visibility,
            allowed_roles=source_template.allowed_roles,
            allowed_departments=source_template.allowed_departments,
            department_access=source_template.department_access,
            settings=dict(source_template.settings),
            status=TEMPLATE_STATUS_DRAFT,
        ),
        created_by=cloned_by,
    )

    log_template_activity(
        session,
        action="template_cloned",
        template_id=cloned_template.id,
        workspace_id=workspace_id,
        actor_id=cloned_by,
        details={
            "template_name": cloned_template.name,
            "source_template_id": template_id,
        },
    )
    return cloned_template


__all__ = ["clone_template"]

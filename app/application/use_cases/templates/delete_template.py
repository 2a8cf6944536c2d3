"""Use case for deleting report templates."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import TEMPLATE_STATUS_ARCHIVED, ReportTemplate
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import TemplateRepository

from .activity import log_template_activity
from .update_template import update_template

logger = logging.getLogger(__name__)


def delete_template(
    session: Session,
    *,
    workspace_id: str,
    template_id: int,
    deleted_by: str,
) -> ReportTemplate | None:
    """Delete the template, or archive it when reports were already filed.

    Returns the archived template, or ``None`` when the template was removed.
    """

    repository = TemplateRepository(session)
    template = repository.get(workspace_id, template_id)
    if template is None:
        raise NotFoundError(workspace_id, template_id)

    if template.usage.total_reports > 0:
        logger.info(
            "Template %s has %s recorded reports; archiving instead of deleting",
            template_id,
            template.usage.total_reports,
        )
        return update_template(
            session,
            workspace_id=workspace_id,
            template_id=template_id,
            updates={"status": TEMPLATE_STATUS_ARCHIVED},
            updated_by=deleted_by,
            activity_action="template_archived",
        )

    repository.delete(workspace_id, template_id)
    log_template_activity(
        session,
        action="template_deleted",
        template_id=template_id,
        workspace_id=workspace_id,
        actor_id=deleted_by,
        details={"template_name": template.name, "action": "delete"},
    )
    return None


__all__ = ["delete_template"]

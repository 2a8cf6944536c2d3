"""Use case for recording report activity against a template."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import TemplateUsage
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import TemplateRepository
from app.utils import now_in_app_timezone

from .usage import plan_usage_increment

logger = logging.getLogger(__name__)


def record_template_usage(
    session: Session,
    *,
    workspace_id: str,
    template_id: int,
    status: str,
    department: str | None = None,
) -> TemplateUsage:
    """Count one report transition into ``status`` and return the refreshed usage.

    The counters are incremented by the database so concurrent callers never
    lose an update.
    """

    increment = plan_usage_increment(status, department, used_at=now_in_app_timezone())

    repository = TemplateRepository(session)
    updated = repository.increment_usage(
        workspace_id,
        template_id,
        status=increment.status,
        department=increment.department,
        used_at=increment.used_at,
    )
    if not updated:
        raise NotFoundError(workspace_id, template_id)

    template = repository.get(workspace_id, template_id)
    if template is None:
        raise NotFoundError(workspace_id, template_id)
    logger.debug(
        "Recorded %s usage for template %s (total %s)",
        increment.status,
        template_id,
        template.usage.total_reports,
    )
    return template.usage


__all__ = ["record_template_usage"]

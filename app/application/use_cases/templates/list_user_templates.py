"""Use case for listing the templates a user is allowed to use."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import ReportTemplate
from app.infrastructure.repositories import TemplateRepository

from .access import can_access_template
from .list_templates import TemplateFilters


def list_templates_for_user(
    session: Session,
    *,
    workspace_id: str,
    user_department: str | None,
    user_role: str,
    filters: TemplateFilters | None = None,
) -> Sequence[ReportTemplate]:
    """Return the listing filtered by :func:`can_access_template`.

    ``filters.limit`` applies to the accessible templates, not to the raw
    listing, so a user never receives fewer results than are available.
    """

    filters = filters or TemplateFilters()
    repository = TemplateRepository(session)
    candidates = repository.list(
        workspace_id,
        status=filters.status,
        category=filters.category,
        order_by=filters.order_by,
        direction=filters.direction,
    )
    accessible = [
        template
        for template in candidates
        if can_access_template(template, user_department, user_role)
    ]
    if filters.limit is not None:
        return accessible[: filters.limit]
    return accessible


__all__ = ["list_templates_for_user"]

"""Use case for listing report templates."""

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import ReportTemplate
from app.infrastructure.repositories import TemplateRepository


@dataclass(frozen=True)
class TemplateFilters:
    """Optional filters and ordering for template listings."""

    status: str | None = None
    category: str | None = None
    order_by: str = "updated_at"
    direction: str = "desc"
    limit: int | None = None


def list_templates(
    session: Session,
    *,
    workspace_id: str,
    filters: TemplateFilters | None = None,
) -> Sequence[ReportTemplate]:
    """Return the workspace templates, most recently updated first by default."""

    filters = filters or TemplateFilters()
    repository = TemplateRepository(session)
    return repository.list(
        workspace_id,
        status=filters.status,
        category=filters.category,
        order_by=filters.order_by,
        direction=filters.direction,
        limit=filters.limit,
    )


__all__ = ["TemplateFilters", "list_templates"]

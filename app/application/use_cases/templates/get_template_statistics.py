"""Use case for summarising template usage in a workspace."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from app.domain.entities import (
    TEMPLATE_STATUS_ACTIVE,
    TEMPLATE_STATUS_ARCHIVED,
    TEMPLATE_STATUS_DRAFT,
    ReportTemplate,
)
from app.infrastructure.repositories import TemplateRepository

HIGHLIGHT_LIMIT = 5


@dataclass(frozen=True)
class TemplateStatistics:
    """Aggregated counters for the templates of a workspace."""

    total_templates: int = 0
    active_templates: int = 0
    draft_templates: int = 0
    archived_templates: int = 0
    total_reports: int = 0
    recently_used: Sequence[ReportTemplate] = field(default_factory=tuple)
    popular_templates: Sequence[ReportTemplate] = field(default_factory=tuple)


def get_template_statistics(session: Session, *, workspace_id: str) -> TemplateStatistics:
    """Return status counts plus the most recently used and most popular templates."""

    templates = TemplateRepository(session).list(workspace_id)

    def count(status: str) -> int:
        return sum(1 for template in templates if template.status == status)

    used = [template for template in templates if template.usage.total_reports > 0]
    recently_used = sorted(
        (template for template in used if template.last_used_at is not None),
        key=lambda template: template.last_used_at,
        reverse=True,
    )
    popular = sorted(used, key=lambda template: template.usage.total_reports, reverse=True)

    return TemplateStatistics(
        total_templates=len(templates),
        active_templates=count(TEMPLATE_STATUS_ACTIVE),
        draft_templates=count(TEMPLATE_STATUS_DRAFT),
        archived_templates=count(TEMPLATE_STATUS_ARCHIVED),
        total_reports=sum(template.usage.total_reports for template in templates),
        recently_used=tuple(recently_used[:HIGHLIGHT_LIMIT]),
        popular_templates=tuple(popular[:HIGHLIGHT_LIMIT]),
    )


__all__ = ["HIGHLIGHT_LIMIT", "TemplateStatistics", "get_template_statistics"]

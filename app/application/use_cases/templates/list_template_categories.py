"""Use case for listing the categories of active templates."""

from sqlalchemy.orm import Session

from app.domain.entities import TEMPLATE_STATUS_ACTIVE
from app.infrastructure.repositories import TemplateRepository


def list_template_categories(session: Session, *, workspace_id: str) -> list[str]:
    repository = TemplateRepository(session)
    templates = repository.list(workspace_id, status=TEMPLATE_STATUS_ACTIVE)
    return sorted({template.category for template in templates if template.category})


__all__ = ["list_template_categories"]

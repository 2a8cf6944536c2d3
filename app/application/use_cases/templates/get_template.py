"""Use case for retrieving a report template."""

from sqlalchemy.orm import Session

from app.domain.entities import ReportTemplate
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import TemplateRepository


def get_template(session: Session, *, workspace_id: str, template_id: int) -> ReportTemplate:
    """Return the template identified by ``template_id`` or raise :class:`NotFoundError`."""

    repository = TemplateRepository(session)
    template = repository.get(workspace_id, template_id)
    if template is None:
        raise NotFoundError(workspace_id, template_id)
    return template


__all__ = ["get_template"]

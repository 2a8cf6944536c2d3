"""Use case for creating report templates."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    TEMPLATE_STATUSES,
    TEMPLATE_STATUS_ACTIVE,
    TEMPLATE_STATUS_DRAFT,
    VISIBILITY_PUBLIC,
    DepartmentAccess,
    ReportTemplate,
    TemplateField,
    TemplateUsage,
)
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import TemplateRepository
from app.utils import now_in_app_timezone

from .activity import log_template_activity
from .validators import ensure_valid_template

DEFAULT_TEMPLATE_STATUS = TEMPLATE_STATUS_ACTIVE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewReportTemplateData:
    """Data required to create a report template."""

    name: str
    fields: Sequence[TemplateField] = ()
    description: str | None = None
    category: str | None = None
    department: str | None = None
    tags: Sequence[str] = ()
    visibility: str = VISIBILITY_PUBLIC
    allowed_roles: Sequence[str] = ()
    allowed_departments: Sequence[str] = ()
    department_access: DepartmentAccess | None = None
    settings: Mapping[str, Any] = field(default_factory=dict)
    status: str | None = None


def normalize_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Return trimmed, non-empty, de-duplicated tags keeping their first position."""

    seen: set[str] = set()
    normalized: list[str] = []
    for tag in tags or ():
        candidate = (tag or "").strip()
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        normalized.append(candidate)
    return tuple(normalized)


def order_fields(fields: Iterable[TemplateField]) -> list[TemplateField]:
    """Return the fields sorted by their display order."""

    return sorted(fields, key=lambda item: item.order)


def create_template(
    session: Session,
    *,
    workspace_id: str,
    data: NewReportTemplateData,
    created_by: str,
) -> ReportTemplate:
    """Validate and persist a new template at version 1.

    Raises:
        ValidationError: If the template or any of its fields is invalid. Nothing
            is written in that case.
    """

    status = data.status or DEFAULT_TEMPLATE_STATUS
    if status not in TEMPLATE_STATUSES:
        raise ValidationError({"status": f"Unsupported template status '{status}'"})

    name = (data.name or "").strip()
    fields = order_fields(data.fields)
    ensure_valid_template(
        {
            "name": name,
            "description": data.description,
            "visibility": data.visibility,
            "allowed_roles": data.allowed_roles,
        },
        fields,
        require_fields=status != TEMPLATE_STATUS_DRAFT,
    )

    now = now_in_app_timezone()
    template = ReportTemplate(
        id=None,
        workspace_id=workspace_id,
        name=name,
        description=data.description,
        category=data.category,
        department=data.department,
        tags=normalize_tags(data.tags),
        fields=fields,
        visibility=data.visibility,
        allowed_roles=tuple(data.allowed_roles),
        allowed_departments=tuple(data.allowed_departments),
        department_access=data.department_access,
        settings=dict(data.settings),
        status=status,
        version=1,
        created_by=created_by,
        created_at=now,
        updated_by=None,
        updated_at=now,
        change_log=[],
        usage=TemplateUsage(),
    )

    saved_template = TemplateRepository(session).create(template)
    logger.info(
        "Created template %s (%s) in workspace %s",
        saved_template.id,
        saved_template.name,
        workspace_id,
    )
    log_template_activity(
        session,
        action="template_created",
        template_id=saved_template.id,
        workspace_id=workspace_id,
        actor_id=created_by,
        details={"template_name": saved_template.name},
    )
    return saved_template


__all__ = [
    "DEFAULT_TEMPLATE_STATUS",
    "NewReportTemplateData",
    "create_template",
    "normalize_tags",
    "order_fields",
]

"""Use case for updating report templates."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import TEMPLATE_STATUS_ACTIVE, TEMPLATE_STATUS_DRAFT, ReportTemplate
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import TemplateRepository
from app.utils import now_in_app_timezone

from .activity import log_template_activity
from .create_template import normalize_tags, order_fields
from .validators import ensure_status_transition, ensure_valid_template
from .versioning import plan_version_change

IMMUTABLE_ATTRIBUTES = frozenset(
    {"id", "workspace_id", "version", "change_log", "usage", "created_by", "created_at"}
)
UPDATABLE_ATTRIBUTES = frozenset(
    {
        "name",
        "description",
        "category",
        "department",
        "tags",
        "fields",
        "visibility",
        "allowed_roles",
        "allowed_departments",
        "department_access",
        "settings",
        "status",
    }
)
_REVALIDATED_ATTRIBUTES = frozenset(
    {"fields", "name", "description", "visibility", "allowed_roles"}
)


def _reject_unsupported_attributes(updates: Mapping[str, Any]) -> None:
    errors: dict[str, str] = {}
    for attribute in sorted(updates):
        if attribute in IMMUTABLE_ATTRIBUTES:
            errors[attribute] = "Attribute cannot be updated"
        elif attribute not in UPDATABLE_ATTRIBUTES:
            errors[attribute] = "Unknown template attribute"
    if errors:
        raise ValidationError(errors)


def _normalize_updates(updates: Mapping[str, Any]) -> dict[str, Any]:
    changes = dict(updates)
    if "name" in changes:
        changes["name"] = (changes["name"] or "").strip()
    if "fields" in changes:
        changes["fields"] = order_fields(changes["fields"] or ())
    if "tags" in changes:
        changes["tags"] = normalize_tags(changes["tags"])
    for attribute in ("allowed_roles", "allowed_departments"):
        if attribute in changes:
            changes[attribute] = tuple(changes[attribute] or ())
    if "settings" in changes:
        changes["settings"] = dict(changes["settings"] or {})
    return changes


def update_template(
    session: Session,
    *,
    workspace_id: str,
    template_id: int,
    updates: Mapping[str, Any],
    updated_by: str,
    activity_action: str = "template_updated",
) -> ReportTemplate:
    """Apply ``updates`` to a template, bumping its version on structural changes.

    The change is recorded in the activity log under ``activity_action``.

    Raises:
        NotFoundError: If the template does not exist in the workspace.
        ValidationError: If the resulting template would be invalid, the status
            transition is not allowed or an immutable attribute is targeted.
    """

    repository = TemplateRepository(session)
    current = repository.get(workspace_id, template_id)
    if current is None:
        raise NotFoundError(workspace_id, template_id)

    _reject_unsupported_attributes(updates)
    changes = _normalize_updates(updates)

    if "status" in changes:
        ensure_status_transition(current.status, changes["status"])

    resulting_status = changes.get("status", current.status)
    activating_draft = (
        current.status == TEMPLATE_STATUS_DRAFT and resulting_status == TEMPLATE_STATUS_ACTIVE
    )
    if activating_draft or _REVALIDATED_ATTRIBUTES & changes.keys():
        ensure_valid_template(
            {
                "name": changes.get("name", current.name),
                "description": changes.get("description", current.description),
                "visibility": changes.get("visibility", current.visibility),
                "allowed_roles": changes.get("allowed_roles", current.allowed_roles),
            },
            changes.get("fields", current.fields),
            require_fields=resulting_status != TEMPLATE_STATUS_DRAFT,
        )

    now = now_in_app_timezone()
    change_log_entry = plan_version_change(
        current, changes, changed_by=updated_by, changed_at=now
    )

    saved_template = repository.update(
        workspace_id,
        template_id,
        {**changes, "updated_by": updated_by, "updated_at": now},
        change_log_entry=change_log_entry,
    )

    log_template_activity(
        session,
        action=activity_action,
        template_id=template_id,
        workspace_id=workspace_id,
        actor_id=updated_by,
        details={
            "template_name": saved_template.name,
            "changes": sorted(updates),
            "version": saved_template.version,
        },
    )
    return saved_template


__all__ = ["IMMUTABLE_ATTRIBUTES", "UPDATABLE_ATTRIBUTES", "update_template"]

"""Best-effort activity logging for template operations."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import ActivityLogEntry
from app.infrastructure.repositories import ActivityLogRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

ENTITY_TYPE = "report_template"


def log_template_activity(
    session: Session,
    *,
    action: str,
    template_id: int | str,
    workspace_id: str,
    actor_id: str | None,
    details: dict[str, Any] | None = None,
) -> None:
    """Record ``action`` for the template without ever failing the caller.

    The template write has already been committed when this runs, so a
    failure here only rolls back the activity entry itself.
    """

    entry = ActivityLogEntry(
        id=None,
        action=action,
        entity_type=ENTITY_TYPE,
        entity_id=str(template_id),
        workspace_id=workspace_id,
        actor_id=actor_id,
        created_at=now_in_app_timezone(),
        details=details or {},
    )
    try:
        ActivityLogRepository(session).create(entry)
    except Exception:
        session.rollback()
        logger.exception(
            "Failed to log %s activity for template %s in workspace %s",
            action,
            template_id,
            workspace_id,
        )


__all__ = ["log_template_activity"]

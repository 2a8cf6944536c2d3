"""Version and change-log decisions for template updates."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from app.domain.entities import ChangeLogEntry, ReportTemplate


def detect_structural_changes(
    current: ReportTemplate, updates: Mapping[str, Any]
) -> list[str]:
    """Return a human readable description of each structural change.

    Only ``fields``, ``name`` and ``settings`` are structural; an attribute
    that is present in ``updates`` but equal to the current value is ignored.
    """

    changes: list[str] = []
    if "fields" in updates and list(updates["fields"]) != list(current.fields):
        changes.append("Template fields updated")
    if "name" in updates and updates["name"] != current.name:
        changes.append(f"Template renamed from '{current.name}' to '{updates['name']}'")
    if "settings" in updates and dict(updates["settings"] or {}) != current.settings:
        changes.append("Template settings updated")
    return changes


def plan_version_change(
    current: ReportTemplate,
    updates: Mapping[str, Any],
    *,
    changed_by: str,
    changed_at: datetime,
) -> ChangeLogEntry | None:
    """Return the change-log entry to append, or ``None`` when nothing structural changed."""

    changes = detect_structural_changes(current, updates)
    if not changes:
        return None
    return ChangeLogEntry(
        version=current.version + 1,
        changes="; ".join(changes),
        changed_by=changed_by,
        changed_at=changed_at,
    )


__all__ = ["detect_structural_changes", "plan_version_change"]

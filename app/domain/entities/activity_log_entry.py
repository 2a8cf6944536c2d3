"""Domain entity representing an activity log entry."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class ActivityLogEntry:
    """Captured information about an action performed on a workspace entity."""

    id: int | None
    action: str
    entity_type: str
    entity_id: str
    workspace_id: str
    actor_id: str | None
    created_at: datetime | None
    details: dict[str, Any] = field(default_factory=dict)


__all__ = ["ActivityLogEntry"]

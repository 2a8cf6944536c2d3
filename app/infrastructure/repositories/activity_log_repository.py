"""Persistence layer for activity log records."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import ActivityLogEntry
from app.infrastructure.models import ActivityLogModel
from app.utils import ensure_app_timezone, now_in_app_timezone


class ActivityLogRepository:
    """Provide create and list helpers for :class:`ActivityLogEntry` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: ActivityLogEntry) -> ActivityLogEntry:
        model = ActivityLogModel()
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list(
        self,
        workspace_id: str,
        *,
        entity_id: str | None = None,
    ) -> Sequence[ActivityLogEntry]:
        """Return the workspace entries, optionally filtered by entity."""

        query = self.session.query(ActivityLogModel).filter(
            ActivityLogModel.workspace_id == workspace_id
        )
        if entity_id is not None:
            query = query.filter(ActivityLogModel.entity_id == entity_id)
        return [
            self._to_entity(model) for model in query.order_by(ActivityLogModel.id).all()
        ]

    @staticmethod
    def _to_entity(model: ActivityLogModel) -> ActivityLogEntry:
        return ActivityLogEntry(
            id=model.id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            workspace_id=model.workspace_id,
            actor_id=model.actor_id,
            created_at=ensure_app_timezone(model.created_at),
            details=dict(model.details or {}),
        )

    @staticmethod
    def _apply_entity_to_model(model: ActivityLogModel, entry: ActivityLogEntry) -> None:
        model.action = entry.action
        model.entity_type = entry.entity_type
        model.entity_id = entry.entity_id
        model.workspace_id = entry.workspace_id
        model.actor_id = entry.actor_id
        model.details = dict(entry.details)
        model.created_at = ensure_app_timezone(entry.created_at) or now_in_app_timezone()


__all__ = ["ActivityLogRepository"]

"""Persistence layer for report templates."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import asc, desc, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.domain.entities import (
    REPORT_STATUS_APPROVED,
    REPORT_STATUS_DRAFT,
    REPORT_STATUS_REJECTED,
    REPORT_STATUS_SUBMITTED,
    ChangeLogEntry,
    DepartmentAccess,
    DepartmentUsage,
    ReportTemplate,
    TemplateField,
    TemplateUsage,
    template_field_from_payload,
)
from app.domain.exceptions import NotFoundError, PersistenceError
from app.infrastructure.models import (
    ReportTemplateModel,
    TemplateChangeLogModel,
    TemplateDepartmentUsageModel,
)
from app.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

ORDERABLE_COLUMNS = {
    "name": ReportTemplateModel.name,
    "created_at": ReportTemplateModel.created_at,
    "updated_at": ReportTemplateModel.updated_at,
    "last_used_at": ReportTemplateModel.last_used_at,
}

_USAGE_STATUS_COLUMNS = {
    REPORT_STATUS_DRAFT: ReportTemplateModel.usage_drafts,
    REPORT_STATUS_SUBMITTED: ReportTemplateModel.usage_submitted,
    REPORT_STATUS_APPROVED: ReportTemplateModel.usage_approved,
    REPORT_STATUS_REJECTED: ReportTemplateModel.usage_rejected,
}

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

# Attributes that ``update`` may write; everything else is owned by the repository.
UPDATABLE_COLUMNS = frozenset(
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
        "updated_by",
        "updated_at",
    }
)


class TemplateRepository:
    """Provide CRUD operations for report templates scoped to a workspace."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, workspace_id: str, template_id: int) -> ReportTemplate | None:
        with self._storage_operation("get", template_id):
            model = self._get_model(workspace_id, template_id)
            return self._to_entity(model) if model else None

    def list(
        self,
        workspace_id: str,
        *,
        status: str | None = None,
        category: str | None = None,
        order_by: str = "updated_at",
        direction: str = "desc",
        limit: int | None = None,
    ) -> Sequence[ReportTemplate]:
        column = ORDERABLE_COLUMNS.get(order_by)
        if column is None:
            raise ValueError(f"Unsupported order field '{order_by}'")
        if direction not in ("asc", "desc"):
            raise ValueError(f"Unsupported order direction '{direction}'")

        with self._storage_operation("list"):
            query = (
                self.session.query(ReportTemplateModel)
                .options(
                    selectinload(ReportTemplateModel.change_log),
                    selectinload(ReportTemplateModel.department_usage),
                )
                .filter(ReportTemplateModel.workspace_id == workspace_id)
            )
            if status is not None:
                query = query.filter(ReportTemplateModel.status == status)
            if category is not None:
                query = query.filter(ReportTemplateModel.category == category)
            ordering = asc if direction == "asc" else desc
            query = query.order_by(ordering(column), ordering(ReportTemplateModel.id))
            if limit is not None:
                query = query.limit(limit)
            return [self._to_entity(model) for model in query.all()]

    def create(self, template: ReportTemplate) -> ReportTemplate:
        with self._storage_operation("create"):
            model = ReportTemplateModel()
            self._apply_entity_to_model(model, template)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model)

    def update(
        self,
        workspace_id: str,
        template_id: int,
        values: Mapping[str, Any],
        *,
        change_log_entry: ChangeLogEntry | None = None,
    ) -> ReportTemplate:
        """Write ``values`` and, when given, append ``change_log_entry``.

        The version column is moved to ``change_log_entry.version`` in the same
        transaction as the change-log insert.
        """

        unsupported = set(values) - UPDATABLE_COLUMNS
        if unsupported:
            raise ValueError(
                f"Unsupported template attributes: {', '.join(sorted(unsupported))}"
            )

        with self._storage_operation("update", template_id):
            model = self._get_model(workspace_id, template_id)
            if model is None:
                raise NotFoundError(workspace_id, template_id)
            for attribute, value in values.items():
                setattr(model, attribute, self._serialize(attribute, value))
            if change_log_entry is not None:
                model.version = change_log_entry.version
                self.session.add(
                    TemplateChangeLogModel(
                        template_id=model.id,
                        version=change_log_entry.version,
                        changes=change_log_entry.changes,
                        changed_by=change_log_entry.changed_by,
                        changed_at=change_log_entry.changed_at,
                    )
                )
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
            return self._to_entity(model)

    def delete(self, workspace_id: str, template_id: int) -> None:
        with self._storage_operation("delete", template_id):
            model = self._get_model(workspace_id, template_id)
            if model is None:
                raise NotFoundError(workspace_id, template_id)
            self.session.delete(model)
            self.session.commit()

    def increment_usage(
        self,
        workspace_id: str,
        template_id: int,
        *,
        status: str,
        department: str | None = None,
        used_at: datetime | None = None,
    ) -> bool:
        """Atomically bump the usage counters of a template.

        Returns ``False`` when no template matched ``template_id`` in the
        workspace.
        """

        status_column = _USAGE_STATUS_COLUMNS.get(status)
        if status_column is None:
            raise ValueError(f"Unsupported report status '{status}'")
        timestamp = used_at or now_in_app_timezone()

        with self._storage_operation("increment_usage", template_id):
            result = self.session.execute(
                update(ReportTemplateModel)
                .where(ReportTemplateModel.id == template_id)
                .where(ReportTemplateModel.workspace_id == workspace_id)
                .values(
                    {
                        ReportTemplateModel.usage_total_reports: (
                            ReportTemplateModel.usage_total_reports + 1
                        ),
                        status_column: status_column + 1,
                        ReportTemplateModel.usage_last_used: timestamp,
                        ReportTemplateModel.last_used_at: timestamp,
                    }
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.session.rollback()
                return False
            if department:
                self._increment_department_usage(template_id, department, timestamp)
            self.session.commit()
            return True

    def _increment_department_usage(
        self, template_id: int, department: str, used_at: datetime
    ) -> None:
        dialect = self.session.get_bind().dialect.name
        insert_factory = _UPSERT_INSERTS.get(dialect)
        if insert_factory is not None:
            statement = insert_factory(TemplateDepartmentUsageModel).values(
                template_id=template_id,
                department=department,
                total_reports=1,
                last_used=used_at,
            )
            statement = statement.on_conflict_do_update(
                index_elements=[
                    TemplateDepartmentUsageModel.template_id,
                    TemplateDepartmentUsageModel.department,
                ],
                set_={
                    "total_reports": TemplateDepartmentUsageModel.total_reports + 1,
                    "last_used": used_at,
                },
            )
            self.session.execute(statement)
            return

        result = self.session.execute(
            update(TemplateDepartmentUsageModel)
            .where(TemplateDepartmentUsageModel.template_id == template_id)
            .where(TemplateDepartmentUsageModel.department == department)
            .values(
                total_reports=TemplateDepartmentUsageModel.total_reports + 1,
                last_used=used_at,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.session.add(
                TemplateDepartmentUsageModel(
                    template_id=template_id,
                    department=department,
                    total_reports=1,
                    last_used=used_at,
                )
            )
            self.session.flush()

    @contextmanager
    def _storage_operation(
        self, operation: str, template_id: int | None = None
    ) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(
                "Storage failure during %s (template %s): %s", operation, template_id, exc
            )
            raise PersistenceError(operation, template_id) from exc

    def _get_model(self, workspace_id: str, template_id: int) -> ReportTemplateModel | None:
        return (
            self.session.query(ReportTemplateModel)
            .options(
                selectinload(ReportTemplateModel.change_log),
                selectinload(ReportTemplateModel.department_usage),
            )
            .filter(ReportTemplateModel.workspace_id == workspace_id)
            .filter(ReportTemplateModel.id == template_id)
            .first()
        )

    @staticmethod
    def _serialize(attribute: str, value: Any) -> Any:
        if attribute == "fields":
            return [field.to_payload() for field in value]
        if attribute in ("tags", "allowed_roles", "allowed_departments"):
            return list(value or ())
        if attribute == "department_access":
            return value.to_payload() if value is not None else None
        if attribute == "settings":
            return dict(value or {})
        if attribute == "updated_at":
            return ensure_app_timezone(value)
        return value

    @staticmethod
    def _to_entity(model: ReportTemplateModel) -> ReportTemplate:
        fields: list[TemplateField] = [
            template_field_from_payload(payload) for payload in (model.fields or [])
        ]
        usage = TemplateUsage(
            total_reports=model.usage_total_reports or 0,
            drafts=model.usage_drafts or 0,
            submitted=model.usage_submitted or 0,
            approved=model.usage_approved or 0,
            rejected=model.usage_rejected or 0,
            last_used=ensure_app_timezone(model.usage_last_used),
            department_usage=tuple(
                DepartmentUsage(
                    department=entry.department,
                    total_reports=entry.total_reports,
                    last_used=ensure_app_timezone(entry.last_used),
                )
                for entry in model.department_usage
            ),
        )
        return ReportTemplate(
            id=model.id,
            workspace_id=model.workspace_id,
            name=model.name,
            description=model.description,
            category=model.category,
            department=model.department,
            tags=tuple(model.tags or ()),
            fields=fields,
            visibility=model.visibility,
            allowed_roles=tuple(model.allowed_roles or ()),
            allowed_departments=tuple(model.allowed_departments or ()),
            department_access=DepartmentAccess.from_payload(model.department_access),
            settings=dict(model.settings or {}),
            status=model.status,
            version=model.version,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_by=model.updated_by,
            updated_at=ensure_app_timezone(model.updated_at),
            last_used_at=ensure_app_timezone(model.last_used_at),
            change_log=[
                ChangeLogEntry(
                    version=entry.version,
                    changes=entry.changes,
                    changed_by=entry.changed_by,
                    changed_at=ensure_app_timezone(entry.changed_at),
                )
                for entry in model.change_log
            ],
            usage=usage,
        )

    @classmethod
    def _apply_entity_to_model(
        cls, model: ReportTemplateModel, template: ReportTemplate
    ) -> None:
        now = now_in_app_timezone()
        model.workspace_id = template.workspace_id
        model.name = template.name
        model.description = template.description
        model.category = template.category
        model.department = template.department
        model.tags = cls._serialize("tags", template.tags)
        model.fields = cls._serialize("fields", template.fields)
        model.visibility = template.visibility
        model.allowed_roles = cls._serialize("allowed_roles", template.allowed_roles)
        model.allowed_departments = cls._serialize(
            "allowed_departments", template.allowed_departments
        )
        model.department_access = cls._serialize(
            "department_access", template.department_access
        )
        model.settings = cls._serialize("settings", template.settings)
        model.status = template.status
        model.version = template.version
        model.usage_total_reports = template.usage.total_reports
        model.usage_drafts = template.usage.drafts
        model.usage_submitted = template.usage.submitted
        model.usage_approved = template.usage.approved
        model.usage_rejected = template.usage.rejected
        model.usage_last_used = template.usage.last_used
        model.created_by = template.created_by
        model.created_at = ensure_app_timezone(template.created_at) or now
        model.updated_by = template.updated_by
        model.updated_at = ensure_app_timezone(template.updated_at) or now
        model.last_used_at = template.last_used_at


__all__ = ["ORDERABLE_COLUMNS", "TemplateRepository", "UPDATABLE_COLUMNS"]

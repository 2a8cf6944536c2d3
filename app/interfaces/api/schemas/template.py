"""Schemas for report template endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import (
    REPORT_STATUS_DRAFT,
    VISIBILITY_PUBLIC,
    DepartmentAccess,
    TemplateField,
    template_field_from_payload,
)


class TemplateFieldValidation(BaseModel):
    """Answer constraints; text fields use the length limits, numbers the range."""

    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    custom_message: str | None = None

    model_config = ConfigDict(from_attributes=True)


class TemplateFieldSchema(BaseModel):
    id: str
    label: str = ""
    type: str | None = None
    required: bool = False
    order: int = 0
    column_span: int = 1
    placeholder: str | None = None
    help_text: str | None = None
    validation: TemplateFieldValidation | None = None
    options: list[str] | None = None
    allow_multiple: bool | None = None
    accepted_file_types: list[str] | None = None
    max_files: int | None = None
    max_file_size: int | None = None

    model_config = ConfigDict(from_attributes=True)

    def to_entity(self) -> TemplateField:
        return template_field_from_payload(self.model_dump())


class DepartmentAccessSchema(BaseModel):
    type: str
    allowed_departments: list[str] | None = None
    restricted_departments: list[str] | None = None
    owner_department: str | None = None
    inherit_from_parent: bool = False

    model_config = ConfigDict(from_attributes=True)

    def to_entity(self) -> DepartmentAccess:
        return DepartmentAccess(
            type=self.type,
            allowed_departments=(
                tuple(self.allowed_departments)
                if self.allowed_departments is not None
                else None
            ),
            restricted_departments=(
                tuple(self.restricted_departments)
                if self.restricted_departments is not None
                else None
            ),
            owner_department=self.owner_department,
            inherit_from_parent=self.inherit_from_parent,
        )


class TemplateCreate(BaseModel):
    """Payload required to create a template."""

    name: str
    description: str | None = None
    category: str | None = None
    department: str | None = None
    tags: list[str] = Field(default_factory=list)
    fields: list[TemplateFieldSchema] = Field(default_factory=list)
    visibility: str = VISIBILITY_PUBLIC
    allowed_roles: list[str] = Field(default_factory=list)
    allowed_departments: list[str] = Field(default_factory=list)
    department_access: DepartmentAccessSchema | None = None
    settings: dict[str, Any] = Field(default_factory=dict)
    status: str | None = None


class TemplateUpdate(BaseModel):
    """Partial update; unknown or read-only attributes are reported by the use case."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    department: str | None = None
    tags: list[str] | None = None
    fields: list[TemplateFieldSchema] | None = None
    visibility: str | None = None
    allowed_roles: list[str] | None = None
    allowed_departments: list[str] | None = None
    department_access: DepartmentAccessSchema | None = None
    settings: dict[str, Any] | None = None
    status: str | None = None

    model_config = ConfigDict(extra="allow")


class TemplateClone(BaseModel):
    name: str


class TemplateUsageRecord(BaseModel):
    status: str = REPORT_STATUS_DRAFT
    department: str | None = None


class ChangeLogEntryRead(BaseModel):
    version: int
    changes: str
    changed_by: str | None
    changed_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class DepartmentUsageRead(BaseModel):
    department: str
    total_reports: int
    last_used: datetime | None

    model_config = ConfigDict(from_attributes=True)


class TemplateUsageRead(BaseModel):
    total_reports: int
    drafts: int
    submitted: int
    approved: int
    rejected: int
    last_used: datetime | None
    department_usage: list[DepartmentUsageRead]

    model_config = ConfigDict(from_attributes=True)


class TemplateRead(BaseModel):
    id: int
    workspace_id: str
    name: str
    description: str | None
    category: str | None
    department: str | None
    tags: list[str]
    fields: list[TemplateFieldSchema]
    visibility: str
    allowed_roles: list[str]
    allowed_departments: list[str]
    department_access: DepartmentAccessSchema | None
    settings: dict[str, Any]
    status: str
    version: int
    created_by: str | None
    created_at: datetime | None
    updated_by: str | None
    updated_at: datetime | None
    last_used_at: datetime | None
    change_log: list[ChangeLogEntryRead]
    usage: TemplateUsageRead

    model_config = ConfigDict(from_attributes=True)


class TemplateSummaryRead(BaseModel):
    id: int
    name: str
    category: str | None
    status: str
    last_used_at: datetime | None
    usage: TemplateUsageRead

    model_config = ConfigDict(from_attributes=True)


class TemplateStatisticsRead(BaseModel):
    total_templates: int
    active_templates: int
    draft_templates: int
    archived_templates: int
    total_reports: int
    recently_used: list[TemplateSummaryRead]
    popular_templates: list[TemplateSummaryRead]

    model_config = ConfigDict(from_attributes=True)

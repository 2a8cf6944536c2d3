"""Domain entity representing a report template and its value objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .template_field import TemplateField

TEMPLATE_STATUS_ACTIVE = "active"
TEMPLATE_STATUS_DRAFT = "draft"
TEMPLATE_STATUS_ARCHIVED = "archived"
TEMPLATE_STATUS_DEPRECATED = "deprecated"

TEMPLATE_STATUSES: tuple[str, ...] = (
    TEMPLATE_STATUS_ACTIVE,
    TEMPLATE_STATUS_DRAFT,
    TEMPLATE_STATUS_ARCHIVED,
    TEMPLATE_STATUS_DEPRECATED,
)

VISIBILITY_PUBLIC = "public"
VISIBILITY_RESTRICTED = "restricted"

VISIBILITIES: tuple[str, ...] = (VISIBILITY_PUBLIC, VISIBILITY_RESTRICTED)

ACCESS_TYPE_GLOBAL = "global"
ACCESS_TYPE_DEPARTMENT_SPECIFIC = "department_specific"
ACCESS_TYPE_MULTI_DEPARTMENT = "multi_department"
ACCESS_TYPE_CUSTOM = "custom"

ACCESS_TYPES: tuple[str, ...] = (
    ACCESS_TYPE_GLOBAL,
    ACCESS_TYPE_DEPARTMENT_SPECIFIC,
    ACCESS_TYPE_MULTI_DEPARTMENT,
    ACCESS_TYPE_CUSTOM,
)

REPORT_STATUS_DRAFT = "draft"
REPORT_STATUS_SUBMITTED = "submitted"
REPORT_STATUS_APPROVED = "approved"
REPORT_STATUS_REJECTED = "rejected"

REPORT_STATUSES: tuple[str, ...] = (
    REPORT_STATUS_DRAFT,
    REPORT_STATUS_SUBMITTED,
    REPORT_STATUS_APPROVED,
    REPORT_STATUS_REJECTED,
)


@dataclass(frozen=True)
class DepartmentAccess:
    """Rules deciding which departments may use a template."""

    type: str
    allowed_departments: tuple[str, ...] | None = None
    restricted_departments: tuple[str, ...] | None = None
    owner_department: str | None = None
    inherit_from_parent: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "allowed_departments": (
                list(self.allowed_departments)
                if self.allowed_departments is not None
                else None
            ),
            "restricted_departments": (
                list(self.restricted_departments)
                if self.restricted_departments is not None
                else None
            ),
            "owner_department": self.owner_department,
            "inherit_from_parent": self.inherit_from_parent,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "DepartmentAccess | None":
        if not payload:
            return None
        allowed = payload.get("allowed_departments")
        restricted = payload.get("restricted_departments")
        return cls(
            type=str(payload.get("type") or ""),
            allowed_departments=tuple(allowed) if allowed is not None else None,
            restricted_departments=tuple(restricted) if restricted is not None else None,
            owner_department=payload.get("owner_department"),
            inherit_from_parent=bool(payload.get("inherit_from_parent", False)),
        )


@dataclass(frozen=True)
class ChangeLogEntry:
    """Immutable record of a structural change that bumped the version."""

    version: int
    changes: str
    changed_by: str
    changed_at: datetime


@dataclass(frozen=True)
class DepartmentUsage:
    """Usage counters of a template for a single department."""

    department: str
    total_reports: int = 0
    last_used: datetime | None = None


@dataclass(frozen=True)
class TemplateUsage:
    """Aggregate usage counters of a template.

    ``total_reports`` counts recorded report transitions rather than distinct
    reports, so it is not the sum of the per-status buckets.
    """

    total_reports: int = 0
    drafts: int = 0
    submitted: int = 0
    approved: int = 0
    rejected: int = 0
    last_used: datetime | None = None
    department_usage: tuple[DepartmentUsage, ...] = ()


@dataclass
class ReportTemplate:
    """Core attributes describing a report template definition."""

    id: int | None
    workspace_id: str
    name: str
    description: str | None
    category: str | None
    department: str | None
    tags: tuple[str, ...]
    fields: list[TemplateField]
    visibility: str
    allowed_roles: tuple[str, ...]
    allowed_departments: tuple[str, ...]
    department_access: DepartmentAccess | None
    settings: dict[str, Any]
    status: str
    version: int
    created_by: str
    created_at: datetime | None
    updated_by: str | None
    updated_at: datetime | None
    last_used_at: datetime | None = None
    change_log: list[ChangeLogEntry] = field(default_factory=list)
    usage: TemplateUsage = field(default_factory=TemplateUsage)

    def ordered_fields(self) -> list[TemplateField]:
        """Return the fields sorted by their display order."""

        return sorted(self.fields, key=lambda item: item.order)


__all__ = [
    "ACCESS_TYPES",
    "ACCESS_TYPE_CUSTOM",
    "ACCESS_TYPE_DEPARTMENT_SPECIFIC",
    "ACCESS_TYPE_GLOBAL",
    "ACCESS_TYPE_MULTI_DEPARTMENT",
    "REPORT_STATUSES",
    "REPORT_STATUS_APPROVED",
    "REPORT_STATUS_DRAFT",
    "REPORT_STATUS_REJECTED",
    "REPORT_STATUS_SUBMITTED",
    "TEMPLATE_STATUSES",
    "TEMPLATE_STATUS_ACTIVE",
    "TEMPLATE_STATUS_ARCHIVED",
    "TEMPLATE_STATUS_DEPRECATED",
    "TEMPLATE_STATUS_DRAFT",
    "VISIBILITIES",
    "VISIBILITY_PUBLIC",
    "VISIBILITY_RESTRICTED",
    "ChangeLogEntry",
    "DepartmentAccess",
    "DepartmentUsage",
    "ReportTemplate",
    "TemplateUsage",
]

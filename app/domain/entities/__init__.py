"""Domain entities exposed by the application."""

from .activity_log_entry import ActivityLogEntry
from .actor import ROLES, ROLE_ADMIN, ROLE_MEMBER, ROLE_OWNER, Actor
from .report_template import (
    ACCESS_TYPES,
    ACCESS_TYPE_CUSTOM,
    ACCESS_TYPE_DEPARTMENT_SPECIFIC,
    ACCESS_TYPE_GLOBAL,
    ACCESS_TYPE_MULTI_DEPARTMENT,
    REPORT_STATUSES,
    REPORT_STATUS_APPROVED,
    REPORT_STATUS_DRAFT,
    REPORT_STATUS_REJECTED,
    REPORT_STATUS_SUBMITTED,
    TEMPLATE_STATUSES,
    TEMPLATE_STATUS_ACTIVE,
    TEMPLATE_STATUS_ARCHIVED,
    TEMPLATE_STATUS_DEPRECATED,
    TEMPLATE_STATUS_DRAFT,
    VISIBILITIES,
    VISIBILITY_PUBLIC,
    VISIBILITY_RESTRICTED,
    ChangeLogEntry,
    DepartmentAccess,
    DepartmentUsage,
    ReportTemplate,
    TemplateUsage,
)
from .template_field import (
    COLUMN_SPANS,
    FIELD_TYPES,
    FIELD_TYPE_CHECKBOX,
    FIELD_TYPE_DATE,
    FIELD_TYPE_DROPDOWN,
    FIELD_TYPE_FILE,
    FIELD_TYPE_NUMBER,
    FIELD_TYPE_TEXT,
    FIELD_TYPE_TEXTAREA,
    CheckboxField,
    DateField,
    DropdownField,
    FileField,
    LengthConstraints,
    NumberField,
    RangeConstraints,
    TemplateField,
    TextField,
    TextareaField,
    template_field_from_payload,
)

__all__ = [
    "ACCESS_TYPES",
    "COLUMN_SPANS",
    "ACCESS_TYPE_CUSTOM",
    "ACCESS_TYPE_DEPARTMENT_SPECIFIC",
    "ACCESS_TYPE_GLOBAL",
    "ACCESS_TYPE_MULTI_DEPARTMENT",
    "ActivityLogEntry",
    "Actor",
    "ChangeLogEntry",
    "CheckboxField",
    "DateField",
    "DepartmentAccess",
    "DepartmentUsage",
    "DropdownField",
    "FIELD_TYPES",
    "FIELD_TYPE_CHECKBOX",
    "FIELD_TYPE_DATE",
    "FIELD_TYPE_DROPDOWN",
    "FIELD_TYPE_FILE",
    "FIELD_TYPE_NUMBER",
    "FIELD_TYPE_TEXT",
    "FIELD_TYPE_TEXTAREA",
    "FileField",
    "LengthConstraints",
    "NumberField",
    "REPORT_STATUSES",
    "REPORT_STATUS_APPROVED",
    "REPORT_STATUS_DRAFT",
    "REPORT_STATUS_REJECTED",
    "REPORT_STATUS_SUBMITTED",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_MEMBER",
    "ROLE_OWNER",
    "RangeConstraints",
    "ReportTemplate",
    "TEMPLATE_STATUSES",
    "TEMPLATE_STATUS_ACTIVE",
    "TEMPLATE_STATUS_ARCHIVED",
    "TEMPLATE_STATUS_DEPRECATED",
    "TEMPLATE_STATUS_DRAFT",
    "TemplateField",
    "TemplateUsage",
    "TextField",
    "TextareaField",
    "VISIBILITIES",
    "VISIBILITY_PUBLIC",
    "VISIBILITY_RESTRICTED",
    "template_field_from_payload",
]

from .template import (
    ChangeLogEntryRead,
    DepartmentAccessSchema,
    DepartmentUsageRead,
    TemplateClone,
    TemplateCreate,
    TemplateFieldSchema,
    TemplateFieldValidation,
    TemplateRead,
    TemplateStatisticsRead,
    TemplateSummaryRead,
    TemplateUpdate,
    TemplateUsageRead,
    TemplateUsageRecord,
)

__all__ = [
    "ChangeLogEntryRead",
    "DepartmentAccessSchema",
    "DepartmentUsageRead",
    "TemplateClone",
    "TemplateCreate",
    "TemplateFieldSchema",
    "TemplateFieldValidation",
    "TemplateRead",
    "TemplateStatisticsRead",
    "TemplateSummaryRead",
    "TemplateUpdate",
    "TemplateUsageRead",
    "TemplateUsageRecord",
]

"""ORM models used by the application infrastructure."""

from .activity_log import ActivityLogModel
from .report_template import ReportTemplateModel
from .template_change_log import TemplateChangeLogModel
from .template_department_usage import TemplateDepartmentUsageModel
from .workspace_department import WorkspaceDepartmentModel

__all__ = [
    "ActivityLogModel",
    "ReportTemplateModel",
    "TemplateChangeLogModel",
    "TemplateDepartmentUsageModel",
    "WorkspaceDepartmentModel",
]

"""Repository implementations for infrastructure layer."""

from .activity_log_repository import ActivityLogRepository
from .department_repository import DepartmentRepository
from .template_repository import TemplateRepository

__all__ = [
    "ActivityLogRepository",
    "DepartmentRepository",
    "TemplateRepository",
]

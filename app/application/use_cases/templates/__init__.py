"""Report template use cases."""

from .access import can_access_template
from .clone_template import clone_template
from .create_template import NewReportTemplateData, create_template
from .delete_template import delete_template
from .fields import create_default_field
from .get_department_usage import get_department_usage
from .get_template import get_template
from .get_template_statistics import TemplateStatistics, get_template_statistics
from .list_available_departments import list_available_departments
from .list_template_categories import list_template_categories
from .list_templates import TemplateFilters, list_templates
from .list_user_templates import list_templates_for_user
from .record_template_usage import record_template_usage
from .update_template import update_template
from .update_template_department_access import update_template_department_access
from .validators import validate_field, validate_template

__all__ = [
    "NewReportTemplateData",
    "TemplateFilters",
    "TemplateStatistics",
    "can_access_template",
    "clone_template",
    "create_default_field",
    "create_template",
    "delete_template",
    "get_department_usage",
    "get_template",
    "get_template_statistics",
    "list_available_departments",
    "list_template_categories",
    "list_templates",
    "list_templates_for_user",
    "record_template_usage",
    "update_template",
    "update_template_department_access",
    "validate_field",
    "validate_template",
]

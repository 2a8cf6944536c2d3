"""Aggregate application use cases."""

from .templates import (
    clone_template,
    create_template,
    delete_template,
    get_template,
    list_templates,
    update_template,
)

__all__ = [
    "clone_template",
    "create_template",
    "delete_template",
    "get_template",
    "list_templates",
    "update_template",
]

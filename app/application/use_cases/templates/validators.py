"""Validation helpers for report templates and their fields."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from app.domain.entities import (
    COLUMN_SPANS,
    FIELD_TYPES,
    ROLES,
    TEMPLATE_STATUSES,
    TEMPLATE_STATUS_ACTIVE,
    TEMPLATE_STATUS_ARCHIVED,
    TEMPLATE_STATUS_DEPRECATED,
    TEMPLATE_STATUS_DRAFT,
    VISIBILITIES,
    DropdownField,
    FileField,
    NumberField,
    TemplateField,
    TextareaField,
    TextField,
)
from app.domain.exceptions import ValidationError

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MIN_FILE_SIZE_BYTES = 1024

FIELDS_REQUIRED_MESSAGE = "at least one field required"
DUPLICATE_LABELS_MESSAGE = "field labels must be unique"
DUPLICATE_IDS_MESSAGE = "field ids must be unique"

_STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    TEMPLATE_STATUS_DRAFT: frozenset({TEMPLATE_STATUS_ACTIVE, TEMPLATE_STATUS_ARCHIVED}),
    TEMPLATE_STATUS_ACTIVE: frozenset({TEMPLATE_STATUS_DRAFT, TEMPLATE_STATUS_ARCHIVED}),
    TEMPLATE_STATUS_ARCHIVED: frozenset(),
    TEMPLATE_STATUS_DEPRECATED: frozenset(),
}


@dataclass(frozen=True)
class FieldValidationResult:
    """Outcome of validating a single field definition."""

    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class TemplateValidationResult:
    """Outcome of validating a template together with its fields."""

    template_errors: dict[str, str] = field(default_factory=dict)
    field_errors: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.template_errors and not self.field_errors


def _check_dropdown(field: DropdownField) -> list[str]:
    if not field.options:
        return ["Dropdown fields must have at least one option"]

    errors: list[str] = []
    cleaned = [option.strip() for option in field.options if option and option.strip()]
    if len(cleaned) != len(field.options):
        errors.append("Dropdown options cannot be empty")
    if len({option.lower() for option in cleaned}) != len(cleaned):
        errors.append("Dropdown options must be unique")
    return errors


def _check_file(field: FileField) -> list[str]:
    errors: list[str] = []
    if field.max_files is not None and field.max_files < 1:
        errors.append("Maximum files must be at least 1")
    if field.max_file_size is not None and field.max_file_size < MIN_FILE_SIZE_BYTES:
        errors.append("Maximum file size must be at least 1KB")
    return errors


def _check_number(field: NumberField) -> list[str]:
    limits = field.validation
    if limits is None or limits.min is None or limits.max is None:
        return []
    if limits.min >= limits.max:
        return ["max must exceed min"]
    return []


def _check_text(field: TextField | TextareaField) -> list[str]:
    limits = field.validation
    if limits is None or limits.min_length is None or limits.max_length is None:
        return []
    if limits.min_length >= limits.max_length:
        return ["maxLength must exceed minLength"]
    return []


_TYPE_CHECKS: tuple[tuple[type[TemplateField], Callable[[Any], list[str]]], ...] = (
    (DropdownField, _check_dropdown),
    (FileField, _check_file),
    (NumberField, _check_number),
    (TextField, _check_text),
    (TextareaField, _check_text),
)


def validate_field(field: TemplateField) -> FieldValidationResult:
    """Validate a single field definition, reporting every violated rule."""

    errors: list[str] = []

    if not (field.id or "").strip():
        errors.append("Field id is required")

    if not (field.label or "").strip():
        errors.append("Field label is required")

    if not field.type:
        errors.append("Field type is required")
    elif field.type not in FIELD_TYPES:
        errors.append(f"Unsupported field type '{field.type}'")

    if field.column_span not in COLUMN_SPANS:
        errors.append("Column span must be 1, 2 or 3")

    for field_class, check in _TYPE_CHECKS:
        if isinstance(field, field_class):
            errors.extend(check(field))

    return FieldValidationResult(errors=tuple(errors))


def validate_template(
    template: Mapping[str, Any],
    fields: Sequence[TemplateField],
    *,
    require_fields: bool = True,
) -> TemplateValidationResult:
    """Validate the template metadata and every field it contains.

    ``template`` needs the ``name`` and ``description`` keys; ``visibility``
    and ``allowed_roles`` are checked when present. Drafts pass
    ``require_fields=False`` so an empty field list is accepted while the
    template is being authored.
    """

    template_errors: dict[str, str] = {}
    field_errors: dict[str, tuple[str, ...]] = {}

    name = template.get("name")
    if not name or not str(name).strip():
        template_errors["name"] = "Template name is required"
    elif len(name) > MAX_NAME_LENGTH:
        template_errors["name"] = (
            f"Template name must be {MAX_NAME_LENGTH} characters or less"
        )

    description = template.get("description")
    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        template_errors["description"] = (
            f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less"
        )

    if "visibility" in template and template["visibility"] not in VISIBILITIES:
        template_errors["visibility"] = (
            f"Unsupported visibility '{template['visibility']}'"
        )

    unknown_roles = sorted(
        {str(role) for role in template.get("allowed_roles") or () if role not in ROLES}
    )
    if unknown_roles:
        template_errors["allowed_roles"] = (
            f"Unsupported roles: {', '.join(unknown_roles)}"
        )

    if require_fields and not fields:
        template_errors["fields"] = FIELDS_REQUIRED_MESSAGE

    labels = [
        (item.label or "").strip().lower() for item in fields if (item.label or "").strip()
    ]
    if len(set(labels)) != len(labels):
        template_errors["fields"] = DUPLICATE_LABELS_MESSAGE

    ids = [item.id for item in fields]
    if len(set(ids)) != len(ids):
        template_errors["fields"] = DUPLICATE_IDS_MESSAGE

    for item in fields:
        result = validate_field(item)
        if not result.is_valid:
            field_errors[item.id] = field_errors.get(item.id, ()) + result.errors

    return TemplateValidationResult(
        template_errors=template_errors, field_errors=field_errors
    )


def ensure_valid_template(
    template: Mapping[str, Any],
    fields: Sequence[TemplateField],
    *,
    require_fields: bool = True,
) -> None:
    """Raise :class:`ValidationError` when the template is not valid."""

    result = validate_template(template, fields, require_fields=require_fields)
    if not result.is_valid:
        raise ValidationError(result.template_errors, result.field_errors)


def ensure_status_transition(current: str, requested: str) -> None:
    """Raise :class:`ValidationError` when ``current -> requested`` is not allowed.

    ``deprecated`` can be reached from any state; ``archived`` and
    ``deprecated`` have no way out.
    """

    if requested not in TEMPLATE_STATUSES:
        raise ValidationError({"status": f"Unsupported template status '{requested}'"})
    if requested == current or requested == TEMPLATE_STATUS_DEPRECATED:
        return
    if requested not in _STATUS_TRANSITIONS.get(current, frozenset()):
        raise ValidationError(
            {"status": f"Cannot change template status from '{current}' to '{requested}'"}
        )


__all__ = [
    "DUPLICATE_IDS_MESSAGE",
    "DUPLICATE_LABELS_MESSAGE",
    "FIELDS_REQUIRED_MESSAGE",
    "FieldValidationResult",
    "TemplateValidationResult",
    "ensure_status_transition",
    "ensure_valid_template",
    "validate_field",
    "validate_template",
]

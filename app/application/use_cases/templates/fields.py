"""Factories for new field drafts."""

from __future__ import annotations

import uuid
from collections.abc import Callable

from app.domain.entities import (
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
    NumberField,
    RangeConstraints,
    TemplateField,
    TextareaField,
    TextField,
)
from app.domain.exceptions import ValidationError

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


def new_field_id() -> str:
    """Return a fresh ``field_<12 hex>`` identifier."""

    return f"field_{uuid.uuid4().hex[:12]}"


_DEFAULT_FIELD_FACTORIES: dict[str, Callable[[str, int], TemplateField]] = {
    FIELD_TYPE_TEXT: lambda field_id, order: TextField(
        id=field_id, label="Text Field", order=order, placeholder="Enter text..."
    ),
    FIELD_TYPE_TEXTAREA: lambda field_id, order: TextareaField(
        id=field_id,
        label="Long Text Field",
        order=order,
        column_span=2,
        placeholder="Enter detailed text...",
    ),
    FIELD_TYPE_NUMBER: lambda field_id, order: NumberField(
        id=field_id, label="Number Field", order=order, validation=RangeConstraints(min=0)
    ),
    FIELD_TYPE_DATE: lambda field_id, order: DateField(id=field_id, label="Date Field", order=order),
    FIELD_TYPE_DROPDOWN: lambda field_id, order: DropdownField(
        id=field_id, label="Dropdown Field", order=order, options=("Option 1", "Option 2")
    ),
    FIELD_TYPE_CHECKBOX: lambda field_id, order: CheckboxField(
        id=field_id, label="Checkbox Field", order=order
    ),
    FIELD_TYPE_FILE: lambda field_id, order: FileField(
        id=field_id,
        label="File Upload",
        order=order,
        accepted_file_types=("pdf", "doc", "docx"),
        max_files=1,
        max_file_size=DEFAULT_MAX_FILE_SIZE,
    ),
}


def create_default_field(field_type: str, *, order: int = 0) -> TemplateField:
    """Return a field draft of ``field_type`` pre-filled with sensible defaults."""

    factory = _DEFAULT_FIELD_FACTORIES.get(field_type)
    if factory is None:
        raise ValidationError({"type": f"Unsupported field type '{field_type}'"})
    return factory(new_field_id(), order)


__all__ = ["DEFAULT_MAX_FILE_SIZE", "create_default_field", "new_field_id"]

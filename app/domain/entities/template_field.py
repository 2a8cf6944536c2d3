"""Domain entities describing the fields of a report template.

Each supported field type is its own dataclass carrying only the attributes
that make sense for it. ``TemplateField`` itself is used for drafts whose type
is missing or not recognised so that validation can report them instead of
failing while the payload is parsed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

FIELD_TYPE_TEXT = "text"
FIELD_TYPE_TEXTAREA = "textarea"
FIELD_TYPE_NUMBER = "number"
FIELD_TYPE_DATE = "date"
FIELD_TYPE_DROPDOWN = "dropdown"
FIELD_TYPE_CHECKBOX = "checkbox"
FIELD_TYPE_FILE = "file"

FIELD_TYPES: tuple[str, ...] = (
    FIELD_TYPE_TEXT,
    FIELD_TYPE_TEXTAREA,
    FIELD_TYPE_NUMBER,
    FIELD_TYPE_DATE,
    FIELD_TYPE_DROPDOWN,
    FIELD_TYPE_CHECKBOX,
    FIELD_TYPE_FILE,
)

COLUMN_SPANS: tuple[int, ...] = (1, 2, 3)


@dataclass(frozen=True)
class LengthConstraints:
    """Length limits applied to ``text`` and ``textarea`` answers."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    custom_message: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "min_length": self.min_length,
            "max_length": self.max_length,
            "pattern": self.pattern,
            "custom_message": self.custom_message,
        }


@dataclass(frozen=True)
class RangeConstraints:
    """Value limits applied to ``number`` answers."""

    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    custom_message: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "pattern": self.pattern,
            "custom_message": self.custom_message,
        }


@dataclass(frozen=True)
class TemplateField:
    """Attributes shared by every field definition."""

    id: str
    label: str
    type: str | None = None
    required: bool = False
    order: int = 0
    column_span: int = 1
    placeholder: str | None = None
    help_text: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-friendly representation of the field."""

        payload: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "required": self.required,
            "order": self.order,
            "column_span": self.column_span,
            "placeholder": self.placeholder,
            "help_text": self.help_text,
        }
        payload.update(self._type_payload())
        return payload

    def _type_payload(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class TextField(TemplateField):
    type: str = field(default=FIELD_TYPE_TEXT, init=False)
    validation: LengthConstraints | None = None

    def _type_payload(self) -> dict[str, Any]:
        return {"validation": self.validation.to_payload() if self.validation else None}


@dataclass(frozen=True)
class TextareaField(TemplateField):
    type: str = field(default=FIELD_TYPE_TEXTAREA, init=False)
    validation: LengthConstraints | None = None

    def _type_payload(self) -> dict[str, Any]:
        return {"validation": self.validation.to_payload() if self.validation else None}


@dataclass(frozen=True)
class NumberField(TemplateField):
    type: str = field(default=FIELD_TYPE_NUMBER, init=False)
    validation: RangeConstraints | None = None

    def _type_payload(self) -> dict[str, Any]:
        return {"validation": self.validation.to_payload() if self.validation else None}


@dataclass(frozen=True)
class DateField(TemplateField):
    type: str = field(default=FIELD_TYPE_DATE, init=False)


@dataclass(frozen=True)
class DropdownField(TemplateField):
    type: str = field(default=FIELD_TYPE_DROPDOWN, init=False)
    options: tuple[str, ...] = ()
    allow_multiple: bool = False

    def _type_payload(self) -> dict[str, Any]:
        return {"options": list(self.options), "allow_multiple": self.allow_multiple}


@dataclass(frozen=True)
class CheckboxField(TemplateField):
    type: str = field(default=FIELD_TYPE_CHECKBOX, init=False)


@dataclass(frozen=True)
class FileField(TemplateField):
    type: str = field(default=FIELD_TYPE_FILE, init=False)
    accepted_file_types: tuple[str, ...] = ()
    max_files: int | None = None
    max_file_size: int | None = None

    def _type_payload(self) -> dict[str, Any]:
        return {
            "accepted_file_types": list(self.accepted_file_types),
            "max_files": self.max_files,
            "max_file_size": self.max_file_size,
        }


_FIELD_CLASSES: dict[str, type[TemplateField]] = {
    FIELD_TYPE_TEXT: TextField,
    FIELD_TYPE_TEXTAREA: TextareaField,
    FIELD_TYPE_NUMBER: NumberField,
    FIELD_TYPE_DATE: DateField,
    FIELD_TYPE_DROPDOWN: DropdownField,
    FIELD_TYPE_CHECKBOX: CheckboxField,
    FIELD_TYPE_FILE: FileField,
}


def template_field_from_payload(payload: Mapping[str, Any]) -> TemplateField:
    """Build the field variant matching ``payload["type"]``.

    Unknown or missing types produce a plain :class:`TemplateField` that keeps
    the raw type value so validators can report it.
    """

    raw_type = payload.get("type")
    common: dict[str, Any] = {
        "id": str(payload.get("id") or ""),
        "label": payload.get("label") or "",
        "required": bool(payload.get("required", False)),
        "order": int(payload.get("order") or 0),
        "column_span": int(payload.get("column_span") or 1),
        "placeholder": payload.get("placeholder"),
        "help_text": payload.get("help_text"),
    }

    field_class = _FIELD_CLASSES.get(raw_type) if isinstance(raw_type, str) else None
    if field_class is None:
        return TemplateField(type=raw_type, **common)

    validation = payload.get("validation") or None
    if field_class in (TextField, TextareaField):
        return field_class(
            validation=_length_constraints(validation),
            **common,
        )
    if field_class is NumberField:
        return NumberField(validation=_range_constraints(validation), **common)
    if field_class is DropdownField:
        return DropdownField(
            options=tuple(payload.get("options") or ()),
            allow_multiple=bool(payload.get("allow_multiple", False)),
            **common,
        )
    if field_class is FileField:
        return FileField(
            accepted_file_types=tuple(payload.get("accepted_file_types") or ()),
            max_files=payload.get("max_files"),
            max_file_size=payload.get("max_file_size"),
            **common,
        )
    return field_class(**common)


def _length_constraints(value: Mapping[str, Any] | None) -> LengthConstraints | None:
    if not value:
        return None
    return LengthConstraints(
        min_length=value.get("min_length"),
        max_length=value.get("max_length"),
        pattern=value.get("pattern"),
        custom_message=value.get("custom_message"),
    )


def _range_constraints(value: Mapping[str, Any] | None) -> RangeConstraints | None:
    if not value:
        return None
    return RangeConstraints(
        min=value.get("min"),
        max=value.get("max"),
        pattern=value.get("pattern"),
        custom_message=value.get("custom_message"),
    )


__all__ = [
    "COLUMN_SPANS",
    "FIELD_TYPES",
    "FIELD_TYPE_CHECKBOX",
    "FIELD_TYPE_DATE",
    "FIELD_TYPE_DROPDOWN",
    "FIELD_TYPE_FILE",
    "FIELD_TYPE_NUMBER",
    "FIELD_TYPE_TEXT",
    "FIELD_TYPE_TEXTAREA",
    "CheckboxField",
    "DateField",
    "DropdownField",
    "FileField",
    "LengthConstraints",
    "NumberField",
    "RangeConstraints",
    "TemplateField",
    "TextField",
    "TextareaField",
    "template_field_from_payload",
]

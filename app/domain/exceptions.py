"""Errors raised by the report template use cases."""

from __future__ import annotations

from collections.abc import Mapping, Sequence


class TemplateError(Exception):
    """Base class for report template failures."""


class ValidationError(TemplateError, ValueError):
    """Template or field data violates the template rules.

    Carries every violation found so callers can render them all at once.
    """

    def __init__(
        self,
        template_errors: Mapping[str, str] | None = None,
        field_errors: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.template_errors: dict[str, str] = dict(template_errors or {})
        self.field_errors: dict[str, list[str]] = {
            field_id: list(errors) for field_id, errors in (field_errors or {}).items()
        }
        super().__init__(self._build_message())

    def to_dict(self) -> dict[str, object]:
        return {
            "template_errors": dict(self.template_errors),
            "field_errors": {key: list(value) for key, value in self.field_errors.items()},
        }

    def _build_message(self) -> str:
        parts = [f"{key}: {value}" for key, value in self.template_errors.items()]
        parts.extend(
            f"field {field_id}: {'; '.join(errors)}"
            for field_id, errors in self.field_errors.items()
        )
        return "Template validation failed" + (f" ({', '.join(parts)})" if parts else "")


class NotFoundError(TemplateError, LookupError):
    """The referenced template does not exist in the workspace."""

    def __init__(self, workspace_id: str, template_id: int | str) -> None:
        self.workspace_id = workspace_id
        self.template_id = template_id
        super().__init__(
            f"Template {template_id} not found in workspace {workspace_id}"
        )


class PersistenceError(TemplateError):
    """The storage layer failed while running an operation."""

    def __init__(self, operation: str, template_id: int | str | None = None) -> None:
        self.operation = operation
        self.template_id = template_id
        target = f" for template {template_id}" if template_id is not None else ""
        super().__init__(f"Storage failure during '{operation}'{target}")


__all__ = ["NotFoundError", "PersistenceError", "TemplateError", "ValidationError"]

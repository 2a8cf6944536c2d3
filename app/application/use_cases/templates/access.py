"""Department based access resolution for report templates.

Access is decided by an ordered list of rules. Each rule either decides
(``True``/``False``) or defers to the next one by returning ``None``; the first
decision wins and a template nobody decides on is denied.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from app.domain.entities import (
    ACCESS_TYPE_CUSTOM,
    ACCESS_TYPE_DEPARTMENT_SPECIFIC,
    ACCESS_TYPE_GLOBAL,
    ACCESS_TYPE_MULTI_DEPARTMENT,
    ROLE_ADMIN,
    ROLE_OWNER,
    VISIBILITY_PUBLIC,
    DepartmentAccess,
    ReportTemplate,
)

AccessDecision = bool | None


class AccessRule(ABC):
    """Strategy deciding, or deferring, whether a user may use a template."""

    @abstractmethod
    def decide(
        self,
        template: ReportTemplate,
        user_department: str | None,
        user_role: str,
    ) -> AccessDecision:
        raise NotImplementedError


class AdministrativeRoleRule(AccessRule):
    """Owners and admins may use every template."""

    def decide(self, template, user_department, user_role) -> AccessDecision:
        if user_role in (ROLE_OWNER, ROLE_ADMIN):
            return True
        return None


class LegacyAllowedDepartmentsRule(AccessRule):
    """Templates without department access fall back to ``allowed_departments``."""

    def decide(self, template, user_department, user_role) -> AccessDecision:
        if template.department_access is not None or not template.allowed_departments:
            return None
        return bool(user_department) and user_department in template.allowed_departments


class LegacyVisibilityRule(AccessRule):
    """Templates without any department configuration follow their visibility."""

    def decide(self, template, user_department, user_role) -> AccessDecision:
        if template.department_access is not None:
            return None
        return template.visibility == VISIBILITY_PUBLIC


def _allow_global(access: DepartmentAccess, user_department: str | None) -> bool:
    return True


def _allow_department_specific(
    access: DepartmentAccess, user_department: str | None
) -> bool:
    return bool(user_department) and user_department == access.owner_department


def _allow_multi_department(access: DepartmentAccess, user_department: str | None) -> bool:
    if not user_department or not access.allowed_departments:
        return False
    return user_department in access.allowed_departments


def _allow_custom(access: DepartmentAccess, user_department: str | None) -> bool:
    # The deny list is checked before the allow list.
    if user_department and user_department in (access.restricted_departments or ()):
        return False
    if access.allowed_departments:
        return bool(user_department) and user_department in access.allowed_departments
    return True


_ACCESS_TYPE_HANDLERS: dict[str, Callable[[DepartmentAccess, str | None], bool]] = {
    ACCESS_TYPE_GLOBAL: _allow_global,
    ACCESS_TYPE_DEPARTMENT_SPECIFIC: _allow_department_specific,
    ACCESS_TYPE_MULTI_DEPARTMENT: _allow_multi_department,
    ACCESS_TYPE_CUSTOM: _allow_custom,
}


class DepartmentAccessRule(AccessRule):
    """Dispatch on ``department_access.type``; unknown types are denied."""

    def decide(self, template, user_department, user_role) -> AccessDecision:
        access = template.department_access
        if access is None:
            return None
        handler = _ACCESS_TYPE_HANDLERS.get(access.type)
        if handler is None:
            return False
        return handler(access, user_department)


DEFAULT_ACCESS_RULES: tuple[AccessRule, ...] = (
    AdministrativeRoleRule(),
    LegacyAllowedDepartmentsRule(),
    LegacyVisibilityRule(),
    DepartmentAccessRule(),
)


def can_access_template(
    template: ReportTemplate,
    user_department: str | None,
    user_role: str,
    *,
    rules: Sequence[AccessRule] = DEFAULT_ACCESS_RULES,
) -> bool:
    """Return ``True`` when a user of ``user_role`` in ``user_department`` may use ``template``."""

    for rule in rules:
        decision = rule.decide(template, user_department, user_role)
        if decision is not None:
            return decision
    return False


__all__ = [
    "AccessRule",
    "AdministrativeRoleRule",
    "DEFAULT_ACCESS_RULES",
    "DepartmentAccessRule",
    "LegacyAllowedDepartmentsRule",
    "LegacyVisibilityRule",
    "can_access_template",
]

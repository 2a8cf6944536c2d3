"""Usage accounting for report templates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities import REPORT_STATUSES
from app.domain.exceptions import ValidationError


@dataclass(frozen=True)
class UsageIncrement:
    """Counters to bump for one report lifecycle transition.

    Every increment bumps ``total_reports`` as well as the ``status`` bucket,
    so the total counts transitions rather than distinct reports.
    """

    status: str
    department: str | None
    used_at: datetime


def plan_usage_increment(
    status: str, department: str | None, *, used_at: datetime
) -> UsageIncrement:
    """Validate ``status`` and normalize ``department`` for a usage increment."""

    if status not in REPORT_STATUSES:
        raise ValidationError({"status": f"Unsupported report status '{status}'"})
    normalized_department = (department or "").strip() or None
    return UsageIncrement(
        status=status, department=normalized_department, used_at=used_at
    )


__all__ = ["UsageIncrement", "plan_usage_increment"]

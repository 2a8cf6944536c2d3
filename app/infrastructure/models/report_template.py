"""SQLAlchemy model for report templates."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class ReportTemplateModel(Base):
    """Database representation of a report template definition."""

    __tablename__ = "report_template"

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    category = Column(String(100), nullable=True, index=True)
    department = Column(String(100), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    fields = Column(JSON, nullable=False, default=list)
    visibility = Column(String(20), nullable=False, default="public")
    allowed_roles = Column(JSON, nullable=False, default=list)
    allowed_departments = Column(JSON, nullable=False, default=list)
    department_access = Column(JSON, nullable=True)
    settings = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="active", index=True)
    version = Column(Integer, nullable=False, default=1)

    usage_total_reports = Column(Integer, nullable=False, default=0)
    usage_drafts = Column(Integer, nullable=False, default=0)
    usage_submitted = Column(Integer, nullable=False, default=0)
    usage_approved = Column(Integer, nullable=False, default=0)
    usage_rejected = Column(Integer, nullable=False, default=0)
    usage_last_used = Column(DateTime(timezone=True), nullable=True)

    created_by = Column(String(64), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_by = Column(String(64), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    last_used_at = Column(DateTime(timezone=True), nullable=True)

    change_log = relationship(
        "TemplateChangeLogModel",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TemplateChangeLogModel.version",
    )
    department_usage = relationship(
        "TemplateDepartmentUsageModel",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TemplateDepartmentUsageModel.department",
    )


__all__ = ["ReportTemplateModel"]

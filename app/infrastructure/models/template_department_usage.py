"""SQLAlchemy model for per-department template usage counters."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class TemplateDepartmentUsageModel(Base):
    """Usage counters of a template for one department."""

    __tablename__ = "template_department_usage"
    __table_args__ = (
        UniqueConstraint(
            "template_id", "department", name="uq_template_department_usage"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer,
        ForeignKey("report_template.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    department = Column(String(100), nullable=False)
    total_reports = Column(Integer, nullable=False, default=0)
    last_used = Column(DateTime(timezone=True), nullable=True)

    template = relationship("ReportTemplateModel", back_populates="department_usage")


__all__ = ["TemplateDepartmentUsageModel"]

"""SQLAlchemy model for the append-only template change log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class TemplateChangeLogModel(Base):
    """One row per version bump of a report template."""

    __tablename__ = "template_change_log"
    __table_args__ = (
        UniqueConstraint("template_id", "version", name="uq_template_change_log_version"),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer,
        ForeignKey("report_template.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    version = Column(Integer, nullable=False)
    changes = Column(String(1000), nullable=False)
    changed_by = Column(String(64), nullable=False)
    changed_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )

    template = relationship("ReportTemplateModel", back_populates="change_log")


__all__ = ["TemplateChangeLogModel"]

"""SQLAlchemy model for the departments known in a workspace."""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from app.infrastructure.database import Base


class WorkspaceDepartmentModel(Base):
    """Department registered in a workspace directory."""

    __tablename__ = "workspace_department"
    __table_args__ = (
        UniqueConstraint("workspace_id", "name", name="uq_workspace_department_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    workspace_id = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)


__all__ = ["WorkspaceDepartmentModel"]

"""Persistence layer for the workspace department directory."""

from sqlalchemy.orm import Session

from app.infrastructure.models import WorkspaceDepartmentModel


class DepartmentRepository:
    """Read and register the departments known in a workspace."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_names(self, workspace_id: str) -> set[str]:
        rows = (
            self.session.query(WorkspaceDepartmentModel.name)
            .filter(WorkspaceDepartmentModel.workspace_id == workspace_id)
            .all()
        )
        return {name for (name,) in rows}

    def add(self, workspace_id: str, name: str) -> None:
        existing = (
            self.session.query(WorkspaceDepartmentModel.id)
            .filter(WorkspaceDepartmentModel.workspace_id == workspace_id)
            .filter(WorkspaceDepartmentModel.name == name)
            .first()
        )
        if existing is not None:
            return
        self.session.add(WorkspaceDepartmentModel(workspace_id=workspace_id, name=name))
        self.session.commit()


__all__ = ["DepartmentRepository"]

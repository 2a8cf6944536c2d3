"""Workspace department directory use cases."""

from .register_department import register_department

__all__ = ["register_department"]

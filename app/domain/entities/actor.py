"""Domain entity representing the user performing a request."""

from dataclasses import dataclass

ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"

ROLES: tuple[str, ...] = (ROLE_OWNER, ROLE_ADMIN, ROLE_MEMBER)


@dataclass(frozen=True)
class Actor:
    """Identity, workspace role and department of the caller."""

    id: str
    role: str = ROLE_MEMBER
    department: str | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the actor administers the workspace."""

        return self.role in (ROLE_OWNER, ROLE_ADMIN)


__all__ = ["Actor", "ROLES", "ROLE_ADMIN", "ROLE_MEMBER", "ROLE_OWNER"]

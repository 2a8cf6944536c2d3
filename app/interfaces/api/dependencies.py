"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, status

from app.domain.entities import ROLES, ROLE_MEMBER, Actor


def get_current_actor(
    x_user_id: str = Header(...),
    x_user_role: str = Header(ROLE_MEMBER),
    x_user_department: str | None = Header(None),
) -> Actor:
    """Return the caller identity forwarded by the gateway headers."""

    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )

    role = x_user_role.strip().lower()
    if role not in ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported workspace role '{x_user_role}'",
        )

    department = (x_user_department or "").strip() or None
    return Actor(id=user_id, role=role, department=department)


def require_admin(current_actor: Actor = Depends(get_current_actor)) -> Actor:
    """Ensure the caller owns or administers the workspace."""

    if not current_actor.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_actor

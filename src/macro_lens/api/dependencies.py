"""Request identity supplied by the upstream auth proxy."""

from dataclasses import dataclass

from fastapi import Header, HTTPException, status


@dataclass(frozen=True)
class Identity:
    """Signed-in user making the request."""

    user_id: str
    email: str | None


async def require_user(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Identity:
    """Ensure requests carry an authenticated user id."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Please sign in"
        )
    return Identity(user_id=x_user_id.strip(), email=x_user_email or None)

"""Identity headers forwarded by the auth gateway in front of the app."""

from fastapi import Header, HTTPException


async def require_admin(x_admin_email: str | None = Header(default=None)) -> str:
    """Email of the back-office operator making the request; 403 when absent."""
    if not x_admin_email:
        raise HTTPException(status_code=403, detail="Admin access required")
    return x_admin_email

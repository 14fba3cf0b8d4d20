"""Bearer-token authentication — resolves a request to a stable user id."""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def resolve_user_id(token: str, tokens: dict[str, str]) -> str | None:
    """Look up the user id for ``token``; None when the token is unknown."""
    for known, user_id in tokens.items():
        if secrets.compare_digest(known, token):
            return user_id or None
    return None


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> str:
    """Dependency that requires a valid bearer token.

    Raises:
        HTTPException 401: If no token is sent or it maps to no user.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = resolve_user_id(credentials.credentials, settings.auth_tokens)
    if user_id is None:
        logger.info("Rejected request with unknown bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id

"""
Authentication dependencies for FastAPI
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Dict, Optional
import uuid
import structlog

from bistro.core.auth import decode_access_token
from bistro.core.exceptions import ForbiddenError, UnauthorizedError
from bistro.models.user import UserRole

logger = structlog.get_logger(__name__)
security = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Dict:
    """Validate the bearer token and return its claims"""
    if credentials is None:
        raise UnauthorizedError("Token is required")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Invalid token")

    return payload


async def get_current_user_id(payload: Dict = Depends(get_token_payload)) -> uuid.UUID:
    """Get current user ID from JWT token"""
    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        raise UnauthorizedError("Invalid token")

    logger.debug("User authenticated", user_id=str(user_id))
    return user_id


async def require_admin(
    payload: Dict = Depends(get_token_payload),
    user_id: uuid.UUID = Depends(get_current_user_id),
) -> uuid.UUID:
    """Only let admin tokens through"""
    if payload.get("role") != UserRole.ADMIN.value:
        raise ForbiddenError()
    return user_id

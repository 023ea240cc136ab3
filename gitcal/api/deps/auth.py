"""Session token validation dependencies.

The bearer token is a session JWT issued by `POST /auth/exchange-token`.
Protected endpoints receive the GitHub access token it wraps.
"""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gitcal.core.database import get_db
from gitcal.core.exceptions import AuthenticationError
from gitcal.core.security import GITHUB_TOKEN_CLAIM, decode_session_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_github_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    Validate the session JWT and return the GitHub token it carries.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if not credentials:
        raise AuthenticationError("Not authenticated")

    try:
        payload = decode_session_token(credentials.credentials)
    except ValueError as e:
        logger.info(f"Rejected session token: {e}")
        raise AuthenticationError() from None

    return payload[GITHUB_TOKEN_CLAIM]


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
GitHubToken = Annotated[str, Depends(get_github_token)]

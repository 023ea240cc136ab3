"""Security utilities for session token issuance and validation.

Session tokens are HS256 JWTs signed with `settings.jwt_secret`. They carry
the caller's GitHub access token in the `githubToken` claim so that GitHub
calls can be made on the caller's behalf without server-side session state.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from gitcal.config import settings

SESSION_SUBJECT = "github-user"
GITHUB_TOKEN_CLAIM = "githubToken"


def create_session_token(github_token: str, expires_minutes: int | None = None) -> str:
    """Sign a session token wrapping a GitHub access token."""
    now = datetime.now(UTC)
    lifetime = timedelta(minutes=expires_minutes or settings.jwt_expires_minutes)
    claims: dict[str, Any] = {
        "sub": SESSION_SUBJECT,
        GITHUB_TOKEN_CLAIM: github_token,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> dict[str, Any]:
    """Verify a session token and return its claims.

    Raises:
        ValueError: If the signature, expiry, or GitHub token claim is invalid
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise ValueError(f"Invalid session token: {e}") from e

    if not payload.get(GITHUB_TOKEN_CLAIM):
        raise ValueError("Session token does not carry a GitHub access token")
    return payload

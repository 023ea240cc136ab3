"""
Session token issuance.

The UI signs in with GitHub and exchanges the GitHub access token for a
session JWT, which it then sends as the bearer token on GitHub-backed endpoints.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gitcal.core.exceptions import AuthenticationError
from gitcal.core.security import create_session_token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


class ExchangeTokenRequest(BaseModel):
    token: str = ""


class ExchangeTokenResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str


@router.post("/exchange-token", response_model=ExchangeTokenResponse)
async def exchange_token(data: ExchangeTokenRequest) -> ExchangeTokenResponse:
    """Wrap a GitHub access token in a signed session token."""
    if not data.token.strip():
        raise AuthenticationError("No token provided")

    return ExchangeTokenResponse(access_token=create_session_token(data.token.strip()))

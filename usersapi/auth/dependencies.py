"""FastAPI dependencies for authentication."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from usersapi.auth.credentials import CredentialValidator
from usersapi.auth.jwt import TokenClaims, TokenService
from usersapi.errors import MissingCredentialsError

# HTTP Bearer token security scheme; errors are raised by get_current_claims
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_credential_validator(request: Request) -> CredentialValidator:
    return request.app.state.credential_validator


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Get the claims of the bearer token on the current request.

    Raises:
        MissingCredentialsError: If there is no `Authorization: Bearer` header
        InvalidTokenError: If the token is forged, malformed or expired
    """
    if not credentials or not credentials.credentials:
        raise MissingCredentialsError()
    return token_service.verify(credentials.credentials)

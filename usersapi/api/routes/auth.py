"""Authentication endpoints: login and register."""

from fastapi import APIRouter, Depends, status

from usersapi.api.auth_models import AuthBody, LoginInput
from usersapi.auth.credentials import CredentialValidator
from usersapi.auth.dependencies import get_credential_validator, get_token_service
from usersapi.auth.jwt import TokenService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthBody)
def login(
    payload: LoginInput,
    validator: CredentialValidator = Depends(get_credential_validator),
    token_service: TokenService = Depends(get_token_service),
):
    """Exchange a login for a bearer access token."""
    subject = validator.authenticate(payload.email, payload.password)
    return AuthBody(access_token=token_service.issue(subject))


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: LoginInput):
    """Echo the submitted registration (nothing is stored)."""
    return {"email": payload.email, "password": payload.password}

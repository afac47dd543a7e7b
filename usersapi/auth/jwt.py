"""JWT token generation and validation for usersapi."""

import time
from typing import Callable

import jwt
from pydantic import BaseModel, Field

from usersapi.errors import InvalidTokenError, TokenCreationError

BEARER = "bearer"


class TokenClaims(BaseModel):
    """Claims carried by an access token."""

    subject: str = Field(..., description="Authenticated identity (email/username)")
    issued_at: int = Field(..., description="Issue time, Unix seconds")
    expires_at: int = Field(..., description="Expiry time, Unix seconds")


class TokenService:
    """Issues and verifies signed, time-bound access tokens.

    The signing key is passed in at construction; the service never looks at
    the environment.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiration_hours: int = 24,
        clock: Callable[[], float] = time.time,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiration_seconds = expiration_hours * 3600
        self.clock = clock

    def issue(self, subject: str) -> str:
        """Create a signed access token for a subject.

        Args:
            subject: Identity to encode in the token

        Returns:
            Encoded JWT token string

        Raises:
            TokenCreationError: If the token cannot be signed (bad key or algorithm)
        """
        issued_at = int(self.clock())
        payload = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.expiration_seconds,
        }
        try:
            return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            raise TokenCreationError() from e

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate an access token.

        Args:
            token: JWT token string

        Returns:
            TokenClaims of a token whose signature verifies and that has not expired

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                # Expiry is checked against self.clock below.
                options={"require": ["sub", "iat", "exp"], "verify_exp": False},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e

        if not isinstance(payload["exp"], int) or self.clock() > payload["exp"]:
            raise InvalidTokenError("Token expired")

        return TokenClaims(
            subject=payload["sub"],
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )

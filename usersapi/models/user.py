"""User data models for usersapi."""

from typing import Optional
from pydantic import BaseModel, Field

# Largest values the users table columns can hold (BIGINT id, INTEGER age)
MAX_USER_ID = 2**63 - 1
MAX_AGE = 2**31 - 1

# Columns an update may explicitly set to null
NULLABLE_FIELDS = frozenset({"email", "age"})


class User(BaseModel):
    """Persisted user record."""

    id: int = Field(..., description="Server-assigned user identifier")
    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    email: Optional[str] = Field(None, description="Contact email address")
    gender: str = Field(..., description="Gender")
    age: Optional[int] = Field(None, description="Age in years")


class CreateUser(BaseModel):
    """Request body for creating a user."""

    first_name: str
    last_name: str
    email: Optional[str] = None
    gender: str
    age: Optional[int] = Field(None, ge=0, le=MAX_AGE)


class UpdateUser(BaseModel):
    """Request body for a partial user update.

    Only fields present in the request body are applied.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=MAX_AGE)

    def supplied_fields(self) -> dict:
        """Fields explicitly present in the payload.

        Explicit nulls are kept for nullable columns (email, age) and dropped
        for required ones.
        """
        fields = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in fields.items()
            if value is not None or name in NULLABLE_FIELDS
        }

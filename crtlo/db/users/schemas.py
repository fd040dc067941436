"""Pydantic schemas for user records."""

from datetime import datetime
from typing import Any

from pydantic import Field

from crtlo.schemas import CamelModel


class UserUpsert(CamelModel):
    """Profile fields written on every login."""

    id: str = Field(..., description="OIDC subject")
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "UserUpsert":
        """Map ID-token claims onto profile fields, accepting both claim spellings."""
        return cls(
            id=claims["sub"],
            email=claims.get("email"),
            first_name=claims.get("given_name") or claims.get("first_name"),
            last_name=claims.get("family_name") or claims.get("last_name"),
            profile_image_url=claims.get("picture") or claims.get("profile_image_url"),
        )


class UserResponse(UserUpsert):
    created_at: datetime | None = None
    updated_at: datetime | None = None

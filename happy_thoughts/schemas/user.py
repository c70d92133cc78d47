"""
Happy Thoughts API - User Schemas
===================================

What:  Request bodies for sign-up/sign-in and the payloads returned for them.
How:   Field constraints run before the handler; failures become 400
       responses listing each offending field.
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from happy_thoughts.schemas.common import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    """Body of POST /users."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=64, description="Unique display name")
    email: str = Field(max_length=254, pattern=EMAIL_PATTERN, description="Unique email address")
    password: str = Field(min_length=6, max_length=72, description="Plain-text password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class SessionCreate(BaseModel):
    """Body of POST /sessions."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(min_length=1, max_length=254)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserCreated(CamelModel):
    """Returned by POST /users."""

    id: uuid.UUID
    name: str
    email: str
    access_token: str


class SessionResponse(CamelModel):
    """Returned by POST /sessions."""

    id: uuid.UUID
    name: str
    access_token: str

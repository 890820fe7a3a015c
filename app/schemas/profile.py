from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=3, max_length=20, pattern=r"^[a-zA-Z0-9_]+$"
    ),
]


class ProfileCreate(BaseModel):
    username: Username
    full_name: str | None = Field(None, max_length=100)


class ProfileUpdate(BaseModel):
    username: Username
    full_name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=500)


class Author(BaseModel):
    username: str
    avatar_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class Profile(BaseModel):
    id: str
    username: str
    full_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

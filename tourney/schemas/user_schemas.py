from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel


class UserRole(str, Enum):
    ORGANIZER = "organizer"
    PLAYER = "player"


class UserCreate(CamelModel):
    username: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(min_length=6, max_length=128)


class NewUser(CamelModel):
    """What the storage layer persists for a sign-up; `password` is already hashed."""

    username: str
    password: str
    role: Optional[UserRole] = None


class UserRecord(NewUser):
    id: str


class UserRead(CamelModel):
    id: str
    username: str
    role: Optional[UserRole] = None


class SignInRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RoleUpdate(CamelModel):
    role: UserRole


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead

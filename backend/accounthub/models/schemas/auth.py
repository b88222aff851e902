import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel


class LoginCredentials(SQLModel):
    email: str = Field(max_length=255)
    password: str = Field(min_length=1, max_length=128)


class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"


class TokenPayload(SQLModel):
    sub: str | None = None


class AdminPublic(SQLModel):
    id: uuid.UUID
    email: str
    full_name: str | None
    avatar_url: str | None
    last_login_at: datetime | None
    created_at: datetime

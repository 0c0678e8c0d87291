"""
app/schemas.py

Schemas pydantic de entrada e saída de cada endpoint.

As respostas são montadas direto dos objetos ORM (`from_attributes`);
nenhum schema de saída expõe o hash da senha.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.notification import NotificationType

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_]+$")
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt só considera os primeiros 72 bytes
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return value


class LoginRequest(BaseModel):
    identifier: str = Field(min_length=1)
    password: str = Field(min_length=1)


class PostContent(BaseModel):
    content: str


class CommentRequest(BaseModel):
    text: str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class AuthorOut(ORMModel):
    id: str
    username: str


class UserOut(ORMModel):
    id: str
    username: str
    email: str
    created_at: datetime


class RegisterResponse(UserOut):
    message: str = "User registered successfully"


class CurrentUserOut(UserOut):
    followers: list[str]
    following: list[str]


class ProfileOut(BaseModel):
    id: str
    username: str
    followers_count: int
    following_count: int
    created_at: datetime


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


class CountResponse(MessageResponse):
    count: int


class CommentOut(ORMModel):
    id: str
    author: AuthorOut
    text: str
    created_at: datetime


class PostOut(ORMModel):
    id: str
    author: AuthorOut
    content: str
    created_at: datetime
    # Post.liked_by já devolve os ids dos usuários que curtiram
    likes: list[str] = Field(validation_alias="liked_by")
    comments: list[CommentOut]


class NotificationOut(ORMModel):
    id: str
    type: NotificationType
    read: bool
    created_at: datetime
    recipient_id: str
    sender: AuthorOut
    post_id: str

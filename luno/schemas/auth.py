"""Pydantic schemas for signup, login and profile."""
from datetime import datetime

from pydantic import BaseModel


class SignupSchema(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginSchema(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOutSchema(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class ProfileUserSchema(UserOutSchema):
    created_at: datetime | None = None


class AuthOutSchema(BaseModel):
    message: str
    token: str
    user: UserOutSchema


class ProfileOutSchema(BaseModel):
    user: ProfileUserSchema

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Generic, TypeVar
T = TypeVar("T")


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    # Length is checked by the auth service so the message matches the login flow
    password: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required.")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class SignInRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserData(BaseModel):
    """Principal resolved from a bearer token."""
    id: str
    exp: int


class AuthData(BaseModel):
    id: str
    name: str
    email: str
    token: str


class ApiResponse(BaseModel, Generic[T]):
    statusCode: int
    message: str
    data: T

from pydantic import BaseModel, EmailStr
from schemas.user_schemas import UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(UserResponse):
    token: str
    refresh_token: str


class RefreshResponse(BaseModel):
    token: str

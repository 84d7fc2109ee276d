import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


def _check_password(value: str) -> str:
    if not value:
        raise ValueError('Password cannot be empty')
    return value


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        return _check_password(value)


class UpdateUserRequest(CreateUserRequest):
    pass


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    created_at: datetime
    updated_at: datetime

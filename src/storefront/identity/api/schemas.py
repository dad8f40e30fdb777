"""Pydantic request/response schemas for the Identity API."""

from datetime import datetime

from pydantic import BaseModel, Field


class ProfileResponse(BaseModel):
    user_id: str
    full_name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    role: str


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Maria Silva",
                    "phone": "+55 11 98765-4321",
                }
            ]
        }
    }

    full_name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    avatar_url: str | None = Field(None, max_length=500)


class UserResponse(BaseModel):
    user_id: str
    full_name: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    role: str
    created_at: datetime | None = None


class AssignRoleRequest(BaseModel):
    role: str


class StatusResponse(BaseModel):
    status: str = "ok"

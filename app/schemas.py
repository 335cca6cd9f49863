from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from app.prompts import STYLE_IDS
from app.utils.auth import MAX_PASSWORD_BYTES


def _check_style_id(value: str) -> str:
    if value not in STYLE_IDS:
        raise ValueError(f"Unknown style id '{value}'")
    return value


StyleId = Annotated[str, AfterValidator(_check_style_id)]


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, AfterValidator(_check_password_bytes)]


class UserRegister(BaseModel):
    username: str = Field(
        ..., min_length=3, max_length=50, description="Username for the new account"
    )
    password: Password = Field(
        ..., min_length=6, description="Password for the new account, at most 72 bytes"
    )


class UserLogin(BaseModel):
    username: str = Field(..., description="Username for login")
    password: str = Field(..., description="Password for login")


class UserInfo(BaseModel):
    """Identity carried by a session token: ``{id, username}``."""

    id: int = Field(..., description="User unique identifier")
    username: str = Field(..., description="Username")

    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the operation succeeded")


class PreferencesPayload(BaseModel):
    """Full preferences record. Both fields are always sent together."""

    default_style: StyleId = Field(
        ..., description="Catalog style id selected by default"
    )
    auto_save: bool = Field(
        ..., description="Persist every successful generation automatically"
    )

    model_config = ConfigDict(from_attributes=True)


class SaveImageRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Image data URL or remote URL")
    style_id: StyleId = Field(..., description="Catalog style used for the image")


class SavedImageInfo(BaseModel):
    id: int = Field(..., description="Saved image identifier")
    url: str = Field(..., description="Image data URL or remote URL")
    style_id: str = Field(..., description="Catalog style used for the image")
    created_at: datetime = Field(..., description="When the image was saved")

    model_config = ConfigDict(from_attributes=True)


class StyleDescriptor(BaseModel):
    """One entry of the fixed style catalog."""

    id: str
    name: str
    description: str
    prompt: str

    model_config = ConfigDict(frozen=True)


class HealthResponse(BaseModel):
    status: str
    database: bool

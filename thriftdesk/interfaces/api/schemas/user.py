"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr | None = None
    role: str


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)
    furniture_alerts: bool = False
    clothing_alerts: bool = False
    bricabrac_alerts: bool = False


class UserUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8)
    role: str | None = None
    is_active: bool | None = None
    furniture_alerts: bool | None = None
    clothing_alerts: bool | None = None
    bricabrac_alerts: bool | None = None

    model_config = ConfigDict(extra="forbid")


class AlertPreferencesUpdate(BaseModel):
    furniture_alerts: bool | None = None
    clothing_alerts: bool | None = None
    bricabrac_alerts: bool | None = None

    model_config = ConfigDict(extra="forbid")


class UserRead(BaseModel):
    id: int
    username: str
    email: str | None
    role: str
    furniture_alerts: bool
    clothing_alerts: bool
    bricabrac_alerts: bool
    is_active: bool
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)

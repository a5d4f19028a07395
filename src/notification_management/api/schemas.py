"""Pydantic request/response models for the notification preferences API."""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class UpdatePreferencesRequest(BaseModel):
    preferences: dict[str, dict[str, bool]] = Field(
        ...,
        examples=[{"order.shipped": {"mail": True, "sms": False}}],
        description="Notification type -> {channel: enabled}",
    )


class ChannelToggleRequest(BaseModel):
    notification_type: str = Field(..., min_length=1, examples=["order.shipped"])
    channel: str = Field(..., min_length=1, examples=["mail"])


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"
    message: str | None = None


class PreferenceResponse(BaseModel):
    notification_type: str
    channel_name: str
    enabled: bool


class PreferenceListResponse(BaseModel):
    data: list[PreferenceResponse]


class ChannelsResponse(BaseModel):
    native: list[str]
    custom: list[str]
    all: list[str]


class NotificationTypesResponse(BaseModel):
    data: dict[str, str]


class DeliveryLogResponse(BaseModel):
    id: str
    channel_name: str
    notification_type: str
    status: str
    payload: dict
    error_message: str | None = None
    sent_at: datetime | None = None
    created_at: datetime | None = None


class HistoryResponse(BaseModel):
    data: list[DeliveryLogResponse]

"""FastAPI routes for notification preferences.

Thin adapters over ``NotificationDispatcher``; no business logic here.
Authentication is the host's concern, so the recipient comes from the path.
"""

from fastapi import APIRouter, Depends, Query, Request
from notification_management.api.schemas import (
    ChannelsResponse,
    ChannelToggleRequest,
    DeliveryLogResponse,
    HistoryResponse,
    NotificationTypesResponse,
    PreferenceListResponse,
    PreferenceResponse,
    StatusResponse,
    UpdatePreferencesRequest,
)
from notification_management.channel import NATIVE_CHANNELS
from notification_management.services import NotificationServices

router = APIRouter(prefix="/notification-preferences", tags=["notification-preferences"])


def get_services(request: Request) -> NotificationServices:
    return request.app.state.notification_services


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@router.get("/channels", response_model=ChannelsResponse)
async def list_channels(services: NotificationServices = Depends(get_services)) -> ChannelsResponse:
    """Registered channels: built-in, custom, and both."""
    names = services.registry.names()
    return ChannelsResponse(
        native=[name for name in names if name in NATIVE_CHANNELS],
        custom=[name for name in names if name not in NATIVE_CHANNELS],
        all=names,
    )


@router.get("/types", response_model=NotificationTypesResponse)
async def list_types(services: NotificationServices = Depends(get_services)) -> NotificationTypesResponse:
    """Configured notification types and the class each one sends."""
    types = {}
    for notification_type, target in services.settings.notification_types.items():
        if isinstance(target, type):
            target = f"{target.__module__}.{target.__qualname__}"
        types[notification_type] = str(target)
    return NotificationTypesResponse(data=types)


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------
@router.get("/{recipient_id}", response_model=PreferenceListResponse)
async def get_preferences(
    recipient_id: str,
    services: NotificationServices = Depends(get_services),
) -> PreferenceListResponse:
    preferences = services.dispatcher.preferences_for(recipient_id)
    return PreferenceListResponse(
        data=[
            PreferenceResponse(
                notification_type=p.notification_type,
                channel_name=p.channel_name,
                enabled=p.enabled,
            )
            for p in preferences
        ]
    )


@router.put("/{recipient_id}", response_model=StatusResponse)
async def update_preferences(
    recipient_id: str,
    body: UpdatePreferencesRequest,
    services: NotificationServices = Depends(get_services),
) -> StatusResponse:
    services.dispatcher.set_preferences(recipient_id, body.preferences)
    return StatusResponse(message="Preferences updated successfully")


@router.post("/{recipient_id}/enable", response_model=StatusResponse)
async def enable_channel(
    recipient_id: str,
    body: ChannelToggleRequest,
    services: NotificationServices = Depends(get_services),
) -> StatusResponse:
    services.dispatcher.enable_channel(recipient_id, body.notification_type, body.channel)
    return StatusResponse(message="Channel enabled successfully")


@router.post("/{recipient_id}/disable", response_model=StatusResponse)
async def disable_channel(
    recipient_id: str,
    body: ChannelToggleRequest,
    services: NotificationServices = Depends(get_services),
) -> StatusResponse:
    services.dispatcher.disable_channel(recipient_id, body.notification_type, body.channel)
    return StatusResponse(message="Channel disabled successfully")


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------
@router.get("/{recipient_id}/history", response_model=HistoryResponse)
async def get_history(
    recipient_id: str,
    notification_type: str | None = None,
    limit: int = Query(50, ge=1, le=500),
    services: NotificationServices = Depends(get_services),
) -> HistoryResponse:
    entries = services.dispatcher.history(recipient_id, notification_type, limit)
    return HistoryResponse(
        data=[
            DeliveryLogResponse(
                id=str(entry.id),
                channel_name=entry.channel_name,
                notification_type=entry.notification_type,
                status=entry.status,
                payload=entry.payload_data(),
                error_message=entry.error_message,
                sent_at=entry.sent_at,
                created_at=entry.created_at,
            )
            for entry in entries
        ]
    )

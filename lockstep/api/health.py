"""Health and shared-state endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Request

from ..core.catalog import MediaCatalog
from ..core.events import EventHub
from ..core.playhead import Playhead
from ..models.state import ChannelPosition, StateSnapshot

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthcheck() -> dict[str, str]:
    """Basic health endpoint for readiness probes."""
    return {"status": "ok"}


@router.get("/api/state", response_model=StateSnapshot)
def read_state(request: Request) -> StateSnapshot:
    """Report the playhead and what each channel is currently showing."""

    catalog: MediaCatalog = request.app.state.catalog
    playhead: Playhead = request.app.state.playhead
    hub: EventHub = request.app.state.hub

    position = playhead.current()
    channels = []
    for channel in catalog.channels:
        item = catalog.select(channel, position)
        channels.append(
            ChannelPosition(
                channel=channel,
                index=item.index,
                size=len(catalog.items(channel)),
                identifier=item.identifier,
                media_type=item.media_type,
            )
        )
    return StateSnapshot(playhead=position, subscribers=hub.subscriber_count, channels=channels)

"""Advance trigger shared by both displays."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from ..core.events import MEDIA_CHANGED, EventHub
from ..core.playhead import Playhead

logger = logging.getLogger(__name__)

router = APIRouter(tags=["advance"])

# Registered for every method so non-POST requests get 405 here instead of
# falling through to the /{channel} page route.
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/advance", methods=_ALL_METHODS)
async def advance(request: Request) -> Response:
    """Move the shared playhead forward one step and notify every stream."""

    if request.method != "POST":
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail="Method Not Allowed",
            headers={"Allow": "POST"},
        )
    playhead: Playhead = request.app.state.playhead
    hub: EventHub = request.app.state.hub

    position = playhead.advance()
    notified = hub.broadcast(MEDIA_CHANGED)
    logger.info("Advanced playhead to %d, notified %d subscribers", position, notified)
    return Response(status_code=status.HTTP_200_OK)

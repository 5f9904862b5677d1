"""Display pages and the media fragment they refresh."""
from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..core.catalog import MediaCatalog
from ..core.playhead import Playhead

logger = logging.getLogger(__name__)

router = APIRouter(tags=["display"])


def _require_channel(request: Request, channel: str) -> MediaCatalog:
    catalog: MediaCatalog = request.app.state.catalog
    if channel not in catalog:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown channel")
    return catalog


@router.get("/content/{channel}", response_class=HTMLResponse)
def render_content(request: Request, channel: str) -> HTMLResponse:
    """Return the media element the channel should currently show."""

    catalog = _require_channel(request, channel)
    playhead: Playhead = request.app.state.playhead
    templates: Jinja2Templates = request.app.state.templates

    position = playhead.current()
    item = catalog.select(channel, position)
    logger.debug("Rendering channel %s at playhead %d: %s", channel, position, item.identifier)
    return templates.TemplateResponse(
        request,
        "content.html",
        {
            "media_src": f"/static/{channel}/{quote(item.identifier)}",
            "is_video": item.is_video,
        },
        headers={"X-Media-Type": item.media_type},
    )


@router.get("/{channel}", response_class=HTMLResponse)
def render_page(request: Request, channel: str) -> HTMLResponse:
    """Full display page wired to the content fragment and the event stream."""

    _require_channel(request, channel)
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "page.html",
        {
            "title": f"Display {channel.upper()}",
            "content_url": f"/content/{channel}",
        },
    )

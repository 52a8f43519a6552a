"""Video feed routes."""

import logging
from typing import Optional
from fastapi import APIRouter, Query
from fastapi.responses import Response

from proposalgen.core.errors import ValidationError
from proposalgen.integrations.youtube import parse_feed_entries, youtube_feed_service
from proposalgen.models import FeedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["feeds"])


@router.get("/youtube-rss", summary="YouTube Channel Feed")
async def youtube_rss(
    channel_id: Optional[str] = Query(None, alias="channelId"),
    format: str = Query("json"),
    max_entries: int = Query(1, alias="max", ge=1)
):
    """Latest videos of a channel as JSON, or the raw feed XML."""
    if not channel_id:
        raise ValidationError("channelId is required")

    xml_text = await youtube_feed_service.fetch_feed(channel_id)

    if format != "json":
        return Response(content=xml_text, media_type="application/xml")

    entries = parse_feed_entries(xml_text, max_entries)
    logger.info(f"YouTube feed {channel_id}: {len(entries)} entries")
    return FeedResponse(entries=entries)

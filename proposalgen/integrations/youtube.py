"""YouTube channel RSS integration."""

import logging
import re
from typing import List

import httpx

from proposalgen.core.config import get_settings
from proposalgen.core.errors import UpstreamError
from proposalgen.models import VideoEntry

logger = logging.getLogger(__name__)

_ENTRY_RE = re.compile(r"<entry>(.*?)</entry>", re.DOTALL)
_VIDEO_ID_RE = re.compile(r"<yt:videoId>(.*?)</yt:videoId>")
_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.DOTALL)
_LINK_RE = re.compile(r'<link[^>]*href="([^"]+)"[^>]*/>')
_PUBLISHED_RE = re.compile(r"<published>(.*?)</published>")
_UPDATED_RE = re.compile(r"<updated>(.*?)</updated>")


def _first(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1) if match else ""


def parse_feed_entries(xml: str, max_entries: int = 1) -> List[VideoEntry]:
    """
    Pull the first `max_entries` videos out of a channel feed.

    Entries without a video ID are skipped. The link falls back to the
    watch URL and `updated` falls back to `published`.
    """
    entries: List[VideoEntry] = []

    for match in _ENTRY_RE.finditer(xml):
        if len(entries) >= max_entries:
            break

        entry_xml = match.group(1)
        video_id = _first(_VIDEO_ID_RE, entry_xml)
        if not video_id:
            continue

        published = _first(_PUBLISHED_RE, entry_xml)
        entries.append(VideoEntry(
            id=video_id,
            title=_first(_TITLE_RE, entry_xml),
            link=_first(_LINK_RE, entry_xml) or f"https://www.youtube.com/watch?v={video_id}",
            thumbnail=f"https://i.ytimg.com/vi/{video_id}/maxresdefault.jpg",
            published=published,
            updated=_first(_UPDATED_RE, entry_xml) or published,
        ))

    return entries


class YouTubeFeedService:
    """Fetches public channel feeds from YouTube."""

    def __init__(self):
        """Initialize service."""
        self._settings = None

    @property
    def settings(self):
        """Lazy load settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    async def fetch_feed(self, channel_id: str) -> str:
        """
        Download the raw RSS document for a channel.

        Args:
            channel_id: YouTube channel ID

        Returns:
            Feed XML text

        Raises:
            UpstreamError: on a non-success status or network failure
        """
        try:
            async with httpx.AsyncClient(timeout=self.settings.HTTP_TIMEOUT) as client:
                response = await client.get(
                    self.settings.YOUTUBE_FEED_URL,
                    params={"channel_id": channel_id}
                )
        except httpx.HTTPError as e:
            logger.error(f"YouTube RSS request failed: {e}")
            raise UpstreamError(f"YouTube RSS request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"YouTube RSS returned {response.status_code} for {channel_id}")
            raise UpstreamError(f"YouTube RSS returned {response.status_code}")

        return response.text


# Singleton instance
youtube_feed_service = YouTubeFeedService()

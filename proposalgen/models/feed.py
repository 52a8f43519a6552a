"""Video feed models."""

from typing import List
from pydantic import BaseModel, Field


class VideoEntry(BaseModel):
    """One video from a channel's RSS feed."""
    id: str = Field(..., description="YouTube video ID")
    title: str = Field("", description="Video title")
    link: str = Field(..., description="Watch URL")
    thumbnail: str = Field(..., description="Max resolution thumbnail URL")
    published: str = Field("", description="Publish timestamp")
    updated: str = Field("", description="Last update timestamp")


class FeedResponse(BaseModel):
    """JSON form of a channel feed."""
    entries: List[VideoEntry] = Field(default_factory=list)

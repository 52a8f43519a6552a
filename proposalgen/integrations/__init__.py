"""Integrations module - External service connectors."""

from proposalgen.integrations.pdf import PDFRenderer, pdf_renderer
from proposalgen.integrations.notion import NotionCRMService, notion_crm_service
from proposalgen.integrations.youtube import YouTubeFeedService, youtube_feed_service

__all__ = [
    "PDFRenderer",
    "pdf_renderer",
    "NotionCRMService",
    "notion_crm_service",
    "YouTubeFeedService",
    "youtube_feed_service",
]

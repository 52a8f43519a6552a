"""Notion integration backing the CRM board."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from proposalgen.core.config import get_settings
from proposalgen.core.errors import UpstreamError, ValidationError
from proposalgen.integrations.field_mapping import from_notion_page, to_notion_properties
from proposalgen.models import (
    CRMClient,
    CRMClientCreate,
    CRMClientUpdate,
    CRMListing,
    DEFAULT_STATUS,
    SelectOption,
)

logger = logging.getLogger(__name__)

_NOTION_ERRORS = (HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


class NotionCRMService:
    """
    CRM passthrough over a single Notion database.

    Maps the fixed property set (Name, Company, Email, Status, Deal Value,
    Lead Source, Discovery Call, Summary, Communication) to flat client
    records. No local state; every call goes to Notion.
    """

    def __init__(self, client: Optional[Any] = None, database_id: Optional[str] = None):
        """Initialize service; client and database default from settings."""
        self._client = client
        self._database_id = database_id
        self._settings = None

    @property
    def settings(self):
        """Lazy load settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def database_id(self) -> str:
        """Notion database holding the CRM entries."""
        if self._database_id is None:
            self._database_id = self.settings.NOTION_CRM_DATABASE_ID
        return self._database_id

    @property
    def client(self):
        """Lazy initialize the Notion client."""
        if self._client is None:
            if not self.settings.NOTION_API_KEY:
                raise UpstreamError("Notion API key not configured")

            self._client = AsyncClient(
                auth=self.settings.NOTION_API_KEY,
                notion_version=self.settings.NOTION_VERSION,
                timeout_ms=int(self.settings.HTTP_TIMEOUT * 1000)
            )
            logger.info("Notion client initialized")
        return self._client

    async def list_clients(self) -> CRMListing:
        """Fetch all entries sorted by name plus the board's option sets."""
        try:
            data = await self.client.request(
                path=f"databases/{self.database_id}/query",
                method="POST",
                body={
                    "sorts": [{"property": "Name", "direction": "ascending"}],
                    "page_size": 100
                }
            )
            database = await self.client.databases.retrieve(database_id=self.database_id)
        except _NOTION_ERRORS as e:
            logger.error(f"Notion query failed: {e}")
            raise UpstreamError(f"Notion query failed: {e}") from e

        clients = [from_notion_page(page) for page in data.get("results", [])]
        properties = database.get("properties") or {}

        logger.info(f"Fetched {len(clients)} CRM entries")
        return CRMListing(
            clients=clients,
            status_options=self._options(properties.get("Status"), "status"),
            lead_source_options=self._options(properties.get("Lead Source"), "select")
        )

    async def create_client(self, data: CRMClientCreate) -> CRMClient:
        """Create a new entry; status defaults to 'Contacted'."""
        fields: Dict[str, Any] = {
            "name": data.name or "",
            "company": data.company or "",
            "status": data.status or DEFAULT_STATUS,
        }
        for optional in ("email", "deal_value", "lead_source", "summary"):
            value = getattr(data, optional)
            if value:
                fields[optional] = value

        try:
            page = await self.client.pages.create(
                parent={"database_id": self.database_id},
                properties=to_notion_properties(fields)
            )
        except _NOTION_ERRORS as e:
            logger.error(f"Notion page create failed: {e}")
            raise UpstreamError(f"Notion page create failed: {e}") from e

        logger.info(f"Created CRM entry {page.get('id')} for {fields['name']}")
        return from_notion_page(page)

    async def update_client(self, data: CRMClientUpdate) -> CRMClient:
        """Update only the fields present in the request."""
        if not data.id:
            raise ValidationError("Missing page ID")

        updates = data.model_dump(exclude_unset=True, exclude={"id"})

        try:
            page = await self.client.pages.update(
                page_id=data.id,
                properties=to_notion_properties(updates)
            )
        except _NOTION_ERRORS as e:
            logger.error(f"Notion page update failed: {e}")
            raise UpstreamError(f"Notion page update failed: {e}") from e

        logger.info(f"Updated CRM entry {data.id}: {list(updates.keys())}")
        return from_notion_page(page)

    @staticmethod
    def _options(prop: Optional[Dict[str, Any]], prop_type: str) -> List[SelectOption]:
        """Option list of a status/select property definition."""
        if not prop:
            return []
        options = (prop.get(prop_type) or {}).get("options") or []
        return [SelectOption(name=o["name"], color=o.get("color")) for o in options]


# Singleton instance
notion_crm_service = NotionCRMService()

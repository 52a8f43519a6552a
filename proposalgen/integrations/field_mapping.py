"""Notion property mappings for the CRM database.

- CRM_PROPERTY_MAP: internal field name -> Notion property name and type.
- to_notion_properties(): flat dict -> Notion API `properties` payload.
- from_notion_page(): Notion page -> CRMClient.
"""

from typing import Any, Dict

from proposalgen.models import CRMClient, DEFAULT_STATUS


CRM_PROPERTY_MAP: Dict[str, Dict[str, str]] = {
    "name": {"notion_name": "Name", "type": "title"},
    "company": {"notion_name": "Company", "type": "rich_text"},
    "email": {"notion_name": "Email", "type": "email"},
    "status": {"notion_name": "Status", "type": "status"},
    "deal_value": {"notion_name": "Deal Value", "type": "rich_text"},
    "lead_source": {"notion_name": "Lead Source", "type": "select"},
    "discovery_call": {"notion_name": "Discovery Call", "type": "date"},
    "summary": {"notion_name": "Summary", "type": "rich_text"},
    "communication": {"notion_name": "Communication", "type": "rich_text"},
}


def to_notion_properties(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert internal fields to the Notion `properties` format.

    Every field present in `data` is written. Empty email, select and date
    values clear the property; empty text writes an empty string.
    """
    properties: Dict[str, Any] = {}

    for field_name, value in data.items():
        if field_name not in CRM_PROPERTY_MAP:
            continue

        mapping = CRM_PROPERTY_MAP[field_name]
        notion_name = mapping["notion_name"]
        prop_type = mapping["type"]

        if prop_type in ("title", "rich_text"):
            properties[notion_name] = {
                prop_type: [{"text": {"content": str(value or "")}}]
            }
        elif prop_type == "email":
            properties[notion_name] = {"email": value or None}
        elif prop_type in ("select", "status"):
            properties[notion_name] = {prop_type: {"name": value} if value else None}
        elif prop_type == "date":
            properties[notion_name] = {"date": {"start": value} if value else None}

    return properties


def _extract_notion_value(prop_value: Dict[str, Any], prop_type: str) -> str:
    """Pull a plain string out of a Notion property value."""
    if prop_type in ("title", "rich_text"):
        parts = prop_value.get(prop_type) or []
        if parts:
            first = parts[0]
            return first.get("plain_text") or first.get("text", {}).get("content", "")
        return ""

    if prop_type == "email":
        return prop_value.get("email") or ""

    if prop_type in ("select", "status"):
        option = prop_value.get(prop_type)
        return option.get("name", "") if option else ""

    if prop_type == "date":
        date_val = prop_value.get("date")
        return date_val.get("start", "") if date_val else ""

    return ""


def from_notion_page(page: Dict[str, Any]) -> CRMClient:
    """Flatten a Notion page into a CRMClient."""
    properties = page.get("properties") or {}
    fields: Dict[str, str] = {}

    for field_name, mapping in CRM_PROPERTY_MAP.items():
        prop_value = properties.get(mapping["notion_name"])
        fields[field_name] = (
            _extract_notion_value(prop_value, mapping["type"]) if prop_value else ""
        )

    fields["status"] = fields["status"] or DEFAULT_STATUS

    return CRMClient(
        id=page["id"],
        created_time=page.get("created_time"),
        last_edited=page.get("last_edited_time"),
        **fields
    )

"""CRM models - flat client records mirrored from the Notion database."""

from typing import Optional, List
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

DEFAULT_STATUS = "Contacted"


class CamelModel(BaseModel):
    """Serialises with camelCase keys, accepts either spelling."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CRMClient(CamelModel):
    """A CRM entry as returned to the dashboard."""
    id: str = Field(..., description="Notion page ID")
    name: str = Field("", description="Contact name")
    company: str = Field("", description="Company name")
    email: str = Field("", description="Contact email")
    status: str = Field(DEFAULT_STATUS, description="Pipeline status")
    deal_value: str = Field("", description="Deal value as entered")
    lead_source: str = Field("", description="Where the lead came from")
    discovery_call: str = Field("", description="Discovery call date (ISO)")
    summary: str = Field("", description="Notes summary")
    communication: str = Field("", description="Communication log")
    created_time: Optional[str] = Field(None, description="Page creation time")
    last_edited: Optional[str] = Field(None, description="Page last edit time")


class CRMClientCreate(CamelModel):
    """Fields accepted when creating an entry."""
    name: str = ""
    company: str = ""
    email: Optional[str] = None
    status: Optional[str] = None
    deal_value: Optional[str] = None
    lead_source: Optional[str] = None
    summary: Optional[str] = None


class CRMClientUpdate(CamelModel):
    """Partial update; only fields present in the request are written."""
    id: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    status: Optional[str] = None
    deal_value: Optional[str] = None
    lead_source: Optional[str] = None
    summary: Optional[str] = None
    communication: Optional[str] = None
    discovery_call: Optional[str] = None


class SelectOption(BaseModel):
    """A status or select option defined on the database."""
    name: str
    color: Optional[str] = None


class CRMListing(CamelModel):
    """All entries plus the option sets used to draw the kanban board."""
    clients: List[CRMClient] = Field(default_factory=list)
    status_options: List[SelectOption] = Field(default_factory=list)
    lead_source_options: List[SelectOption] = Field(default_factory=list)

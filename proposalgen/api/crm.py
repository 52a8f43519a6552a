"""CRM routes - passthrough to the Notion database."""

from fastapi import APIRouter, Depends

from proposalgen.api.deps import require_auth
from proposalgen.integrations.notion import notion_crm_service
from proposalgen.models import CRMClient, CRMClientCreate, CRMClientUpdate, CRMListing

router = APIRouter(prefix="/api", tags=["crm"], dependencies=[Depends(require_auth)])


@router.get("/crm", response_model=CRMListing, summary="List CRM Entries")
async def list_crm_entries() -> CRMListing:
    """All entries sorted by name, with status and lead source options."""
    return await notion_crm_service.list_clients()


@router.post("/crm", response_model=CRMClient, status_code=201, summary="Create CRM Entry")
async def create_crm_entry(body: CRMClientCreate) -> CRMClient:
    """Create an entry; status defaults to 'Contacted'."""
    return await notion_crm_service.create_client(body)


@router.patch("/crm", response_model=CRMClient, summary="Update CRM Entry")
async def update_crm_entry(body: CRMClientUpdate) -> CRMClient:
    """Update the fields present in the body of the entry with the given id."""
    return await notion_crm_service.update_client(body)

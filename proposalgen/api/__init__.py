"""API routers."""

from proposalgen.api.auth import router as auth_router
from proposalgen.api.crm import router as crm_router
from proposalgen.api.feeds import router as feeds_router
from proposalgen.api.proposals import router as proposals_router

__all__ = [
    "auth_router",
    "crm_router",
    "feeds_router",
    "proposals_router",
]

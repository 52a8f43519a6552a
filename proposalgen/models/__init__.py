"""Models package - All Pydantic models organized by domain."""

from proposalgen.models.proposal import (
    Deliverable,
    TimelinePhase,
    TechnicalRequirements,
    PaymentMilestone,
    ProposalInput,
    BusinessSettings,
    ProposalDocument,
)
from proposalgen.models.crm import (
    DEFAULT_STATUS,
    CRMClient,
    CRMClientCreate,
    CRMClientUpdate,
    CRMListing,
    SelectOption,
)
from proposalgen.models.feed import VideoEntry, FeedResponse

__all__ = [
    # Proposal models
    "Deliverable",
    "TimelinePhase",
    "TechnicalRequirements",
    "PaymentMilestone",
    "ProposalInput",
    "BusinessSettings",
    "ProposalDocument",
    # CRM models
    "DEFAULT_STATUS",
    "CRMClient",
    "CRMClientCreate",
    "CRMClientUpdate",
    "CRMListing",
    "SelectOption",
    # Feed models
    "VideoEntry",
    "FeedResponse",
]

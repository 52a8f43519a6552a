"""Proposal-related models - extraction schema, settings and documents."""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, field_serializer

from proposalgen.core.config import slugify


class Deliverable(BaseModel):
    """One item the studio will deliver."""
    name: str = Field("", description="Deliverable name")
    description: str = Field("", description="What this includes")


class TimelinePhase(BaseModel):
    """A phase of the project schedule."""
    phase: str = Field("", description="Phase name")
    duration: str = Field("", description="Free-text duration label, e.g. '2 weeks'")
    description: str = Field("", description="What happens during the phase")


class TechnicalRequirements(BaseModel):
    """Platform and feature requirements mentioned in the meeting."""
    cms: Optional[str] = Field(None, description="CMS platform if mentioned")
    integrations: List[str] = Field(
        default_factory=list,
        description="Third-party integrations mentioned"
    )
    features: List[str] = Field(
        default_factory=list,
        description="Key features discussed"
    )


class PaymentMilestone(BaseModel):
    """A payment step expressed as a share of the total price."""
    milestone: str = Field(..., description="When the payment is due")
    percentage: Decimal = Field(..., ge=0, le=100, description="Share of the total (0-100)")

    @field_serializer("percentage", when_used="json")
    def _percentage_as_number(self, value: Decimal) -> float:
        return float(value)


class ProposalInput(BaseModel):
    """Structured data extracted from a meeting transcript."""
    client_name: str = Field("", description="Client or company name")
    project_summary: str = Field("", description="Summary of goals and scope")
    deliverables: List[Deliverable] = Field(..., description="Ordered deliverables")
    timeline: List[TimelinePhase] = Field(..., description="Ordered project phases")
    client_needs: List[str] = Field(..., description="What the client must provide")
    technical_requirements: TechnicalRequirements = Field(
        default_factory=TechnicalRequirements,
        description="CMS, integrations and features"
    )
    payment_milestones: List[PaymentMilestone] = Field(
        ...,
        description="Ordered payment schedule"
    )

    class Config:
        frozen = True


class BusinessSettings(BaseModel):
    """The studio's identity, printed in the header and footer."""
    name: str = Field("", alias="businessName", description="Business name")
    email: str = Field("", alias="businessEmail", description="Contact email")
    phone: Optional[str] = Field("", alias="businessPhone", description="Contact phone")

    class Config:
        populate_by_name = True


class ProposalDocument(BaseModel):
    """A rendered proposal. Created per request and never mutated."""
    client_name: str = Field(..., description="Client the proposal is for")
    markdown: str = Field(..., description="Complete proposal in Markdown format")
    created_at: datetime = Field(..., description="Generation timestamp")

    class Config:
        frozen = True

    @property
    def file_stem(self) -> str:
        """Collision-free base filename: slug plus millisecond timestamp."""
        millis = int(self.created_at.timestamp() * 1000)
        return f"proposal-{slugify(self.client_name)}-{millis}"


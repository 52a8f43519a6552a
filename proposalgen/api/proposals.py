"""Proposal routes - transcript analysis, document generation and settings."""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from proposalgen.api.deps import require_auth
from proposalgen.core.config import get_settings, slugify
from proposalgen.core.errors import ValidationError
from proposalgen.models import (
    BusinessSettings,
    Deliverable,
    PaymentMilestone,
    ProposalInput,
    TechnicalRequirements,
    TimelinePhase,
)
from proposalgen.services.proposal_service import proposal_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proposals"], dependencies=[Depends(require_auth)])


class AnalyzeRequest(BaseModel):
    """Transcript submitted for extraction."""
    transcript: Optional[str] = None
    notes: Optional[str] = None


class AmountMilestone(BaseModel):
    """Milestone given as a fixed dollar amount by older clients."""
    name: str = ""
    amount: Decimal = Field(Decimal("0"), ge=0)


class GenerateProposalRequest(BaseModel):
    """Proposal data plus pricing and contact overrides."""
    client_name: str = ""
    project_summary: str = ""
    deliverables: Optional[List[Deliverable]] = None
    timeline: Optional[List[TimelinePhase]] = None
    client_needs: Optional[List[str]] = None
    technical_requirements: Optional[TechnicalRequirements] = None
    payment_milestones: Optional[List[PaymentMilestone]] = None
    milestones: Optional[List[AmountMilestone]] = None
    project_total: Optional[Decimal] = Field(None, ge=0)
    business_email: Optional[str] = None
    business_phone: Optional[str] = None

    def resolve(self) -> Tuple[ProposalInput, Decimal]:
        """
        Settle on percentage milestones and a total price.

        Amount milestones are converted to percentages of their sum, which
        becomes the total price.
        """
        for field_name in ("deliverables", "timeline", "client_needs"):
            if getattr(self, field_name) is None:
                raise ValidationError(f"Missing required field: {field_name}")

        if self.payment_milestones is not None:
            milestones = self.payment_milestones
            total = self.project_total or Decimal("0")
        elif self.milestones is not None:
            milestones, total = milestones_from_amounts(self.milestones)
        else:
            raise ValidationError("Missing required field: payment_milestones")

        proposal = ProposalInput(
            client_name=self.client_name,
            project_summary=self.project_summary,
            deliverables=self.deliverables,
            timeline=self.timeline,
            client_needs=self.client_needs,
            technical_requirements=self.technical_requirements or TechnicalRequirements(),
            payment_milestones=milestones
        )
        return proposal, total


def milestones_from_amounts(
    milestones: List[AmountMilestone]
) -> Tuple[List[PaymentMilestone], Decimal]:
    """Convert fixed-amount milestones into percentages of their total."""
    total = sum((m.amount for m in milestones), Decimal("0"))

    converted = [
        PaymentMilestone(
            milestone=m.name,
            percentage=m.amount / total * 100 if total else Decimal("0")
        )
        for m in milestones
    ]
    return converted, total


@router.post("/analyze", response_model=ProposalInput, summary="Analyze Meeting Transcript")
async def analyze(body: AnalyzeRequest) -> ProposalInput:
    """Extract structured proposal data from a transcript."""
    logger.info(f"Analyze request: {len(body.transcript or '')} chars")
    return await proposal_service.analyze_async(body.transcript, body.notes)


@router.post("/generate-pdf", summary="Generate Proposal")
async def generate_pdf(body: GenerateProposalRequest):
    """
    Build the proposal document.

    Returns the PDF file, or the markdown as JSON when RENDER_MODE is
    'markdown'.
    """
    proposal, total = body.resolve()
    business = proposal_service.business_settings(
        email=body.business_email,
        phone=body.business_phone
    )
    document = proposal_service.build_document(proposal, total, business)

    if get_settings().RENDER_MODE == "markdown":
        return {
            "markdown": document.markdown,
            "client_name": document.client_name or "proposal"
        }

    await asyncio.to_thread(proposal_service.save_markdown, document)
    pdf_path = await asyncio.to_thread(proposal_service.render_pdf, document)

    return FileResponse(
        pdf_path,
        media_type="application/pdf",
        filename=f"proposal-{slugify(document.client_name)}.pdf"
    )


@router.get("/settings", summary="Get Business Settings")
async def get_business_settings() -> Dict[str, Any]:
    """Return the stored business settings."""
    return proposal_service.store.load().model_dump(by_alias=True)


@router.post("/settings", summary="Save Business Settings")
async def save_business_settings(body: BusinessSettings) -> Dict[str, bool]:
    """Persist business name, email and phone."""
    proposal_service.store.save(body)
    return {"success": True}

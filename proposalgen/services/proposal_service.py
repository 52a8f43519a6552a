"""Proposal Service - extraction, assembly and file output in one place."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from proposalgen.core.config import get_settings
from proposalgen.core.errors import ValidationError
from proposalgen.core.settings_store import BusinessSettingsStore, settings_store
from proposalgen.integrations.pdf import PDFRenderer, pdf_renderer
from proposalgen.models import BusinessSettings, ProposalDocument, ProposalInput
from proposalgen.services.assembler import assemble
from proposalgen.services.extraction import TranscriptExtractor, transcript_extractor

logger = logging.getLogger(__name__)


class ProposalService:
    """
    Main orchestration service for proposal generation.

    Each request runs one sequential pipeline:
    extract -> assemble -> optionally save and render.
    """

    def __init__(
        self,
        extractor: Optional[TranscriptExtractor] = None,
        renderer: Optional[PDFRenderer] = None,
        store: Optional[BusinessSettingsStore] = None,
        output_dir: Optional[str] = None
    ):
        """Initialize service with lazily resolved collaborators."""
        self.extractor = extractor or transcript_extractor
        self.renderer = renderer or pdf_renderer
        self.store = store or settings_store
        self._output_dir = Path(output_dir) if output_dir else None

    @property
    def output_dir(self) -> Path:
        """Get or create output directory."""
        if self._output_dir is None:
            self._output_dir = Path(get_settings().OUTPUT_DIR)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        return self._output_dir

    def _check_transcript(self, transcript: Optional[str]) -> str:
        if not transcript or not transcript.strip():
            raise ValidationError("Transcript is required")
        return transcript

    def analyze(self, transcript: Optional[str], notes: Optional[str] = None) -> ProposalInput:
        """Extract proposal data from a transcript (blocking)."""
        transcript = self._check_transcript(transcript)
        return self.extractor.extract(transcript, notes or None)

    async def analyze_async(
        self,
        transcript: Optional[str],
        notes: Optional[str] = None
    ) -> ProposalInput:
        """Extract proposal data from a transcript without blocking the loop."""
        transcript = self._check_transcript(transcript)
        return await self.extractor.extract_async(transcript, notes or None)

    def business_settings(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None
    ) -> BusinessSettings:
        """Stored business settings with optional per-request contact overrides."""
        settings = self.store.load()
        updates = {}
        if email:
            updates["email"] = email
        if phone:
            updates["phone"] = phone
        return settings.model_copy(update=updates) if updates else settings

    def build_document(
        self,
        proposal: ProposalInput,
        total_price: Union[Decimal, int, float, str],
        settings: Optional[BusinessSettings] = None
    ) -> ProposalDocument:
        """Assemble a proposal using stored settings unless given explicitly."""
        settings = settings or self.business_settings()
        document = assemble(proposal, settings, total_price)
        logger.info(f"Proposal assembled for {document.client_name or 'unknown client'}")
        return document

    def save_markdown(self, document: ProposalDocument) -> Path:
        """Write the markdown next to future PDFs in the output directory."""
        path = self.output_dir / f"{document.file_stem}.md"
        path.write_text(document.markdown, encoding="utf-8")
        logger.info(f"Markdown saved: {path}")
        return path

    def render_pdf(self, document: ProposalDocument) -> Path:
        """Render the document to a PDF in the output directory."""
        path = self.output_dir / f"{document.file_stem}.pdf"
        return self.renderer.render(document, path)


# Singleton instance
proposal_service = ProposalService()

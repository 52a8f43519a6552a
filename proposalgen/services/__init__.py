"""Services module - proposal pipeline and access gate."""

from proposalgen.services.assembler import assemble
from proposalgen.services.auth import AccessGate, access_gate
from proposalgen.services.extraction import TranscriptExtractor, transcript_extractor
from proposalgen.services.proposal_service import ProposalService, proposal_service

__all__ = [
    "assemble",
    "AccessGate",
    "access_gate",
    "TranscriptExtractor",
    "transcript_extractor",
    "ProposalService",
    "proposal_service",
]

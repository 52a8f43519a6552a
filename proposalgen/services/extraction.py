"""Extraction client - transcript in, structured proposal data out."""

import asyncio
import json
import logging
import re
from typing import Optional

from crewai import Crew, Process
from pydantic import ValidationError as SchemaError

from proposalgen.core.errors import ExtractionError, UpstreamError
from proposalgen.intelligence.agents.extraction import ExtractionAgentFactory
from proposalgen.models import ProposalInput

logger = logging.getLogger(__name__)

# Opening fence with an optional language tag, or a closing fence
_FENCE_RE = re.compile(r"```[A-Za-z0-9_-]*\n?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapped around a JSON answer."""
    if "```" not in text:
        return text
    return _FENCE_RE.sub("", text).strip()


def parse_extraction(text: str) -> ProposalInput:
    """
    Parse completion text into a ProposalInput.

    Args:
        text: Raw text returned by the completion service

    Returns:
        Validated ProposalInput

    Raises:
        ExtractionError: malformed JSON, a non-object document or missing
            required keys. The raw text is kept on the exception.
    """
    json_text = strip_code_fences(text)

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Completion is not valid JSON: {e}", raw_text=text) from e

    if not isinstance(data, dict):
        raise ExtractionError("Completion is not a JSON object", raw_text=text)

    try:
        return ProposalInput(**data)
    except SchemaError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ExtractionError(
            f"Completion does not match the proposal schema: {', '.join(missing)}",
            raw_text=text
        ) from e


class TranscriptExtractor:
    """
    Sends a transcript to the completion service and parses the answer.

    One outbound call per extraction; failures are surfaced immediately.
    """

    def extract(self, transcript: str, notes: Optional[str] = None) -> ProposalInput:
        """
        Extract proposal data from a meeting transcript.

        Args:
            transcript: Non-empty meeting transcript
            notes: Optional extra notes appended to the prompt

        Returns:
            ProposalInput parsed from the completion
        """
        logger.info(f"Extracting proposal data from transcript ({len(transcript)} chars)")

        text = self._complete(transcript, notes)
        proposal = parse_extraction(text)

        logger.info(
            f"Extraction complete for {proposal.client_name or 'unknown client'}: "
            f"{len(proposal.deliverables)} deliverables, {len(proposal.timeline)} phases"
        )
        return proposal

    async def extract_async(
        self,
        transcript: str,
        notes: Optional[str] = None
    ) -> ProposalInput:
        """Run extract() in a worker thread."""
        return await asyncio.to_thread(self.extract, transcript, notes)

    def _complete(self, transcript: str, notes: Optional[str]) -> str:
        """Run the single-agent crew and return the raw text answer."""
        agent = ExtractionAgentFactory.create()
        task = ExtractionAgentFactory.create_extraction_task(agent, transcript, notes)

        crew = Crew(
            agents=[agent],
            tasks=[task],
            process=Process.sequential,
            verbose=agent.verbose
        )

        try:
            crew.kickoff()
        except Exception as e:
            logger.error(f"Completion service failed: {e}")
            raise UpstreamError(f"Completion service failed: {e}") from e

        if not task.output or not (task.output.raw or "").strip():
            raise ExtractionError("Completion service returned no text", raw_text="")

        return task.output.raw


# Singleton instance
transcript_extractor = TranscriptExtractor()

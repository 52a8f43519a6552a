"""Extraction Agent for turning meeting transcripts into proposal data."""

import logging
from typing import Optional
from crewai import Agent, LLM, Task

from proposalgen.core.config import get_settings

logger = logging.getLogger(__name__)


PROPOSAL_SCHEMA = """{
  "client_name": "extracted client/company name",
  "project_summary": "2-3 paragraph summary of the project goals and what we'll build",
  "deliverables": [
    { "name": "Deliverable name", "description": "What this includes" }
  ],
  "timeline": [
    { "phase": "Phase name", "duration": "X weeks", "description": "What happens" }
  ],
  "client_needs": ["List of things we need from the client"],
  "technical_requirements": {
    "cms": "CMS platform if mentioned",
    "integrations": ["List of integrations mentioned"],
    "features": ["Key features discussed"]
  },
  "payment_milestones": [
    { "milestone": "Upon agreement", "percentage": 30 },
    { "milestone": "Upon design approval", "percentage": 40 },
    { "milestone": "Upon completion", "percentage": 30 }
  ]
}"""


def build_extraction_prompt(transcript: str, notes: Optional[str] = None) -> str:
    """Build the single completion request sent for a transcript."""
    notes_section = f"Additional Notes:\n{notes}" if notes else ""

    return f"""You are analyzing a client meeting transcript for a web design project.

Extract the following and respond ONLY with valid JSON (no markdown code blocks):

{PROPOSAL_SCHEMA}

Transcript:
{transcript}

{notes_section}

Respond with valid JSON only."""


class ExtractionAgentFactory:
    """Factory for creating the Extraction Agent."""

    @staticmethod
    def create() -> Agent:
        """Create an Extraction Agent bound to the configured model."""
        settings = get_settings()

        return Agent(
            role="Web Design Project Analyst",
            goal="""Turn client meeting transcripts into precise, structured
            project data for a web design proposal.""",
            backstory="""You are a project lead at a small web design studio.
            After every discovery call you write down exactly what the client
            asked for: deliverables, a realistic phased timeline, what the
            client must supply, technical constraints and a payment schedule.

            You never invent requirements that were not discussed and you
            always answer in strict JSON.""",
            llm=LLM(
                model=settings.OPENAI_MODEL,
                api_key=settings.OPENAI_API_KEY,
                max_tokens=settings.EXTRACTION_MAX_TOKENS,
                max_retries=0
            ),
            verbose=settings.DEBUG,
            allow_delegation=False,
            # Single completion per transcript, failures surface immediately
            max_iter=1,
            max_retry_limit=0
        )

    @staticmethod
    def create_extraction_task(
        agent: Agent,
        transcript: str,
        notes: Optional[str] = None
    ) -> Task:
        """Create the extraction task for one transcript."""
        return Task(
            description=build_extraction_prompt(transcript, notes),
            expected_output="A single JSON object matching the documented schema",
            agent=agent
        )

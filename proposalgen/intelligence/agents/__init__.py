"""CrewAI agents."""

from proposalgen.intelligence.agents.extraction import (
    ExtractionAgentFactory,
    build_extraction_prompt,
)

__all__ = [
    "ExtractionAgentFactory",
    "build_extraction_prompt",
]

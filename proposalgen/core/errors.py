"""Error taxonomy shared by the services, the HTTP layer and the CLI."""

from typing import Optional


class ProposalGenError(Exception):
    """Base class for every handled failure."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.error)
        self.message = message or self.error


class InvalidCredentials(ProposalGenError):
    """Login attempted with the wrong password."""

    status_code = 401
    error = "Invalid password"


class Unauthorized(ProposalGenError):
    """Missing, malformed or expired access token."""

    status_code = 401
    error = "Unauthorized"


class ValidationError(ProposalGenError):
    """A required request field is missing or empty."""

    status_code = 400
    error = "Invalid request"


class ExtractionError(ProposalGenError):
    """The completion service returned text that is not a valid proposal."""

    status_code = 500
    error = "Extraction failed"

    def __init__(self, message: Optional[str] = None, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class UpstreamError(ProposalGenError):
    """An external service (LLM, Notion, YouTube) failed or was unreachable."""

    status_code = 502
    error = "Upstream service error"


class RenderError(ProposalGenError):
    """Markdown to PDF conversion failed."""

    status_code = 500
    error = "PDF generation failed"

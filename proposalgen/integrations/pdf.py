"""PDF generation for proposals."""

import base64
import logging
import mimetypes
import os
from pathlib import Path
from typing import Optional, Union

import markdown

from proposalgen.core.config import get_settings
from proposalgen.core.errors import RenderError
from proposalgen.models import ProposalDocument

logger = logging.getLogger(__name__)


PROPOSAL_CSS = """
@page {
    size: letter;
    margin: 1in;
}

body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;
    line-height: 1.5;
    color: #2c3e50;
    font-size: 13px;
    margin: 0;
    padding: 0;
}

.logo-header {
    margin-bottom: 25px;
    border-bottom: 1px solid #e0e0e0;
    padding-bottom: 15px;
}

.logo-header img {
    max-width: 160px;
    max-height: 70px;
    object-fit: contain;
}

h1 {
    color: #1a1a1a;
    margin-top: 0;
    padding-bottom: 8px;
    font-size: 24px;
    font-weight: 600;
    letter-spacing: -0.5px;
}

h2 {
    color: #1a1a1a;
    margin-top: 28px;
    margin-bottom: 12px;
    font-size: 17px;
    font-weight: 600;
}

h3 {
    color: #34495e;
    font-size: 14px;
    font-weight: 600;
    margin-top: 16px;
    margin-bottom: 8px;
}

p {
    margin: 10px 0;
}

table {
    border-collapse: collapse;
    width: 100%;
    margin: 16px 0;
    font-size: 12px;
}

th, td {
    border: 1px solid #e0e0e0;
    padding: 10px 12px;
    text-align: left;
}

th {
    background-color: #2c3e50;
    color: white;
    font-weight: 600;
}

tr:nth-child(even) {
    background-color: #f8f9fa;
}

hr {
    border: none;
    border-top: 1px solid #e0e0e0;
    margin: 24px 0;
}

ul {
    padding-left: 20px;
    margin: 10px 0;
}

li {
    margin: 6px 0;
}

em {
    font-size: 11px;
    color: #7f8c8d;
    line-height: 1.4;
}

strong {
    color: #1a1a1a;
    font-weight: 600;
}
"""


class PDFRenderer:
    """
    Service for rendering proposal documents to PDF.

    Markdown is converted to HTML, wrapped with the fixed stylesheet and
    optional logo, and handed to WeasyPrint for layout and pagination.
    """

    def __init__(self, logo_path: Optional[str] = None):
        """Initialize renderer; logo_path defaults to LOGO_PATH."""
        self._logo_path = logo_path

    @property
    def logo_path(self) -> str:
        """Lazy resolve the logo location."""
        if self._logo_path is None:
            self._logo_path = get_settings().LOGO_PATH
        return self._logo_path

    def logo_data_uri(self) -> str:
        """Logo as a base64 data URI, or an empty string when absent."""
        if not self.logo_path or not os.path.exists(self.logo_path):
            return ""

        mime_type = mimetypes.guess_type(self.logo_path)[0] or "image/jpeg"
        with open(self.logo_path, "rb") as logo_file:
            encoded = base64.b64encode(logo_file.read()).decode("ascii")
        return f"data:{mime_type};base64,{encoded}"

    def build_html(self, document: ProposalDocument) -> str:
        """
        Wrap the proposal markdown in a complete HTML page.

        Args:
            document: Assembled proposal

        Returns:
            HTML string ready for rendering
        """
        body = markdown.markdown(document.markdown, extensions=["tables"])

        logo_uri = self.logo_data_uri()
        logo_html = f'<img src="{logo_uri}" alt="Logo" />' if logo_uri else ""

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Web Design Proposal - {document.client_name}</title>
    <style>
{PROPOSAL_CSS}
    </style>
</head>
<body>
    <div class="logo-header">{logo_html}</div>
    {body}
</body>
</html>
"""

    def render(
        self,
        document: ProposalDocument,
        destination: Union[str, Path]
    ) -> Path:
        """
        Render a proposal to a PDF file.

        Args:
            document: Assembled proposal
            destination: Output file path

        Returns:
            Path to the written PDF

        Raises:
            RenderError: if conversion fails
        """
        output_path = Path(destination)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        html = self.build_html(document)

        try:
            self._write_pdf(html, output_path)
        except RenderError:
            raise
        except Exception as e:
            logger.error(f"Failed to generate PDF: {e}")
            raise RenderError(f"Failed to generate PDF: {e}") from e

        logger.info(f"Generated PDF: {output_path}")
        return output_path

    def _write_pdf(self, html: str, output_path: Path) -> None:
        """Lay out the HTML with WeasyPrint."""
        try:
            from weasyprint import HTML
        except (ImportError, OSError) as e:
            logger.error(f"WeasyPrint is unavailable: {e}")
            raise RenderError(f"WeasyPrint is unavailable: {e}") from e

        HTML(string=html).write_pdf(str(output_path))


# Singleton instance
pdf_renderer = PDFRenderer()

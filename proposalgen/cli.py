"""
Command line interface for the proposal generator.

Usage:
    proposalgen setup
    proposalgen generate transcript.txt --total 8500 [--notes "..."] [--pdf]
    proposalgen render output/proposal-acme-1760000000000.md [--output acme.pdf]
    proposalgen summary transcript.txt
"""

import argparse
import logging
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

from proposalgen.core.config import get_settings
from proposalgen.core.errors import ProposalGenError
from proposalgen.core.logging_setup import setup_logging
from proposalgen.core.settings_store import settings_store
from proposalgen.models import BusinessSettings, ProposalDocument
from proposalgen.services.assembler import DEFAULT_BUSINESS_EMAIL, DEFAULT_BUSINESS_NAME
from proposalgen.services.proposal_service import proposal_service

logger = logging.getLogger("proposalgen.cli")


def parse_amount(value: str) -> Decimal:
    """Accept '8500', '8,500' or '$8,500'."""
    try:
        amount = Decimal(value.replace(",", "").replace("$", "").strip())
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    if amount <= 0:
        raise argparse.ArgumentTypeError("amount must be greater than zero")
    return amount


def _prompt(label: str, default: str) -> str:
    suffix = f" [{default}]" if default else ""
    answer = input(f"{label}{suffix}: ").strip()
    return answer or default


def _read_transcript(path: str) -> str:
    transcript = Path(path).read_text(encoding="utf-8")
    if not transcript.strip():
        print("No transcript provided. Exiting.")
        sys.exit(1)
    return transcript


def _require_api_key() -> None:
    if not get_settings().OPENAI_API_KEY:
        print("Error: OPENAI_API_KEY not set.")
        print("Set it with: export OPENAI_API_KEY=your-key-here")
        sys.exit(1)


def cmd_setup(args: argparse.Namespace) -> int:
    """Prompt for business details and save them."""
    current = settings_store.load()
    print("\n--- Business Setup ---\n")

    settings = BusinessSettings(
        name=_prompt("Your business name", current.name or DEFAULT_BUSINESS_NAME),
        email=_prompt("Your email", current.email or DEFAULT_BUSINESS_EMAIL),
        phone=_prompt("Your phone (optional)", current.phone or "")
    )
    path = settings_store.save(settings)
    print(f"\nSettings saved to {path}\n")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    """Transcript to markdown, and optionally PDF."""
    _require_api_key()
    transcript = _read_transcript(args.transcript)

    if not settings_store.is_configured():
        cmd_setup(args)

    print("Analyzing transcript...")
    proposal = proposal_service.analyze(transcript, args.notes)

    document = proposal_service.build_document(proposal, args.total)
    md_path = proposal_service.save_markdown(document)
    print(f"Markdown saved to: {md_path}")

    if args.pdf:
        pdf_path = proposal_service.render_pdf(document)
        print(f"PDF saved to: {pdf_path}")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Render an edited markdown proposal to PDF."""
    source = Path(args.markdown)
    destination = Path(args.output) if args.output else source.with_suffix(".pdf")

    document = ProposalDocument(
        client_name=source.stem,
        markdown=source.read_text(encoding="utf-8"),
        created_at=datetime.now()
    )
    pdf_path = proposal_service.renderer.render(document, destination)
    print(f"PDF saved to: {pdf_path}")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    """Print what the extraction found without writing files."""
    _require_api_key()
    transcript = _read_transcript(args.transcript)

    proposal = proposal_service.analyze(transcript, args.notes)

    print(f"\nClient: {proposal.client_name or '(unknown)'}")
    print(f"Deliverables: {len(proposal.deliverables)}")
    print(f"Timeline phases: {len(proposal.timeline)}")
    print(f"Client needs: {len(proposal.client_needs)}")
    print(f"Payment milestones: {len(proposal.payment_milestones)}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proposalgen",
        description="Generate web design proposals from meeting transcripts"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup = subparsers.add_parser("setup", help="Save business name and contact details")
    setup.set_defaults(handler=cmd_setup)

    generate = subparsers.add_parser("generate", help="Create a proposal from a transcript")
    generate.add_argument("transcript", help="Path to the transcript text file")
    generate.add_argument("--total", type=parse_amount, required=True,
                          help="Total project investment in USD")
    generate.add_argument("--notes", default=None, help="Additional notes for the analysis")
    generate.add_argument("--pdf", action="store_true", help="Also render the PDF")
    generate.set_defaults(handler=cmd_generate)

    render = subparsers.add_parser("render", help="Convert a markdown proposal to PDF")
    render.add_argument("markdown", help="Path to the markdown file")
    render.add_argument("--output", default=None, help="PDF path (defaults beside the markdown)")
    render.set_defaults(handler=cmd_render)

    summary = subparsers.add_parser("summary", help="Show what a transcript extracts to")
    summary.add_argument("transcript", help="Path to the transcript text file")
    summary.add_argument("--notes", default=None, help="Additional notes for the analysis")
    summary.set_defaults(handler=cmd_summary)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    try:
        return args.handler(args)
    except ProposalGenError as e:
        logger.debug(f"{type(e).__name__}: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: file not found: {e.filename}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Proposal Generator - meeting transcripts to web design proposals."""

__version__ = "1.0.0"

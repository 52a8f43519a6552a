"""Intelligence module - AI agents."""

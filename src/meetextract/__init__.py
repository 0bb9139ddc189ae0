"""Structured extraction of summaries, decisions and action items from meeting notes."""

__version__ = "0.1.0"

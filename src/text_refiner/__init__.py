"""Rewrite text in a chosen tone, or convert Banglish to English, with Claude."""

__version__ = "0.1.0"

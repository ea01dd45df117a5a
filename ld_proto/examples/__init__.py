"""Runnable examples for the language detection service."""

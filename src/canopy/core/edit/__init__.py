"""Inline label edit sessions."""

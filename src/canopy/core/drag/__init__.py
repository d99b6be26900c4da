"""Drag-and-drop move validation."""

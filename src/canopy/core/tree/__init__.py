"""Visible-order navigation and outline rendering."""

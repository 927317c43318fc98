"""Editing engine: navigation, overlay, patch parsing, dump, commit."""

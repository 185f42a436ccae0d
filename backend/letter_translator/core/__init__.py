"""Core pipeline, page handling and export logic."""

"""Utility modules for the letter translator backend."""

from .text import safe_truncate, preview_text
from .files import export_filename, resolve_upload_mime_type

__all__ = ["safe_truncate", "preview_text", "export_filename", "resolve_upload_mime_type"]

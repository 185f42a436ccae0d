"""Export module for generating letter PDFs."""

from .pdf_generator import PDFExporter, ExportDocument, ExportArtifact, DEFAULT_ATTRIBUTION

__all__ = [
    "PDFExporter",
    "ExportDocument",
    "ExportArtifact",
    "DEFAULT_ATTRIBUTION",
]

"""Tests for PDF export."""

from datetime import date
from pathlib import Path

import pytest
import reportlab

from letter_translator.core.errors import ExportError
from letter_translator.core.export import PDFExporter, pdf_generator
from letter_translator.core.pages import PageSet
from letter_translator.core.translation import HeaderInfo, TranslationResult
from letter_translator.utils.files import export_filename

from conftest import make_image_bytes

EXPORT_DATE = date(2024, 9, 11)


@pytest.fixture
def result():
    return TranslationResult(
        native_script="ሰላም",
        translation="Hello dear sponsor.",
        cultural_context="Written after Enkutatash.",
        header_info=HeaderInfo(child_name="Abebe", child_id="AB#1/2", written_by="child"),
    )


@pytest.fixture
def pages():
    page_set = PageSet()
    page_set.add(make_image_bytes(40, 60, fmt="JPEG"), "image/jpeg")
    page_set.add(make_image_bytes(60, 40), "image/png", rotation=90)
    return page_set


class TestExportFilename:
    """Tests for export file names."""

    def test_sanitized(self):
        assert export_filename("AB#1/2") == "Letter_AB_1_2.pdf"

    def test_allowed_characters_kept(self):
        assert export_filename("ET-012_a.b") == "Letter_ET-012_a.b.pdf"

    def test_default(self):
        assert export_filename(None) == "Letter_Translation.pdf"
        assert export_filename("  ") == "Letter_Translation.pdf"


class TestPDFExporter:
    """Tests for PDFExporter."""

    def test_export(self, pages, result):
        artifact = PDFExporter().export(pages, result, "Edited translation.", export_date=EXPORT_DATE)

        assert artifact.filename == "Letter_AB_1_2.pdf"
        assert artifact.media_type == "application/pdf"
        assert artifact.content.startswith(b"%PDF")
        # Two image pages plus the text page
        assert b"/Count 3" in artifact.content

    def test_explicit_document_id(self, pages, result):
        artifact = PDFExporter().export(pages, result, "t", document_id="X 9", export_date=EXPORT_DATE)
        assert artifact.filename == "Letter_X_9.pdf"

    def test_no_id(self, pages):
        artifact = PDFExporter().export(pages, TranslationResult(), "t", export_date=EXPORT_DATE)
        assert artifact.filename == "Letter_Translation.pdf"

    def test_reproducible(self, pages, result):
        exporter = PDFExporter()
        first = exporter.export(pages, result, "Same text.\n\nSecond paragraph.", export_date=EXPORT_DATE)
        second = exporter.export(pages, result, "Same text.\n\nSecond paragraph.", export_date=EXPORT_DATE)
        assert first.content == second.content

    def test_edited_text_changes_output(self, pages, result):
        exporter = PDFExporter()
        first = exporter.export(pages, result, "One.", export_date=EXPORT_DATE)
        second = exporter.export(pages, result, "Two.", export_date=EXPORT_DATE)
        assert first.content != second.content

    def test_undecodable_page(self, result):
        page_set = PageSet()
        page_set.add(make_image_bytes(), "image/png")
        page_set.add(b"broken", "image/jpeg")

        with pytest.raises(ExportError, match="Page 2"):
            PDFExporter().export(page_set, result, "text", export_date=EXPORT_DATE)

    def test_text_with_markup_characters(self, pages, result):
        artifact = PDFExporter().export(pages, result, "5 < 6 & <b>bold?</b>", export_date=EXPORT_DATE)
        assert artifact.content.startswith(b"%PDF")

    def test_logo(self, tmp_path, pages, result):
        logo = tmp_path / "logo.png"
        logo.write_bytes(make_image_bytes(30, 30))
        artifact = PDFExporter(logo_path=logo).export(pages, result, "t", export_date=EXPORT_DATE)
        assert artifact.content.startswith(b"%PDF")

    def test_bad_logo(self, tmp_path, pages, result):
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"not a logo")
        with pytest.raises(ExportError):
            PDFExporter(logo_path=logo).export(pages, result, "t", export_date=EXPORT_DATE)

    def test_rotation_changes_output(self, pages, result):
        exporter = PDFExporter()
        before = exporter.export(pages, result, "t", export_date=EXPORT_DATE)
        pages.rotate(pages[0].id)
        after = exporter.export(pages, result, "t", export_date=EXPORT_DATE)
        assert before.content != after.content

    def test_unicode_font_is_embedded(self, pages, result):
        font_path = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"
        exporter = PDFExporter(font_path=font_path)
        result = result.model_copy(update={
            "header_info": HeaderInfo(child_name="ሰላም", child_id="ET-1", written_by="தாய்"),
        })

        artifact = exporter.export(pages, result, "నమస్కారం", export_date=EXPORT_DATE)

        assert exporter.font_name == "Letter-Vera"
        assert exporter.bold_font_name == "Letter-Vera"
        # TrueType fonts are embedded, the standard Helvetica is not
        assert b"/FontFile2" in artifact.content

    def test_missing_font_falls_back_to_helvetica(self, monkeypatch, tmp_path, pages, result):
        monkeypatch.setattr(pdf_generator, "SYSTEM_FONT_CANDIDATES", ())
        exporter = PDFExporter(font_path=tmp_path / "missing.ttf")

        artifact = exporter.export(pages, result, "t", export_date=EXPORT_DATE)

        assert exporter.font_name == "Helvetica"
        assert exporter.bold_font_name == "Helvetica-Bold"
        assert artifact.content.startswith(b"%PDF")
        assert b"/FontFile2" not in artifact.content

"""PDF generator for translated letters.

Builds a single PDF with one page per scanned letter image, followed by a
text page carrying the (user-edited) English translation, using ReportLab.
"""

import logging
import os
import re
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
from xml.sax.saxutils import escape

from pydantic import BaseModel, Field
from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import LETTER, landscape, portrait
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    Image,
    NextPageTemplate,
    PageBreak,
    PageTemplate,
    Paragraph,
    Spacer,
)
from reportlab.platypus.doctemplate import LayoutError

from ..errors import ExportError, ProcessingError
from ..pages.models import EncodedPage, PageImage, PageSet
from ..pages.preprocessor import decode_image, rotate_bytes
from ..translation.models.result import TranslationResult
from ...utils.files import export_filename

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTION = "Translated with Letter Translator"
MARGIN = 1.5 * cm
LOGO_SIZE = 2.5 * cm

FALLBACK_FONT = "Helvetica"
FALLBACK_BOLD_FONT = "Helvetica-Bold"

# Single-file TrueType fonts covering Latin plus Ge'ez and/or Indic scripts
SYSTEM_FONT_CANDIDATES = (
    # GNU FreeFont (Ethiopic, Tamil, Telugu)
    "/usr/share/fonts/truetype/freefont/FreeSerif.ttf",
    "/usr/share/fonts/gnu-free/FreeSerif.ttf",
    # macOS
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    # Windows - Ebrima (Ethiopic), Nirmala UI (Indic)
    "C:/Windows/Fonts/ebrima.ttf",
    "C:/Windows/Fonts/Nirmala.ttf",
    # Linux - Latin-only fallback with wide symbol coverage
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
)


class ExportDocument(BaseModel):
    """Everything needed to render one export. Transient."""

    pages: List[PageImage] = Field(default_factory=list)
    result: TranslationResult
    translation: str = ""
    document_id: Optional[str] = None
    export_date: date = Field(default_factory=date.today)


class ExportArtifact(BaseModel):
    """A rendered PDF and the filename it should be downloaded as."""

    filename: str
    content: bytes
    media_type: str = "application/pdf"


class PDFExporter:
    """Generate letter PDFs using ReportLab.

    Output is byte-for-byte reproducible for equal inputs: the document is
    written in ReportLab's invariant mode and the date is always explicit.

    Header names and the translation may contain native-script text, so all
    text is set in a registered Unicode TrueType font when one is available.
    """

    # Font file path -> registered font name, shared across instances
    _registered_fonts: Dict[str, str] = {}

    def __init__(
        self,
        logo_path: Optional[Union[str, Path]] = None,
        attribution: str = DEFAULT_ATTRIBUTION,
        page_size=LETTER,
        font_path: Optional[Union[str, Path]] = None,
    ):
        self.logo_path = Path(logo_path) if logo_path else None
        self.attribution = attribution
        self.page_size = portrait(page_size)
        self.font_name = self._register_font(font_path)
        self.bold_font_name = FALLBACK_BOLD_FONT if self.font_name == FALLBACK_FONT else self.font_name

    @classmethod
    def _register_font(cls, font_path: Optional[Union[str, Path]] = None) -> str:
        """Register a Unicode TrueType font and return its name.

        Priority order:
        1. The configured font file
        2. System fonts covering the letter scripts
        3. Helvetica (Latin only)
        """
        candidates = []
        if font_path:
            if os.path.exists(font_path):
                candidates.append(str(font_path))
            else:
                logger.warning(f"Export font not found: {font_path}")
        candidates.extend(SYSTEM_FONT_CANDIDATES)

        for path in candidates:
            if path in cls._registered_fonts:
                return cls._registered_fonts[path]
            if not os.path.exists(path):
                continue
            name = "Letter-" + re.sub(r"[^A-Za-z0-9]", "", Path(path).stem)
            try:
                pdfmetrics.registerFont(TTFont(name, path))
            except TTFError as e:
                logger.debug(f"Failed to register {path}: {e}")
                continue
            cls._registered_fonts[path] = name
            logger.info(f"Registered export font: {path}")
            return name

        logger.warning("No Unicode font available, non-Latin text may not render correctly")
        return FALLBACK_FONT

    def export(
        self,
        pages: Union[PageSet, Iterable[PageImage]],
        result: TranslationResult,
        edited_translation: str,
        document_id: Optional[str] = None,
        export_date: Optional[date] = None,
    ) -> ExportArtifact:
        """Render a letter and its translation to PDF.

        Args:
            pages: Page set (or pages) to include, in document order
            result: Translation result the export is based on
            edited_translation: Translation text as edited by the user
            document_id: Identifier for the header and filename; defaults
                to the child ID read from the letter
            export_date: Date printed in the footer; defaults to today

        Returns:
            ExportArtifact with the PDF bytes and sanitized filename

        Raises:
            ExportError: If any image cannot be decoded; nothing is rendered
        """
        if isinstance(pages, PageSet):
            pages = pages.snapshot().pages
        document = ExportDocument(
            pages=sorted(pages, key=lambda p: p.order),
            result=result,
            translation=edited_translation or "",
            document_id=document_id or result.header_info.child_id,
            export_date=export_date or date.today(),
        )
        content = self.render(document)
        filename = export_filename(document.document_id)
        logger.info(f"Exported {filename}: pages={len(document.pages)}, bytes={len(content)}")
        return ExportArtifact(filename=filename, content=content)

    def render(self, document: ExportDocument) -> bytes:
        """Render an export document to PDF bytes."""
        images = self._prepare_images(document.pages)
        logo = self._load_logo()

        output = BytesIO()
        doc = BaseDocTemplate(
            output,
            pagesize=self.page_size,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=export_filename(document.document_id),
            creator="Letter Translator",
            invariant=1,
        )

        templates = self._create_templates(doc, document)
        # The first template in the list is used for the first page
        first = self._template_for(images[0]) if images else "text"
        templates.sort(key=lambda t: t.id != first)
        doc.addPageTemplates(templates)

        styles = self._create_styles()
        story = []

        for index, image in enumerate(images):
            template_id = self._template_for(image)
            if index > 0:
                story.append(NextPageTemplate(template_id))
                story.append(PageBreak())
            frame_width, frame_height = self._frame_size(template_id)
            scale = min(frame_width / image.width, frame_height / image.height)
            story.append(Image(BytesIO(image.data), width=image.width * scale, height=image.height * scale))

        if images:
            story.append(NextPageTemplate("text"))
            story.append(PageBreak())
        self._render_text_page(story, document, styles, logo)

        try:
            doc.build(story)
        except LayoutError as e:
            raise ExportError(f"Could not lay out PDF: {e}") from e

        return output.getvalue()

    def _prepare_images(self, pages: List[PageImage]) -> List[EncodedPage]:
        """Decode and rotate every page before any PDF output starts."""
        images = []
        for page in pages:
            try:
                images.append(rotate_bytes(page.data, page.mime_type, page.rotation))
            except ProcessingError as e:
                logger.warning(f"Export aborted, page {page.order + 1} unreadable: {e.message}")
                raise ExportError(f"Page {page.order + 1} could not be decoded: {e.message}") from e
        return images

    def _load_logo(self) -> Optional[bytes]:
        if not self.logo_path:
            return None
        if not self.logo_path.is_file():
            logger.warning(f"Export logo not found: {self.logo_path}")
            return None
        data = self.logo_path.read_bytes()
        try:
            decode_image(data)
        except ProcessingError as e:
            raise ExportError(f"Export logo could not be decoded: {e.message}") from e
        return data

    @staticmethod
    def _template_for(image: EncodedPage) -> str:
        return "landscape" if image.width > image.height else "portrait"

    def _frame_size(self, template_id: str):
        if template_id == "landscape":
            width, height = landscape(self.page_size)
        else:
            width, height = self.page_size
        return width - 2 * MARGIN, height - 2 * MARGIN

    def _create_templates(self, doc: BaseDocTemplate, document: ExportDocument) -> List[PageTemplate]:
        templates = []
        for template_id, pagesize in (
            ("portrait", self.page_size),
            ("landscape", landscape(self.page_size)),
        ):
            frame = Frame(
                MARGIN, MARGIN,
                pagesize[0] - 2 * MARGIN, pagesize[1] - 2 * MARGIN,
                leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0,
                id=f"{template_id}_frame",
            )
            templates.append(PageTemplate(id=template_id, frames=frame, pagesize=pagesize))

        # Text page leaves room for the footer
        text_frame = Frame(
            doc.leftMargin, doc.bottomMargin + 1 * cm,
            doc.width, doc.height - 1 * cm,
            id="text_frame",
        )

        def add_footer(canvas, doc):
            self._add_footer(canvas, doc, document.export_date)

        templates.append(PageTemplate(id="text", frames=text_frame, pagesize=self.page_size, onPage=add_footer))
        return templates

    def _create_styles(self):
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(
            name="LetterHeader",
            parent=styles["Heading2"],
            fontName=self.bold_font_name,
            fontSize=14,
            spaceAfter=4,
        ))

        styles.add(ParagraphStyle(
            name="LetterMeta",
            parent=styles["Normal"],
            fontName=self.font_name,
            fontSize=10,
            textColor=Color(0.3, 0.3, 0.3),
            spaceAfter=2,
        ))

        styles.add(ParagraphStyle(
            name="TranslationBody",
            parent=styles["Normal"],
            fontName=self.font_name,
            fontSize=11,
            leading=16,
            spaceBefore=4,
            spaceAfter=4,
        ))

        return styles

    def _render_text_page(self, story, document: ExportDocument, styles, logo: Optional[bytes]):
        if logo:
            story.append(Image(BytesIO(logo), width=LOGO_SIZE, height=LOGO_SIZE, kind="proportional"))
            story.append(Spacer(1, 0.3 * cm))

        header = f"ID: {document.document_id}" if document.document_id else "Letter Translation"
        story.append(Paragraph(escape(header), styles["LetterHeader"]))

        header_info = document.result.header_info
        if header_info.child_name:
            story.append(Paragraph(escape(f"Child: {header_info.child_name}"), styles["LetterMeta"]))
        if header_info.written_by:
            story.append(Paragraph(escape(f"Written by: {header_info.written_by}"), styles["LetterMeta"]))
        story.append(Spacer(1, 0.5 * cm))

        for paragraph in document.translation.split("\n\n"):
            if paragraph.strip():
                text = escape(paragraph.strip()).replace("\n", "<br/>")
                story.append(Paragraph(text, styles["TranslationBody"]))

    def _add_footer(self, canvas, doc, export_date: date):
        """Add attribution and date to footer."""
        canvas.saveState()
        canvas.setFont(self.font_name, 9)
        canvas.setFillColor(Color(0.4, 0.4, 0.4))
        canvas.drawString(doc.leftMargin, 1 * cm, self.attribution)
        canvas.drawRightString(
            doc.pagesize[0] - doc.rightMargin, 1 * cm, export_date.strftime("%B %d, %Y")
        )
        canvas.restoreState()

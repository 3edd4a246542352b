"""
Document Builder Module - Assembles processed text into a styled Word document.

Every document gets the same layout regardless of the source formatting:
- Times New Roman, 12pt body, double line spacing
- 1-inch margins on all sides
- Centered 14pt bold title naming the requested style
- Justified body paragraphs
"""

import io
import re
from typing import List, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Inches, Pt
from loguru import logger

from .config import config

BLANK_LINE_PATTERN = re.compile(r'\n\s*\n')

# Space after paragraphs: 12pt for body, 24pt for title
BODY_SPACE_AFTER_PT = 12
TITLE_SPACE_AFTER_PT = 24


def split_paragraphs(text: str) -> List[str]:
    """
    Split text into paragraphs on blank lines.

    When the text has no blank-line boundaries (a single paragraph results),
    falls back to splitting on single newlines. Blank paragraphs are dropped.
    """
    paragraphs = [p.strip() for p in BLANK_LINE_PATTERN.split(text) if p.strip()]

    if len(paragraphs) == 1:
        paragraphs = [p.strip() for p in text.split('\n') if p.strip()]
        logger.debug(f"Re-split into {len(paragraphs)} single-line paragraphs")

    return paragraphs


def document_title(style: str) -> str:
    return f"Document Formatted in {style.upper()} Style"


class DocumentBuilder:
    """Builds python-docx documents with a fixed academic layout."""

    def __init__(
        self,
        style: Optional[str] = None,
        font_name: Optional[str] = None,
        body_size: Optional[int] = None,
        title_size: Optional[int] = None,
        line_spacing: Optional[float] = None,
        margin_inches: Optional[float] = None,
    ):
        self.style = style or config.DEFAULT_STYLE
        self.font_name = font_name or config.DOCUMENT_FONT
        self.body_size = body_size or config.BODY_FONT_SIZE
        self.title_size = title_size or config.TITLE_FONT_SIZE
        self.line_spacing = line_spacing or config.LINE_SPACING
        self.margin_inches = config.MARGIN_INCHES if margin_inches is None else margin_inches

    def build(self, text: str) -> Document:
        """Create the document: title paragraph followed by one paragraph per text block."""
        logger.info(f"Creating document with {self.style} style...")
        doc = Document()
        self._apply_default_style(doc)
        self._apply_margins(doc)

        self._add_title(doc, document_title(self.style))

        paragraphs = split_paragraphs(text)
        logger.info(f"Split text into {len(paragraphs)} paragraphs")
        for paragraph_text in paragraphs:
            self._add_body_paragraph(doc, paragraph_text)

        logger.info("Document creation complete")
        return doc

    def to_bytes(self, text: str) -> bytes:
        """Build the document and serialize it to .docx bytes."""
        buffer = io.BytesIO()
        self.build(text).save(buffer)
        data = buffer.getvalue()
        logger.info(f"Generated buffer size: {len(data)} bytes")
        return data

    def _apply_default_style(self, doc: Document) -> None:
        normal = doc.styles['Normal']
        normal.font.name = self.font_name
        normal.font.size = Pt(self.body_size)
        # East Asian font slot, otherwise Word substitutes its own default
        normal.element.rPr.rFonts.set(qn('w:eastAsia'), self.font_name)
        normal.paragraph_format.line_spacing = self.line_spacing

    def _apply_margins(self, doc: Document) -> None:
        for section in doc.sections:
            section.top_margin = Inches(self.margin_inches)
            section.bottom_margin = Inches(self.margin_inches)
            section.left_margin = Inches(self.margin_inches)
            section.right_margin = Inches(self.margin_inches)

    def _add_title(self, doc: Document, title: str) -> None:
        heading = doc.add_heading(level=0)
        run = heading.add_run(title)
        run.font.name = self.font_name
        run.font.size = Pt(self.title_size)
        run.bold = True
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
        heading.paragraph_format.line_spacing = self.line_spacing
        heading.paragraph_format.space_after = Pt(TITLE_SPACE_AFTER_PT)

    def _add_body_paragraph(self, doc: Document, text: str) -> None:
        paragraph = doc.add_paragraph()
        run = paragraph.add_run(text)
        run.font.name = self.font_name
        run.font.size = Pt(self.body_size)
        paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        paragraph.paragraph_format.line_spacing = self.line_spacing
        paragraph.paragraph_format.space_after = Pt(BODY_SPACE_AFTER_PT)


def build_formatted_document(text: str, style: Optional[str] = None) -> bytes:
    """
    Convenience function to build a formatted .docx from processed text.

    Args:
        text: Processed document text
        style: Label for the title line

    Returns:
        The .docx file as bytes
    """
    return DocumentBuilder(style=style).to_bytes(text)

"""Tests for the Document Builder module."""

import io

import pytest
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt

from formatgenius.document_builder import (
    DocumentBuilder,
    build_formatted_document,
    document_title,
    split_paragraphs,
)


class TestSplitParagraphs:
    """Paragraph splitting on blank-line and newline boundaries."""

    def test_blank_line_boundaries(self):
        assert split_paragraphs("First para.\n\nSecond para.") == ["First para.", "Second para."]

    def test_blank_line_with_whitespace(self):
        assert split_paragraphs("A\n  \nB") == ["A", "B"]

    def test_lines_kept_together_within_paragraph(self):
        assert split_paragraphs("A\n\nB\nC") == ["A", "B\nC"]

    def test_falls_back_to_single_newlines(self):
        assert split_paragraphs("Line one\nLine two\nLine three") == [
            "Line one", "Line two", "Line three",
        ]

    def test_drops_blank_paragraphs(self):
        assert split_paragraphs("\n\nA\n\n\n\nB\n\n") == ["A", "B"]

    def test_empty_text(self):
        assert split_paragraphs("") == []
        assert split_paragraphs("   \n\n  ") == []


class TestDocumentBuilder:
    """Test suite for DocumentBuilder."""

    @pytest.fixture
    def builder(self):
        return DocumentBuilder(style="harvard")

    def test_title_paragraph(self, builder):
        doc = builder.build("Body text.")
        title = doc.paragraphs[0]

        assert title.text == "Document Formatted in HARVARD Style"
        assert title.alignment == WD_ALIGN_PARAGRAPH.CENTER
        assert title.runs[0].bold is True
        assert title.runs[0].font.size == Pt(14)
        assert title.runs[0].font.name == "Times New Roman"

    def test_body_paragraphs(self, builder):
        doc = builder.build("First para.\n\nSecond para.")
        body = doc.paragraphs[1:]

        assert [p.text for p in body] == ["First para.", "Second para."]
        for paragraph in body:
            assert paragraph.alignment == WD_ALIGN_PARAGRAPH.JUSTIFY
            assert paragraph.paragraph_format.line_spacing == 2.0
            assert paragraph.paragraph_format.space_after == Pt(12)
            assert paragraph.runs[0].font.name == "Times New Roman"
            assert paragraph.runs[0].font.size == Pt(12)

    def test_default_style(self, builder):
        doc = builder.build("Body")
        normal = doc.styles['Normal']
        assert normal.font.name == "Times New Roman"
        assert normal.font.size == Pt(12)
        assert normal.paragraph_format.line_spacing == 2.0

    def test_margins(self, builder):
        doc = builder.build("Body")
        for section in doc.sections:
            assert section.top_margin == Inches(1)
            assert section.bottom_margin == Inches(1)
            assert section.left_margin == Inches(1)
            assert section.right_margin == Inches(1)

    def test_empty_text_has_only_title(self, builder):
        doc = builder.build("")
        assert len(doc.paragraphs) == 1

    def test_to_bytes_round_trip(self, builder):
        data = builder.to_bytes("Alpha\n\nBeta")
        doc = Document(io.BytesIO(data))
        assert [p.text for p in doc.paragraphs] == [
            "Document Formatted in HARVARD Style", "Alpha", "Beta",
        ]

    def test_custom_settings(self):
        builder = DocumentBuilder(style="apa", font_name="Arial", body_size=11, margin_inches=0.5)
        doc = builder.build("Text")
        assert doc.paragraphs[0].text == "Document Formatted in APA Style"
        assert doc.paragraphs[1].runs[0].font.name == "Arial"
        assert doc.paragraphs[1].runs[0].font.size == Pt(11)
        assert doc.sections[0].left_margin == Inches(0.5)


class TestConvenienceFunctions:

    def test_document_title(self):
        assert document_title("mla") == "Document Formatted in MLA Style"

    def test_build_formatted_document(self):
        data = build_formatted_document("Hello", style="harvard")
        doc = Document(io.BytesIO(data))
        assert doc.paragraphs[1].text == "Hello"

"""Tests for the Text Extractor and File Handler modules."""

import pytest
from docx import Document

from formatgenius.errors import DocumentExtractionError
from formatgenius.file_handler import FileHandler
from formatgenius.text_extractor import extract_text


def _make_docx(path, paragraphs):
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    doc.save(str(path))
    return path


class TestExtractText:
    """Extraction from files on disk."""

    def test_docx_paragraphs_joined_by_newlines(self, tmp_path):
        path = _make_docx(tmp_path / "paper.docx", ["Hello", "", "World"])
        assert extract_text(path) == "Hello\n\nWorld"

    def test_text_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("Plain (Smith 2020) text", encoding="utf-8")
        assert extract_text(path) == "Plain (Smith 2020) text"

    def test_markdown_file(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# Title\n\nBody", encoding="utf-8")
        assert extract_text(str(path)) == "# Title\n\nBody"

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "paper.pdf"
        path.write_bytes(b"%PDF-1.4")
        with pytest.raises(DocumentExtractionError):
            extract_text(path)

    def test_corrupt_docx(self, tmp_path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip archive")
        with pytest.raises(DocumentExtractionError):
            extract_text(path)


class TestExtractTextEdgeCases:
    """Encoding and naming problems in input files."""

    def test_utf8_text(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes("café".encode("utf-8"))
        assert extract_text(path) == "café"

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(DocumentExtractionError):
            extract_text(path)

    def test_missing_extension(self, tmp_path):
        path = tmp_path / "upload"
        path.write_bytes(b"data")
        with pytest.raises(DocumentExtractionError):
            extract_text(path)

    def test_uppercase_docx_extension(self, tmp_path):
        path = _make_docx(tmp_path / "PAPER.DOCX", ["One", "Two"])
        assert extract_text(path) == "One\nTwo"


class TestFileHandler:
    """Test suite for FileHandler."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileHandler(str(tmp_path / "missing.docx"))

    def test_read_text(self, tmp_path):
        path = _make_docx(tmp_path / "paper.docx", ["Body"])
        handler = FileHandler(str(path))
        assert handler.read_text() == "Body"
        assert handler.original_content == "Body"

    def test_default_output_paths(self, tmp_path):
        path = _make_docx(tmp_path / "paper.docx", ["Body"])
        handler = FileHandler(str(path))
        assert handler.get_output_path() == tmp_path.resolve() / "paper_formatted.docx"
        assert handler.get_output_path(suffix=".txt") == tmp_path.resolve() / "paper_formatted.txt"

    def test_write_document_and_text(self, tmp_path):
        path = _make_docx(tmp_path / "paper.docx", ["Body"])
        handler = FileHandler(str(path))

        doc_path = handler.write_document(b"bytes")
        text_path = handler.write_text("processed")

        assert doc_path.read_bytes() == b"bytes"
        assert text_path.read_text(encoding="utf-8") == "processed"

    def test_explicit_output_path(self, tmp_path):
        path = _make_docx(tmp_path / "paper.docx", ["Body"])
        handler = FileHandler(str(path))
        out = handler.write_text("x", str(tmp_path / "custom.txt"))
        assert out.name == "custom.txt"

    def test_file_info(self, tmp_path):
        path = _make_docx(tmp_path / "paper.docx", ["Body"])
        info = FileHandler(str(path)).get_file_info()
        assert info['name'] == "paper.docx"
        assert info['size_bytes'] > 0

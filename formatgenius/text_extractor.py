"""Text Extractor Module - Pulls plain text out of uploaded documents."""

import zipfile
from pathlib import Path
from typing import Union

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from loguru import logger

from .errors import DocumentExtractionError

DOCX_EXTENSIONS = ('.docx',)
TEXT_EXTENSIONS = ('.txt', '.md')
SUPPORTED_EXTENSIONS = DOCX_EXTENSIONS + TEXT_EXTENSIONS


def _docx_to_text(source: str) -> str:
    """
    Join paragraph texts with newlines.

    Empty paragraphs become empty lines, so blank-line boundaries in the
    output follow the blank paragraphs of the document.
    """
    try:
        doc = Document(source)
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise DocumentExtractionError(f"Could not read Word document: {e}") from e
    return '\n'.join(paragraph.text for paragraph in doc.paragraphs)


def extract_text(path: Union[str, Path]) -> str:
    """
    Extract plain text from a .docx, .txt or .md file.

    Raises:
        DocumentExtractionError: Unsupported extension or unreadable document
    """
    path = Path(path)
    suffix = path.suffix.lower()
    logger.info(f"Extracting text from {path.name}")

    if suffix in DOCX_EXTENSIONS:
        text = _docx_to_text(str(path))
    elif suffix in TEXT_EXTENSIONS:
        try:
            text = path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise DocumentExtractionError(f"File is not valid UTF-8 text: {path.name}") from e
    else:
        raise DocumentExtractionError(
            f"Unsupported file type '{suffix or path.name}'. "
            f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
        )

    logger.info(f"Extracted text length: {len(text)} characters")
    return text

"""File Handler Module - Handles file I/O operations."""

from datetime import datetime
from pathlib import Path
from typing import Optional
from loguru import logger

from .text_extractor import extract_text


class FileHandler:
    """Handles all file operations for FormatGenius."""

    def __init__(self, input_path: str):
        self.input_path = Path(input_path).resolve()
        self.original_content: Optional[str] = None
        if not self.input_path.exists():
            raise FileNotFoundError(f"File not found: {self.input_path}")

    def read_text(self) -> str:
        """Extract the plain text of the input document."""
        logger.info(f"Reading: {self.input_path}")
        self.original_content = extract_text(self.input_path)
        logger.info(f"Read {len(self.original_content)} characters")
        return self.original_content

    def get_output_path(self, output_path: Optional[str] = None, suffix: str = '.docx') -> Path:
        """Determine the output file path."""
        if output_path:
            return Path(output_path).resolve()
        return self.input_path.parent / f"{self.input_path.stem}_formatted{suffix}"

    def write_document(self, data: bytes, output_path: Optional[str] = None) -> Path:
        """Write a generated .docx to the output path."""
        out_path = self.get_output_path(output_path, suffix='.docx')
        logger.info(f"Writing to: {out_path}")
        with open(out_path, 'wb') as f:
            f.write(data)
        logger.info(f"Wrote {len(data)} bytes")
        return out_path

    def write_text(self, content: str, output_path: Optional[str] = None) -> Path:
        """Write processed plain text to the output path."""
        out_path = self.get_output_path(output_path, suffix='.txt')
        logger.info(f"Writing to: {out_path}")
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.info(f"Wrote {len(content)} characters")
        return out_path

    def get_file_info(self) -> dict:
        """Get input file metadata."""
        stat = self.input_path.stat()
        return {
            'path': str(self.input_path),
            'name': self.input_path.name,
            'size_bytes': stat.st_size,
            'modified': datetime.fromtimestamp(stat.st_mtime).isoformat(),
        }

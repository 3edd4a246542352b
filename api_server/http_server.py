#!/usr/bin/env python3
"""
FormatGenius HTTP API Server

Accepts documents, normalizes their citations to Harvard style and returns a
re-typeset Word document:
- POST /api/format   base64 document in, formatted .docx out
- POST /api/process  plain text in, processed text and summary out
- GET  /api/health   liveness check
- GET  /api/logs     recent log lines

Uploads are JSON, not multipart form data. A frontend that posted a
FormData ``file``/``style`` pair must send this body instead:

    {"file_base64": "<base64 document>", "filename": "paper.docx", "style": "harvard"}

``filename`` picks the extractor by extension; ``style`` only labels the
title line and the download name.

Usage:
    python -m api_server.http_server [--port 3001]
"""

import sys
import json
import re
import base64
import binascii
import argparse
import mimetypes
import tempfile
import os
from pathlib import Path
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from urllib.parse import urlparse, parse_qs
from typing import Any, Dict, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from formatgenius.config import config, VERSION
from formatgenius.document_builder import DocumentBuilder
from formatgenius.errors import DocumentExtractionError, UploadError
from formatgenius.logging_setup import init_from_config, get_recent_logs, log_document_operation
from formatgenius.pipeline import CitationPipeline
from formatgenius.text_extractor import extract_text

DOCX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'

STYLE_SAFE_PATTERN = re.compile(r'[^A-Za-z0-9_-]+')


def safe_style_name(style: Optional[str]) -> str:
    """Reduce a user-supplied style label to characters safe for a filename."""
    cleaned = STYLE_SAFE_PATTERN.sub('', style or '')
    return cleaned or config.DEFAULT_STYLE


class FormatHTTPHandler(BaseHTTPRequestHandler):
    """HTTP request handler for document formatting."""

    # Class-level singletons, set by run_server (or tests)
    pipeline: CitationPipeline = None
    upload_dir: Path = None
    public_dir: Path = None
    max_upload_bytes: int = None

    def log_message(self, format: str, *args) -> None:
        """Route request logging through loguru."""
        logger.debug(f"{self.address_string()} - {format % args}")

    def _cors_headers(self):
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')

    def _send_json(self, data: Dict[str, Any], status: int = 200):
        """Send JSON response."""
        body = json.dumps(data, default=str).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self._cors_headers()
        self.end_headers()
        self.wfile.write(body)

    def _send_bytes(self, data: bytes, content_type: str, filename: Optional[str] = None):
        """Send a binary response with optional download filename."""
        self.send_response(200)
        self.send_header('Content-Type', content_type)
        self.send_header('Content-Length', str(len(data)))
        self._cors_headers()
        if filename:
            self.send_header('Content-Disposition', f'attachment; filename={filename}')
        self.end_headers()
        self.wfile.write(data)

    def _send_file(self, filepath: Path):
        """Send a static file."""
        if not filepath.exists() or not filepath.is_file():
            self._send_json({'error': 'Not found'}, 404)
            return

        content_type, _ = mimetypes.guess_type(str(filepath))
        if content_type is None:
            content_type = 'application/octet-stream'

        with open(filepath, 'rb') as f:
            content = f.read()

        self.send_response(200)
        self.send_header('Content-Type', content_type)
        self.send_header('Content-Length', str(len(content)))
        self.send_header('Cache-Control', 'no-cache')
        self.end_headers()
        self.wfile.write(content)

    def _static_path(self, path: str) -> Optional[Path]:
        """Resolve a request path inside the public directory, or None if it escapes."""
        if self.public_dir is None:
            return None
        root = Path(self.public_dir).resolve()
        relative = path.lstrip('/') or 'index.html'
        candidate = (root / relative).resolve()
        if candidate != root and root not in candidate.parents:
            return None
        return candidate

    def _max_upload_bytes(self) -> int:
        return self.max_upload_bytes or config.max_upload_bytes

    def do_OPTIONS(self):
        """Handle CORS preflight."""
        self.send_response(200)
        self._cors_headers()
        self.send_header('Content-Length', '0')
        self.end_headers()

    def do_GET(self):
        """Handle GET requests."""
        parsed = urlparse(self.path)
        path = parsed.path
        query = parse_qs(parsed.query)

        if path == '/api/health':
            logger.info("Health check requested")
            self._send_json({
                'status': 'OK',
                'message': 'FormatGenius Lite backend is running',
                'version': VERSION,
            })
            return

        if path == '/api/logs':
            try:
                max_lines = int(query.get('lines', ['100'])[0])
            except ValueError:
                self._send_json({'error': 'lines must be an integer'}, 400)
                return
            log_type = query.get('type', ['main'])[0]
            self._send_json({
                'log_type': log_type,
                'content': get_recent_logs(max_lines=max_lines, log_type=log_type),
            })
            return

        if not path.startswith('/api/'):
            static_path = self._static_path(path)
            if static_path is not None and static_path.is_file():
                self._send_file(static_path)
                return

        self._send_json({'error': f'Unknown endpoint: {path}'}, 404)

    def do_POST(self):
        """Handle POST requests."""
        parsed = urlparse(self.path)
        path = parsed.path

        if path not in ('/api/format', '/api/process'):
            self._send_json({'error': f'Unknown endpoint: {path}'}, 404)
            return

        content_length = int(self.headers.get('Content-Length', 0) or 0)
        # base64 inflates uploads by 4/3; leave headroom for the JSON envelope
        if content_length > self._max_upload_bytes() * 2:
            self.close_connection = True
            self._send_json({'error': 'Uploaded file is too large'}, 413)
            return

        body = self.rfile.read(content_length).decode('utf-8') if content_length > 0 else '{}'
        try:
            data = json.loads(body) if body else {}
        except json.JSONDecodeError:
            self._send_json({'error': 'Invalid JSON'}, 400)
            return
        if not isinstance(data, dict):
            self._send_json({'error': 'Request body must be a JSON object'}, 400)
            return

        if path == '/api/format':
            self._handle_format(data)
        else:
            self._handle_process(data)

    def _handle_process(self, data: Dict[str, Any]):
        text = data.get('text')
        if not isinstance(text, str):
            self._send_json({'error': 'Missing text field'}, 400)
            return

        result = self.pipeline.run(text)
        self._send_json({
            'success': True,
            'processed_text': result.processed_text,
            'summary': result.summary(),
        })

    def _handle_format(self, data: Dict[str, Any]):
        logger.info("Format request received")
        filename = data.get('filename') or 'document.docx'

        try:
            style, filename = self._upload_labels(data.get('style'), filename)
            file_bytes = self._decode_upload(data.get('file_base64'))
            log_document_operation('upload', filename, {'style': style, 'size_bytes': len(file_bytes)})

            text = self._extract_upload(file_bytes, filename)
            if not text.strip():
                raise DocumentExtractionError('Could not extract text from document')

            result = self.pipeline.run(text)
            document = DocumentBuilder(style=style).to_bytes(result.processed_text)
        except UploadError as e:
            log_document_operation('reject', filename, {'status': e.status, 'reason': str(e)})
            self._send_json({'error': str(e)}, e.status)
            return
        except DocumentExtractionError as e:
            log_document_operation('reject', filename, {'status': 400, 'reason': str(e)})
            self._send_json({'error': str(e)}, 400)
            return
        except Exception as e:
            logger.exception(f"Error formatting document {filename}")
            self._send_json({'error': f'Failed to format document: {e}'}, 500)
            return

        log_document_operation('format', filename, result.summary())
        self._send_bytes(document, DOCX_CONTENT_TYPE, filename=f'formatted-document-{style}.docx')
        logger.info("Document formatted and sent successfully")

    @staticmethod
    def _upload_labels(style: Any, filename: Any):
        if style is not None and not isinstance(style, str):
            raise UploadError('style must be a string', 400)
        if not isinstance(filename, str):
            raise UploadError('filename must be a string', 400)
        return safe_style_name(style), filename

    def _decode_upload(self, file_base64: Optional[str]) -> bytes:
        if not file_base64:
            raise UploadError('No file uploaded', 400)
        try:
            file_bytes = base64.b64decode(file_base64, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise UploadError(f'Invalid file_base64 field: {e}', 400) from e
        if len(file_bytes) > self._max_upload_bytes():
            raise UploadError('Uploaded file is too large', 413)
        return file_bytes

    def _extract_upload(self, file_bytes: bytes, filename: str) -> str:
        """Write the upload to a temp file, extract its text and remove the file."""
        upload_dir = Path(self.upload_dir or config.UPLOAD_DIR)
        upload_dir.mkdir(parents=True, exist_ok=True)
        suffix = Path(filename).suffix.lower()

        with tempfile.NamedTemporaryFile(dir=upload_dir, suffix=suffix, delete=False) as tmp:
            tmp.write(file_bytes)
            tmp_path = tmp.name

        try:
            logger.info(f"Processing file at: {tmp_path}")
            return extract_text(tmp_path)
        finally:
            os.unlink(tmp_path)
            logger.debug("Cleaned up temporary file")


def run_server(port: Optional[int] = None, host: Optional[str] = None):
    """Start the HTTP server."""
    init_from_config()
    port = port or config.SERVER_PORT
    host = host or config.SERVER_HOST
    logger.info(f"Starting FormatGenius HTTP Server v{VERSION}")

    upload_dir = Path(config.UPLOAD_DIR)
    public_dir = Path(config.PUBLIC_DIR)
    for directory in (upload_dir, public_dir):
        if not directory.exists():
            directory.mkdir(parents=True)
            logger.info(f"Created {directory} directory")

    FormatHTTPHandler.pipeline = CitationPipeline()
    FormatHTTPHandler.upload_dir = upload_dir
    FormatHTTPHandler.public_dir = public_dir
    FormatHTTPHandler.max_upload_bytes = config.max_upload_bytes

    server = ThreadingHTTPServer((host, port), FormatHTTPHandler)

    logger.info(f"FormatGenius Lite backend running on http://{host}:{port}")
    logger.info(f"Frontend available at http://{host}:{port}")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        server.shutdown()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='FormatGenius HTTP Server')
    parser.add_argument('--port', '-p', type=int, default=None,
                        help=f'Port to listen on (default: {config.SERVER_PORT})')
    parser.add_argument('--host', '-H', type=str, default=None,
                        help=f'Host to bind to (default: {config.SERVER_HOST})')
    args = parser.parse_args()

    run_server(port=args.port, host=args.host)

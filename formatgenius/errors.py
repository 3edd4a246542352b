"""Exceptions raised by the I/O collaborators around the citation pipeline."""


class FormatGeniusError(Exception):
    """Base class for FormatGenius errors."""


class DocumentExtractionError(FormatGeniusError):
    """Text could not be extracted from an input document."""


class UploadError(FormatGeniusError):
    """An uploaded document was missing, malformed or too large."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status

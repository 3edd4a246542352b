"""FormatGenius Modules"""

from .in_text_fixer import InTextCitationFixer, InTextFixResult, fix_in_text_citations
from .reference_list_fixer import (
    ReferenceListFixer,
    ReferenceFixResult,
    FormattedReference,
    ReferenceShape,
    fix_reference_list,
    format_single_reference,
)
from .url_replacer import UrlCitationReplacer, UrlReplacementResult, replace_urls_with_citations
from .pipeline import CitationPipeline, PipelineResult, process_text_for_citations
from .errors import FormatGeniusError, DocumentExtractionError, UploadError

__version__ = '1.0.0'

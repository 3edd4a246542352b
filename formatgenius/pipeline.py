"""
Citation Pipeline Module - Runs the three citation stages over document text.

    raw text → in-text fixer → reference-list fixer → URL replacer → processed text

Each stage is a pure text-to-text transformation. The pipeline holds no state
between runs, so one instance can serve concurrent requests.
"""

from dataclasses import dataclass
from typing import Dict
from loguru import logger

from .in_text_fixer import InTextCitationFixer, InTextFixResult
from .reference_list_fixer import ReferenceListFixer, ReferenceFixResult
from .url_replacer import UrlCitationReplacer, UrlReplacementResult


@dataclass
class PipelineResult:
    """Result of a full pipeline run, with the per-stage results."""
    original_text: str
    processed_text: str
    in_text: InTextFixResult
    reference_list: ReferenceFixResult
    urls: UrlReplacementResult

    @property
    def has_changes(self) -> bool:
        return self.processed_text != self.original_text

    def summary(self) -> Dict[str, object]:
        """Counts for logging and API responses."""
        return {
            'in_text_citations_fixed': self.in_text.changes_made,
            'reference_section_found': self.reference_list.section_found,
            'references_formatted': self.reference_list.reference_count,
            'reference_shapes': self.reference_list.count_by_shape(),
            'urls_replaced': self.urls.replacements_made,
            'fallback_sources': self.urls.fallback_count,
            'original_length': len(self.original_text),
            'processed_length': len(self.processed_text),
        }


class CitationPipeline:
    """Composes the in-text, reference-list and URL stages in fixed order."""

    def __init__(self):
        self.in_text_fixer = InTextCitationFixer()
        self.reference_fixer = ReferenceListFixer()
        self.url_replacer = UrlCitationReplacer()

    def run(self, text: str) -> PipelineResult:
        """
        Process document text for citations.

        Args:
            text: Full plain-text content of a document

        Returns:
            PipelineResult with the processed text and stage results
        """
        logger.info(f"Processing {len(text)} characters for citations")

        logger.debug("Fixing in-text citations...")
        in_text = self.in_text_fixer.fix(text)

        logger.debug("Fixing reference list...")
        reference_list = self.reference_fixer.fix(in_text.fixed_text)

        logger.debug("Replacing URLs with citations...")
        urls = self.url_replacer.replace(reference_list.fixed_text)

        result = PipelineResult(
            original_text=text,
            processed_text=urls.replaced_text,
            in_text=in_text,
            reference_list=reference_list,
            urls=urls,
        )
        logger.info(f"Citation processing complete: {result.summary()}")
        return result


def process_text_for_citations(text: str) -> str:
    """
    Convenience function to run the full citation pipeline.

    Args:
        text: Full plain-text content of a document

    Returns:
        Processed text ready for document assembly
    """
    return CitationPipeline().run(text).processed_text

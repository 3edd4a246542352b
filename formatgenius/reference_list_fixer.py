"""
Reference List Fixer Module - Rewrites a References/Bibliography block in Harvard style.

Locates the reference section of plain document text and reformats each entry
according to the first bibliographic shape it matches:

    Journal article:   Smith, J. (2020). Title. Journal, 5(2), 10-20.
                   →   Smith, J (2020) 'Title', *Journal*, 5(2), pp. 10-20.
    Conference paper:  Smith, J. (2020). Title. In Conf Name, Berlin.
                   →   Smith, J (2020) 'Title', in *Conf Name*, Berlin.
    Book:              Smith, J. (2020). Title. Publisher.
                   →   Smith, J (2020) *Title*. Publisher.

Entries matching none of the shapes only get light cleanup (ampersands,
doubled periods, whitespace). Text outside the reference block is untouched.
"""

import re
from enum import Enum
from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass, field
from loguru import logger

from .in_text_fixer import expand_ampersands


class ReferenceShape(Enum):
    """Bibliographic shapes recognized in a reference list."""
    JOURNAL_ARTICLE = "journal_article"
    CONFERENCE_PAPER = "conference_paper"
    BOOK = "book"
    UNCLASSIFIED = "unclassified"


@dataclass
class FormattedReference:
    """A single reference entry before and after formatting."""
    original: str
    formatted: str
    shape: ReferenceShape

    @property
    def changed(self) -> bool:
        return self.original != self.formatted


@dataclass
class ReferenceFixResult:
    """Result of reference list fixing."""
    original_text: str
    fixed_text: str
    section_found: bool
    heading: Optional[str] = None
    references: List[FormattedReference] = field(default_factory=list)

    @property
    def reference_count(self) -> int:
        return len(self.references)

    def count_by_shape(self) -> dict:
        """Number of entries per shape, keyed by shape value."""
        counts = {}
        for ref in self.references:
            counts[ref.shape.value] = counts.get(ref.shape.value, 0) + 1
        return counts


class ReferenceListFixer:
    """
    Finds the reference block and formats its entries.

    Entry shapes are tried in a fixed order (journal, conference, book) and the
    first full match wins; the patterns overlap, so the order is significant.
    """

    # Heading line (leading spaces allowed), then everything up to a blank line
    # followed by a capitalized line, a numbered line, an Appendix, or the end
    # of the text.
    SECTION_PATTERN = re.compile(
        r'(?:^|(?<=\n))[ \t]*((?i:references?|bibliography))\s*\n'
        r'([\s\S]*?)'
        r'(?=\n\n[A-Z]|\n\n[0-9]+\.|\n\nAppendix|\Z)'
    )

    # Authors. (Year). Title. Journal, Volume(Issue), Pages.
    JOURNAL_PATTERN = re.compile(
        r'([^.]+)\.\s*\(([0-9]{4}[a-z]?)\)\.\s*([^.]+)\.\s*'
        r'([^,]+),\s*([0-9]+)(?:\(([0-9]+)\))?,\s*([0-9]+[-–][0-9]+)\.?'
    )

    # Authors. (Year). Title. In|Proceedings of Conference, Location.
    # The conference name may contain periods (Proc., Int. Conf.) but no comma.
    CONFERENCE_PATTERN = re.compile(
        r'([^.]+)\.\s*\(([0-9]{4}[a-z]?)\)\.\s*([^.]+)\.\s*'
        r'(?:In\s+|Proceedings\s+of\s+)([^,]+?)(?:,\s*([^.]*))?\.?'
    )

    # Authors. (Year). Title. Publisher.
    BOOK_PATTERN = re.compile(
        r'([^.]+)\.\s*\(([0-9]{4}[a-z]?)\)\.\s*([^.]+)\.\s*([^.]+)\.?'
    )

    DOUBLE_PERIOD_PATTERN = re.compile(r'\.\s*\.\s*')
    WHITESPACE_PATTERN = re.compile(r'\s+')

    def __init__(self):
        self._matchers: List[Tuple[ReferenceShape, re.Pattern, Callable[[re.Match], str]]] = [
            (ReferenceShape.JOURNAL_ARTICLE, self.JOURNAL_PATTERN, self._format_journal),
            (ReferenceShape.CONFERENCE_PAPER, self.CONFERENCE_PATTERN, self._format_conference),
            (ReferenceShape.BOOK, self.BOOK_PATTERN, self._format_book),
        ]

    def fix(self, text: str) -> ReferenceFixResult:
        """
        Reformat the reference section of the text, if there is one.

        Args:
            text: Plain document text

        Returns:
            ReferenceFixResult; fixed_text equals the input when no section is found
        """
        match = self.SECTION_PATTERN.search(text)
        if not match:
            logger.info("No References section found")
            return ReferenceFixResult(original_text=text, fixed_text=text, section_found=False)

        heading = match.group(1)
        section = match.group(2)
        logger.info(f"Found {heading} section with {len(section)} characters")

        entries = [line.strip() for line in section.split('\n') if line.strip()]
        logger.info(f"Found {len(entries)} reference entries")

        references = [self.format_reference(entry) for entry in entries]

        formatted_section = heading + '\n' + '\n'.join(ref.formatted for ref in references)
        fixed_text = text[:match.start()] + formatted_section + text[match.end():]

        return ReferenceFixResult(
            original_text=text,
            fixed_text=fixed_text,
            section_found=True,
            heading=heading,
            references=references,
        )

    def format_reference(self, entry: str) -> FormattedReference:
        """Format one reference entry using the first shape that matches it."""
        entry = entry.strip()
        for shape, pattern, formatter in self._matchers:
            match = pattern.fullmatch(entry)
            if match:
                formatted = formatter(match)
                logger.debug(f"{shape.value} formatted: {formatted[:100]}")
                return FormattedReference(original=entry, formatted=formatted, shape=shape)

        formatted = self._basic_cleanup(entry)
        logger.debug(f"No specific pattern matched, basic fixes applied: {formatted[:100]}")
        return FormattedReference(original=entry, formatted=formatted, shape=ReferenceShape.UNCLASSIFIED)

    def _format_journal(self, match: re.Match) -> str:
        authors, year, title, journal, volume, issue, pages = match.groups()
        issue_str = f"({issue})" if issue else ""
        return (
            f"{self._clean_authors(authors)} ({year}) '{title.strip()}', "
            f"*{journal.strip()}*, {volume}{issue_str}, pp. {pages}."
        )

    def _format_conference(self, match: re.Match) -> str:
        authors, year, title, conference, location = match.groups()
        location = (location or '').strip()
        location_str = f", {location}" if location else ""
        return (
            f"{self._clean_authors(authors)} ({year}) '{title.strip()}', "
            f"in *{conference.strip()}*{location_str}."
        )

    def _format_book(self, match: re.Match) -> str:
        authors, year, title, publisher = match.groups()
        return f"{self._clean_authors(authors)} ({year}) *{title.strip()}*. {publisher.strip()}."

    @staticmethod
    def _clean_authors(authors: str) -> str:
        return expand_ampersands(authors).strip()

    def _basic_cleanup(self, entry: str) -> str:
        cleaned = expand_ampersands(entry)
        cleaned = self.DOUBLE_PERIOD_PATTERN.sub('. ', cleaned)
        return self.WHITESPACE_PATTERN.sub(' ', cleaned)


def format_single_reference(entry: str) -> str:
    """Convenience function to format one reference entry."""
    return ReferenceListFixer().format_reference(entry).formatted


def fix_reference_list(text: str) -> str:
    """
    Convenience function to reformat the reference section of a document.

    Args:
        text: Plain document text

    Returns:
        Text with the reference block rewritten in Harvard style
    """
    return ReferenceListFixer().fix(text).fixed_text

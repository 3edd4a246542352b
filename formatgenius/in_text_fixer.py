"""
In-Text Citation Fixer Module - Normalizes parenthetical author-date citations.

Rewrites Harvard-style parenthetical citations that are missing the comma
between the author segment and the year:
    (Smith 2020)          →  (Smith, 2020)
    (Smith & Jones 2020)  →  (Smith and Jones, 2020)
    (Smith et al. 2019b)  →  (Smith et al., 2019b)

Citations that already carry the comma are left untouched, so the fixer is
idempotent.
"""

import re
from typing import List, Tuple
from dataclasses import dataclass
from loguru import logger


AMPERSAND_PATTERN = re.compile(r'\s*&\s*')


def expand_ampersands(authors: str) -> str:
    """Replace every '&' (and the whitespace around it) with ' and '."""
    return AMPERSAND_PATTERN.sub(' and ', authors)


@dataclass
class InTextFixResult:
    """Result of in-text citation fixing."""
    original_text: str
    fixed_text: str
    changes_made: int
    change_log: List[Tuple[str, str]]  # (original, replacement)

    @property
    def has_changes(self) -> bool:
        return self.changes_made > 0


class InTextCitationFixer:
    """
    Inserts the author/year comma into parenthetical citations.

    The author segment is any run of characters other than ')', so nested
    parentheses end the match at the first closing bracket.
    """

    # (<authors><whitespace><4-digit year><optional lowercase letter>)
    CITATION_PATTERN = re.compile(r'\(([^)]*?)(\s+)([0-9]{4}[a-z]?)\)')

    def fix(self, text: str) -> InTextFixResult:
        """
        Fix every parenthetical citation in the text.

        Args:
            text: Plain document text

        Returns:
            InTextFixResult with the fixed text and change log
        """
        change_log: List[Tuple[str, str]] = []

        def replacer(match: re.Match) -> str:
            original = match.group(0)
            authors = match.group(1)
            year = match.group(3)

            if authors.strip().endswith(','):
                logger.debug(f"Citation already has comma: {original}")
                return original

            fixed = f"({expand_ampersands(authors)}, {year})"
            change_log.append((original, fixed))
            logger.debug(f"Fixed citation: {original} → {fixed}")
            return fixed

        fixed_text = self.CITATION_PATTERN.sub(replacer, text)
        logger.info(f"Fixed {len(change_log)} in-text citations")

        return InTextFixResult(
            original_text=text,
            fixed_text=fixed_text,
            changes_made=len(change_log),
            change_log=change_log,
        )


def fix_in_text_citations(text: str) -> str:
    """
    Convenience function to fix in-text citations.

    Args:
        text: Plain document text

    Returns:
        Text with every '(Author Year)' rewritten as '(Author, Year)'
    """
    return InTextCitationFixer().fix(text).fixed_text

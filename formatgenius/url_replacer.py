"""
URL Replacer Module - Replaces bare URLs with parenthetical citations.

    Visit https://www.example.com/page for info.
    →  Visit (example.com, 2024) for info.

URLs whose hostname cannot be parsed get a sequential fallback label
instead: (Source 1, 2024), (Source 2, 2024), ...
"""

import re
from typing import List, Optional, Tuple
from dataclasses import dataclass
from urllib.parse import urlsplit
from loguru import logger


# Year used for every URL citation; not derived from the source
URL_CITATION_YEAR = "2024"

# Characters that can never appear in a host name
FORBIDDEN_HOST_CHARS = frozenset('<>^|%\\[] \t\r\n\x00')


def extract_hostname(url: str) -> Optional[str]:
    """
    Parse a URL and return its hostname without a leading 'www.'.

    Returns:
        The lower-cased hostname, or None when the URL is malformed
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None

    if not hostname or FORBIDDEN_HOST_CHARS.intersection(hostname):
        return None

    if hostname.startswith('www.'):
        hostname = hostname[len('www.'):]
    return hostname or None


@dataclass
class UrlReplacementResult:
    """Result of URL replacement."""
    original_text: str
    replaced_text: str
    replacements: List[Tuple[str, str]]  # (url, citation)
    fallback_count: int

    @property
    def replacements_made(self) -> int:
        return len(self.replacements)


class UrlCitationReplacer:
    """Replaces every http(s) URL with a (hostname, year) citation."""

    # Greedy to the next whitespace; trailing punctuation is part of the match
    URL_PATTERN = re.compile(r'https?://\S+')

    def replace(self, text: str) -> UrlReplacementResult:
        """
        Replace all URLs in the text.

        The fallback counter lives for this call only and starts at 1.

        Args:
            text: Plain document text

        Returns:
            UrlReplacementResult with the replaced text and replacement log
        """
        replacements: List[Tuple[str, str]] = []
        counter = 1

        def replacer(match: re.Match) -> str:
            nonlocal counter
            url = match.group(0)
            citation, used_fallback = self.citation_for(url, counter)
            if used_fallback:
                counter += 1
            replacements.append((url, citation))
            logger.debug(f"Replacing {url} with {citation}")
            return citation

        replaced_text = self.URL_PATTERN.sub(replacer, text)
        logger.info(f"Replaced {len(replacements)} URLs")

        return UrlReplacementResult(
            original_text=text,
            replaced_text=replaced_text,
            replacements=replacements,
            fallback_count=counter - 1,
        )

    @staticmethod
    def citation_for(url: str, counter: int) -> Tuple[str, bool]:
        """
        Build the citation for one URL.

        Returns:
            Tuple of (citation, used_fallback)
        """
        hostname = extract_hostname(url)
        if hostname is None:
            return f"(Source {counter}, {URL_CITATION_YEAR})", True
        return f"({hostname}, {URL_CITATION_YEAR})", False


def replace_urls_with_citations(text: str) -> str:
    """
    Convenience function to replace URLs with citations.

    Args:
        text: Plain document text

    Returns:
        Text with every URL replaced by a parenthetical citation
    """
    return UrlCitationReplacer().replace(text).replaced_text

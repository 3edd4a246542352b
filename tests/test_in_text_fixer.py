"""Tests for the In-Text Citation Fixer module."""

import pytest
from formatgenius.in_text_fixer import (
    InTextCitationFixer,
    InTextFixResult,
    expand_ampersands,
    fix_in_text_citations,
)


class TestInTextCitationFixer:
    """Test suite for InTextCitationFixer."""

    @pytest.fixture
    def fixer(self):
        return InTextCitationFixer()

    # ==========================================================================
    # Basic Fixes
    # ==========================================================================

    def test_single_author(self, fixer):
        """Comma inserted between author and year."""
        result = fixer.fix("As shown (Smith 2020).")
        assert result.fixed_text == "As shown (Smith, 2020)."
        assert result.changes_made == 1

    def test_ampersand_expanded(self, fixer):
        """Ampersand between authors becomes 'and'."""
        result = fixer.fix("See (Smith & Jones 2020) for details.")
        assert result.fixed_text == "See (Smith and Jones, 2020) for details."

    def test_ampersand_without_spaces(self, fixer):
        result = fixer.fix("(Smith&Jones 2020)")
        assert result.fixed_text == "(Smith and Jones, 2020)"

    def test_ampersand_with_extra_spaces(self, fixer):
        result = fixer.fix("(Smith  &   Jones 2020)")
        assert result.fixed_text == "(Smith and Jones, 2020)"

    def test_year_with_letter_suffix(self, fixer):
        """Disambiguation letters after the year are kept."""
        result = fixer.fix("(Smith et al. 2019b)")
        assert result.fixed_text == "(Smith et al., 2019b)"

    def test_multiple_citations_same_line(self, fixer):
        result = fixer.fix("First (Smith 2020) and then (Jones & Lee 2021).")
        assert result.fixed_text == "First (Smith, 2020) and then (Jones and Lee, 2021)."
        assert result.changes_made == 2

    def test_citations_across_lines(self, fixer):
        content = "Line one (Brown 2001).\nLine two (Green 2002)."
        result = fixer.fix(content)
        assert result.fixed_text == "Line one (Brown, 2001).\nLine two (Green, 2002)."

    # ==========================================================================
    # Idempotence
    # ==========================================================================

    def test_already_fixed_unchanged(self, fixer):
        """A citation with the comma is left alone."""
        result = fixer.fix("(Smith, 2024)")
        assert result.fixed_text == "(Smith, 2024)"
        assert result.changes_made == 0
        assert not result.has_changes

    def test_already_fixed_keeps_ampersand(self, fixer):
        """Already-fixed citations are not rewritten at all."""
        result = fixer.fix("(Smith & Jones, 2020)")
        assert result.fixed_text == "(Smith & Jones, 2020)"

    def test_running_twice_is_stable(self, fixer):
        content = "Claims (Smith & Jones 2020) and (Lee 2019a)."
        once = fixer.fix(content).fixed_text
        twice = fixer.fix(once).fixed_text
        assert once == twice

    # ==========================================================================
    # Non-citations and Edge Cases
    # ==========================================================================

    def test_parentheses_without_year(self, fixer):
        content = "Some text (see above) continues."
        result = fixer.fix(content)
        assert result.fixed_text == content
        assert result.changes_made == 0

    def test_year_without_space_not_matched(self, fixer):
        """'(2020)' has no author segment separated by whitespace."""
        result = fixer.fix("Published (2020).")
        assert result.fixed_text == "Published (2020)."

    def test_three_digit_number_not_matched(self, fixer):
        result = fixer.fix("(page 123)")
        assert result.fixed_text == "(page 123)"

    def test_nested_parentheses_partial_match(self, fixer):
        """The author segment runs from the outer '(' to the first ')'."""
        result = fixer.fix("(see (Smith 2020))")
        assert result.fixed_text == "(see (Smith, 2020))"

    def test_empty_string(self, fixer):
        result = fixer.fix("")
        assert result.fixed_text == ""
        assert result.changes_made == 0

    def test_change_log(self, fixer):
        result = fixer.fix("(Smith & Jones 2020)")
        assert result.change_log == [("(Smith & Jones 2020)", "(Smith and Jones, 2020)")]

    def test_result_keeps_original(self, fixer):
        result = fixer.fix("(Smith 2020)")
        assert isinstance(result, InTextFixResult)
        assert result.original_text == "(Smith 2020)"


class TestConvenienceFunctions:
    """Tests for module-level helpers."""

    def test_fix_in_text_citations(self):
        assert fix_in_text_citations("See (Smith & Jones 2020) for details.") == \
            "See (Smith and Jones, 2020) for details."

    def test_expand_ampersands(self):
        assert expand_ampersands("A & B & C") == "A and B and C"
        assert expand_ampersands("No ampersand") == "No ampersand"

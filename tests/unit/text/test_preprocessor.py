"""
Unit tests for label preprocessing.

Every NA and cleaning pattern type is exercised by at least one label
taken from a real form.
"""

import pytest

from field_matcher.models.results import PreprocessedLabel
from field_matcher.text.preprocessor import (
    CLEANING_PATTERNS,
    NA_PATTERNS,
    clean_label,
    detect_na_instruction,
    preprocess,
)


class TestDetectNAInstruction:
    """Test detect_na_instruction function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Diploma % (If no diploma then mention NA)", "conditional_na"),
            ("Mention NA if not applicable", "conditional_na"),
            ("Write N/A if not applicable", "conditional_na"),
            ("Enter PAN or write NA", "alternative_na"),
            ("Previous Company (NA if fresher)", "parenthetical_na"),
        ],
    )
    def test_na_instructions_detected(self, label, expected):
        """Test each NA pattern type."""
        assert detect_na_instruction(label) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "label",
        [
            "Mobile Number - 10 digits only (Do NOT write +91 or 0)*",
            "Full Name",
            "National Anthem Singer",
            "Banana Republic Store (optional)",
        ],
    )
    def test_no_false_positives(self, label):
        """Test labels mentioning 'na' inside words are not flagged."""
        assert detect_na_instruction(label) is None

    @pytest.mark.unit
    def test_pattern_table_types(self):
        """Test NA table uses the documented types."""
        types = {t for _, t, _ in NA_PATTERNS}
        assert types == {"conditional_na", "alternative_na", "parenthetical_na"}


class TestCleanLabel:
    """Test clean_label function."""

    @pytest.mark.unit
    def test_dash_qualifier_and_parenthetical(self):
        """Test instructions after a spaced dash and in parentheses are removed."""
        cleaned, applied = clean_label("Mobile Number - 10 digits only (Do NOT write +91 or 0)*")

        assert cleaned == "Mobile Number"
        assert "parenthetical" in applied
        assert "dash_qualifier" in applied

    @pytest.mark.unit
    def test_option_list_and_required_marker(self):
        """Test bracketed option lists and asterisks are removed."""
        cleaned, applied = clean_label("Gender [Male, Female]*")

        assert cleaned == "Gender"
        assert "option_list" in applied

    @pytest.mark.unit
    def test_na_tail(self):
        """Test trailing NA instructions outside parentheses are removed."""
        cleaned, applied = clean_label("Enter PAN or write NA")

        assert cleaned == "Enter PAN"
        assert applied == ["na_tail"]

    @pytest.mark.unit
    def test_trailing_punctuation_and_whitespace(self):
        """Test trailing colons are removed and inner whitespace collapsed."""
        assert clean_label("Email Address:")[0] == "Email Address"
        assert clean_label("Name  of   Student")[0] == "Name of Student"

    @pytest.mark.unit
    def test_hyphenated_word_kept(self):
        """Test an unspaced hyphen is not a qualifier."""
        assert clean_label("E-mail")[0] == "E-mail"

    @pytest.mark.unit
    def test_fully_removed_label_falls_back(self):
        """Test a label that would be emptied comes back trimmed."""
        assert clean_label("  *  ") == ("*", [])

    @pytest.mark.unit
    def test_cleaning_order(self):
        """Test parentheses are handled before the dash qualifier."""
        pattern_types = [t for _, t, _ in CLEANING_PATTERNS]
        assert pattern_types.index("parenthetical") < pattern_types.index("dash_qualifier")
        assert pattern_types[-1] == "whitespace"


class TestPreprocess:
    """Test preprocess function."""

    @pytest.mark.unit
    def test_mobile_number_label(self):
        """Test qualifier-heavy phone label."""
        result = preprocess("Mobile Number - 10 digits only (Do NOT write +91 or 0)*")

        assert isinstance(result, PreprocessedLabel)
        assert "Mobile Number" in result.cleaned
        assert result.has_na_instruction is False

    @pytest.mark.unit
    def test_na_label(self):
        """Test NA flag and cleaned text together."""
        result = preprocess("Diploma % (If no diploma then mention NA)")

        assert result.cleaned == "Diploma %"
        assert result.has_na_instruction is True

    @pytest.mark.unit
    def test_empty_and_none(self):
        """Test missing labels never raise."""
        assert preprocess("") == PreprocessedLabel(cleaned="", has_na_instruction=False)
        assert preprocess(None).cleaned == ""

    @pytest.mark.unit
    def test_plain_label_trimmed(self):
        """Test a label without noise is only trimmed."""
        assert preprocess("  City ").cleaned == "City"

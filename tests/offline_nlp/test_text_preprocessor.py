"""
Tests for the Text Preprocessor.

============================================================
PURPOSE
============================================================
Verify cleaning, sentence splitting and tokenization.

TEST PRINCIPLES:
- Word content is never altered
- Empty input yields empty output
- Punctuation that would break matching is normalized

============================================================
"""

import logging

import pytest

from offline_nlp.cleaning import TextPreprocessor, TextPreprocessorConfig


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def preprocessor():
    """Default preprocessor."""
    return TextPreprocessor()


# ============================================================
# CLEAN
# ============================================================

class TestClean:
    """Tests for clean()."""

    def test_empty_input(self, preprocessor):
        """Empty input returns an empty string."""
        assert preprocessor.clean("") == ""

    def test_collapses_whitespace(self, preprocessor):
        """Runs of whitespace become single spaces and edges are trimmed."""
        assert preprocessor.clean("  hello \n\t  world  ") == "hello world"

    def test_collapses_repeated_punctuation(self, preprocessor):
        """Repeated marks collapse to one."""
        assert preprocessor.clean("Wait!!! What??") == "Wait! What?"

    def test_fixes_space_before_punctuation(self, preprocessor):
        """Whitespace before punctuation is removed."""
        assert preprocessor.clean("first , second .") == "first, second."

    def test_inserts_space_after_sentence_end(self, preprocessor):
        """A missing space before a capitalized sentence is restored."""
        assert preprocessor.clean("done.Next step") == "done. Next step"

    def test_keeps_abbreviations(self, preprocessor):
        """Dotted abbreviations keep their word and sentence counts."""
        text = "I moved to the U.S.A last year."

        assert preprocessor.clean(text) == text
        assert len(preprocessor.tokenize(text)) == 7
        assert len(preprocessor.split_sentences(text)) == 1

    def test_keeps_decimal_numbers(self, preprocessor):
        """Lowercase or digit after a period is left alone."""
        assert preprocessor.clean("version 2.5 of example.com") == "version 2.5 of example.com"

    def test_normalizes_typographic_quotes(self, preprocessor):
        """Curly apostrophes become ASCII so contractions match dictionaries."""
        assert preprocessor.clean("I\u2019m \u201cfine\u201d") == "I'm \"fine\""

    def test_drops_emoji(self, preprocessor):
        """Emoji and symbols are removed."""
        assert preprocessor.clean("great day \U0001F600") == "great day"

    def test_removes_zero_width_characters(self, preprocessor):
        """Zero-width characters are removed without splitting the word."""
        assert preprocessor.clean("hel\u200blo") == "hello"

    def test_removes_control_characters(self, preprocessor):
        """Control characters become spaces."""
        assert preprocessor.clean("one\x00two") == "one two"

    def test_word_content_preserved(self, preprocessor):
        """Letters, digits and casing are untouched."""
        text = "Call Dr Smith at 10 about the MRI"
        assert preprocessor.clean(text) == text

    def test_truncates_long_input(self, caplog):
        """Input over max_length is truncated and logged."""
        preprocessor = TextPreprocessor(TextPreprocessorConfig(max_length=10))

        with caplog.at_level(logging.WARNING, logger="offline_nlp.cleaning.text_preprocessor"):
            cleaned = preprocessor.clean("a" * 25)

        assert cleaned == "a" * 10
        assert any("truncated" in r.getMessage() for r in caplog.records)


# ============================================================
# SPLIT SENTENCES
# ============================================================

class TestSplitSentences:
    """Tests for split_sentences()."""

    def test_splits_on_terminal_punctuation(self, preprocessor):
        """Sentences end at . ! and ?"""
        assert preprocessor.split_sentences("First one. Second one! Third one?") == [
            "First one.",
            "Second one!",
            "Third one?",
        ]

    def test_keeps_unterminated_fragment(self, preprocessor):
        """A trailing fragment without punctuation is still a sentence."""
        assert preprocessor.split_sentences("Finish the report. Call mom") == [
            "Finish the report.",
            "Call mom",
        ]

    def test_no_punctuation(self, preprocessor):
        """Text without punctuation is one sentence."""
        assert preprocessor.split_sentences("just one thought") == ["just one thought"]

    def test_empty_input(self, preprocessor):
        """Empty or blank input yields no sentences."""
        assert preprocessor.split_sentences("") == []
        assert preprocessor.split_sentences("   ") == []

    def test_ignores_punctuation_only_parts(self, preprocessor):
        """Parts without letters or digits are dropped."""
        assert preprocessor.split_sentences("Done. ! ?") == ["Done."]


# ============================================================
# TOKENIZE
# ============================================================

class TestTokenize:
    """Tests for tokenize()."""

    def test_strips_edge_punctuation(self, preprocessor):
        """Punctuation at token edges is removed."""
        assert preprocessor.tokenize("Hello, world! (really)") == ["Hello", "world", "really"]

    def test_keeps_inner_apostrophes(self, preprocessor):
        """Contractions stay intact."""
        assert preprocessor.tokenize("I don't know, it's fine.") == [
            "I", "don't", "know", "it's", "fine",
        ]

    def test_preserves_case(self, preprocessor):
        """Casing is left to callers."""
        assert preprocessor.tokenize("Call John") == ["Call", "John"]

    def test_drops_punctuation_only_tokens(self, preprocessor):
        """Tokens that are only punctuation disappear."""
        assert preprocessor.tokenize("wait -- what ...") == ["wait", "what"]

    def test_empty_input(self, preprocessor):
        """Empty or blank input yields no tokens."""
        assert preprocessor.tokenize("") == []
        assert preprocessor.tokenize("   ") == []

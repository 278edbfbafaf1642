"""
Tests for the Sentiment Dictionary.

============================================================
PURPOSE
============================================================
Verify contextual dictionary scoring.

TEST PRINCIPLES:
- Scores and confidence always stay in range
- Negation flips and damps, intensifiers amplify
- Custom words are validated before the vocabulary changes

============================================================
"""

import pytest

from offline_nlp.exceptions import DictionaryUpdateError
from offline_nlp.models import SentimentLabel
from offline_nlp.sentiment import SentimentDictionary
from offline_nlp.sentiment.sentiment_dictionary import (
    INTENSIFIERS,
    NEGATIVE_WORDS,
    NEGATORS,
    POSITIVE_WORDS,
)


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def dictionary():
    """Fresh dictionary per test."""
    return SentimentDictionary()


# ============================================================
# BASE SCORES
# ============================================================

class TestBaseScores:
    """Tests for tiered word scores."""

    @pytest.mark.parametrize("word,score", [
        ("amazing", 0.8),
        ("happy", 0.6),
        ("calm", 0.4),
        ("terrible", -0.8),
        ("sad", -0.6),
        ("tired", -0.4),
        ("banana", 0.0),
    ])
    def test_get_score(self, dictionary, word, score):
        """Each word takes its tier score."""
        assert dictionary.get_score(word) == score

    def test_single_positive_word(self, dictionary):
        """A lone positive word scores its base value."""
        outcome = dictionary.analyze("I am happy", ["I", "am", "happy"])

        assert outcome.score == 0.6
        assert outcome.label == SentimentLabel.POSITIVE
        assert outcome.breakdown.positive_words == ["happy"]

    def test_no_sentiment_words(self, dictionary):
        """Text without sentiment words is neutral with zero confidence."""
        outcome = dictionary.analyze("the cat sat", ["the", "cat", "sat"])

        assert outcome.score == 0.0
        assert outcome.confidence == 0.0
        assert outcome.label == SentimentLabel.NEUTRAL

    def test_empty_tokens(self, dictionary):
        """Empty input is neutral."""
        outcome = dictionary.analyze("", [])

        assert outcome.score == 0.0
        assert outcome.label == SentimentLabel.NEUTRAL

    def test_case_insensitive(self, dictionary):
        """Tokens are lowercased before lookup."""
        outcome = dictionary.analyze("GREAT", ["GREAT"])
        assert outcome.score == 0.6
        assert outcome.breakdown.positive_words == ["great"]


# ============================================================
# CONTEXT
# ============================================================

class TestNegation:
    """Tests for negation handling."""

    def test_negator_flips_and_damps(self, dictionary):
        """'not happy' scores -0.6 * 0.8."""
        outcome = dictionary.analyze("I am not happy", ["I", "am", "not", "happy"])

        assert outcome.score == -0.48
        assert outcome.label == SentimentLabel.NEGATIVE
        assert outcome.breakdown.negators == ["not"]

    def test_negated_sentence_not_positive(self, dictionary):
        """Negating a positive sentence never leaves it positive."""
        plain = dictionary.analyze("I am happy", ["I", "am", "happy"])
        negated = dictionary.analyze("I am not happy", ["I", "am", "not", "happy"])

        assert plain.score > 0
        assert negated.score <= 0

    def test_negator_two_tokens_back(self, dictionary):
        """A negator two tokens back still applies."""
        outcome = dictionary.analyze("not so happy", ["not", "so", "happy"])
        assert outcome.score == -0.48

    def test_negator_three_tokens_back_ignored(self, dictionary):
        """A negator outside the window has no effect."""
        tokens = ["not", "at", "the", "happy"]
        outcome = dictionary.analyze(" ".join(tokens), tokens)
        assert outcome.score == 0.6

    def test_negated_negative_becomes_positive(self, dictionary):
        """'not bad' flips to a mild positive."""
        outcome = dictionary.analyze("not bad", ["not", "bad"])
        assert outcome.score == 0.48
        assert outcome.label == SentimentLabel.POSITIVE

    def test_contraction_negator(self, dictionary):
        """Contractions count as negators."""
        outcome = dictionary.analyze("I don't love it", ["I", "don't", "love", "it"])
        assert outcome.score < 0


class TestIntensifiers:
    """Tests for intensifier handling."""

    def test_prefix_intensifier(self, dictionary):
        """'very happy' is 0.6 * 1.3."""
        outcome = dictionary.analyze("very happy", ["very", "happy"])

        assert outcome.score == 0.78
        assert outcome.breakdown.intensifiers == ["very"]

    def test_intensified_magnitude_greater(self, dictionary):
        """An intensified word has strictly greater magnitude."""
        plain = dictionary.analyze("happy", ["happy"])
        intensified = dictionary.analyze("very happy", ["very", "happy"])
        assert abs(intensified.score) > abs(plain.score)

    def test_suffix_intensifier(self, dictionary):
        """A following intensifier applies x1.2."""
        outcome = dictionary.analyze("happy indeed really", ["happy", "really"])
        assert outcome.score == 0.72

    def test_prefix_wins_over_suffix(self, dictionary):
        """When both apply, the larger multiplier is used."""
        outcome = dictionary.analyze(
            "really happy really", ["really", "happy", "really"],
        )
        assert outcome.score == 0.78

    def test_negation_and_intensifier(self, dictionary):
        """'not really happy' is negated then intensified."""
        outcome = dictionary.analyze("not really happy", ["not", "really", "happy"])
        assert outcome.score == pytest.approx(-0.624, abs=1e-3)

    def test_score_clamped(self, dictionary):
        """Intensified strong words clamp at 1.0."""
        outcome = dictionary.analyze("very amazing", ["very", "amazing"])
        assert outcome.score == 1.0

    def test_intensifier_not_scored_as_sentiment(self, dictionary):
        """'pretty' is treated as an intensifier only."""
        outcome = dictionary.analyze("pretty", ["pretty"])

        assert outcome.breakdown.intensifiers == ["pretty"]
        assert outcome.breakdown.positive_words == []
        assert outcome.score == 0.0


# ============================================================
# CONFIDENCE AND RANGES
# ============================================================

class TestConfidence:
    """Tests for confidence calculation."""

    def test_mixed_sentence(self, dictionary):
        """Negated positive plus strong negative averages to -0.64."""
        tokens = ["I", "am", "not", "happy", "with", "the", "results",
                  "this", "is", "terrible"]
        outcome = dictionary.analyze(" ".join(tokens), tokens)

        assert outcome.score == -0.64
        assert outcome.confidence == 0.72
        assert outcome.label == SentimentLabel.NEGATIVE
        assert "terrible" in outcome.breakdown.negative_words

    def test_confidence_capped(self, dictionary):
        """Dense, consistent sentiment caps at 0.95."""
        outcome = dictionary.analyze("happy", ["happy"])
        assert outcome.confidence == 0.95

    @pytest.mark.parametrize("text", [
        "very very amazing awesome fantastic",
        "terrible awful horrible disgusting hate",
        "not not not bad",
        "good bad good bad okay",
        "nothing at all",
        "",
    ])
    def test_ranges(self, dictionary, text):
        """Score stays in [-1, 1] and confidence in [0, 1]."""
        tokens = text.split()
        outcome = dictionary.analyze(text, tokens)

        assert -1.0 <= outcome.score <= 1.0
        assert 0.0 <= outcome.confidence <= 1.0


# ============================================================
# QUICK ANALYZE
# ============================================================

class TestQuickAnalyze:
    """Tests for quick_analyze()."""

    def test_positive_majority(self, dictionary):
        """More than 60% positive hits is positive."""
        estimate = dictionary.quick_analyze(["good", "great", "bad"])

        assert estimate.label == SentimentLabel.POSITIVE
        assert estimate.confidence == 0.9

    def test_balanced(self, dictionary):
        """An even split is neutral."""
        estimate = dictionary.quick_analyze(["good", "bad"])
        assert estimate.label == SentimentLabel.NEUTRAL

    def test_negative_majority(self, dictionary):
        """Mostly negative hits is negative."""
        estimate = dictionary.quick_analyze(["bad", "sad", "cat", "dog", "sun", "sky"])

        assert estimate.label == SentimentLabel.NEGATIVE
        assert estimate.confidence == pytest.approx(2 / 6 * 2)

    def test_no_hits(self, dictionary):
        """No sentiment words is neutral with zero confidence."""
        estimate = dictionary.quick_analyze(["cat", "dog"])

        assert estimate.label == SentimentLabel.NEUTRAL
        assert estimate.confidence == 0.0

    def test_ignores_context(self, dictionary):
        """Negators do not affect the quick estimate."""
        estimate = dictionary.quick_analyze(["not", "happy"])
        assert estimate.label == SentimentLabel.POSITIVE


# ============================================================
# CUSTOM WORDS
# ============================================================

class TestCustomWords:
    """Tests for add_custom_words()."""

    def test_size_counts_all_vocabularies(self, dictionary):
        """Size is the sum of the four unique vocabularies."""
        expected = (
            len(set(POSITIVE_WORDS)) + len(set(NEGATIVE_WORDS))
            + len(set(INTENSIFIERS)) + len(set(NEGATORS))
        )
        assert dictionary.get_size() == expected

    def test_custom_positive_word(self, dictionary):
        """Custom positive words score +0.5."""
        before = dictionary.get_size()
        dictionary.add_custom_words(positive=["Stoked"])

        outcome = dictionary.analyze("stoked", ["stoked"])
        assert outcome.score == 0.5
        assert dictionary.get_size() == before + 1

    def test_custom_negative_word(self, dictionary):
        """Custom negative words score -0.5."""
        dictionary.add_custom_words(negative=["meh"])

        outcome = dictionary.analyze("meh", ["meh"])
        assert outcome.score == -0.5

    def test_existing_word_rescored(self, dictionary):
        """Re-adding an existing word sets the custom score."""
        before = dictionary.get_size()
        dictionary.add_custom_words(positive=["happy"])

        assert dictionary.get_score("happy") == 0.5
        assert dictionary.get_size() == before

    @pytest.mark.parametrize("positive", [
        [""],
        ["   "],
        ["fine", 3],
        "stoked",
    ])
    def test_invalid_words_rejected(self, dictionary, positive):
        """Bad entries reject the whole batch."""
        before = dictionary.get_size()

        with pytest.raises(DictionaryUpdateError):
            dictionary.add_custom_words(positive=positive)

        assert dictionary.get_size() == before

    def test_error_details(self, dictionary):
        """The error lists offending entries."""
        with pytest.raises(DictionaryUpdateError) as exc_info:
            dictionary.add_custom_words(negative=["ok", None])

        assert exc_info.value.invalid_words == ["None"]
        assert exc_info.value.to_dict()["component"] == "sentiment_dictionary"

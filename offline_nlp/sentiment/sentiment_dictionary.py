"""
Offline NLP - Sentiment Dictionary.

============================================================
RESPONSIBILITY
============================================================
Scores tokens against fixed English sentiment vocabularies.

- Positive and negative word lists with tiered base scores
- Negation handling (2-token lookbehind, damped sign flip)
- Intensifier handling (1-token lookbehind / lookahead)
- Cheap count-only estimate for real-time feedback

============================================================
DESIGN PRINCIPLES
============================================================
- Vocabularies are built once at construction
- Analysis never mutates shared state
- Custom words replace the vocabulary snapshot atomically
- DESCRIPTIVE scores only, no learned weights

============================================================
SCORING
============================================================
Base scores:
- positive: 0.8 / 0.6 / 0.4 (strong / common / other)
- negative: -0.8 / -0.6 / -0.4
- custom words: +0.5 / -0.5

Context:
- negator within 2 tokens back: score = -score * 0.8
- intensifier just before: x1.3, just after: x1.2 (larger wins)

============================================================
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

from ..exceptions import DictionaryUpdateError
from ..models import (
    QuickSentiment,
    SentimentBreakdown,
    SentimentLabel,
    SentimentOutcome,
)


logger = logging.getLogger(__name__)


# ============================================================
# CONFIGURATION
# ============================================================


@dataclass
class SentimentDictionaryConfig:
    """Configuration for dictionary-based sentiment scoring."""

    # Tokens looked at behind a sentiment word for a negator
    negation_window: int = 2

    # Negated score = -score * negation_damping
    negation_damping: float = 0.8

    # Multiplier when the previous token is an intensifier
    prefix_intensity: float = 1.3

    # Minimum multiplier when the next token is an intensifier
    suffix_intensity: float = 1.2

    # Label thresholds
    positive_threshold: float = 0.1
    negative_threshold: float = -0.1

    max_confidence: float = 0.95
    quick_max_confidence: float = 0.9

    custom_positive_score: float = 0.5
    custom_negative_score: float = -0.5

    version: str = "1.0.0"


# ============================================================
# VOCABULARIES
# ============================================================


POSITIVE_WORDS = (
    # Emotions
    "happy", "joy", "excited", "amazing", "awesome", "fantastic", "wonderful",
    "great", "excellent", "perfect", "brilliant", "outstanding", "superb",
    "delighted", "thrilled", "elated", "cheerful", "optimistic", "confident",
    "proud", "satisfied", "grateful", "blessed", "lucky", "fortunate",
    # Achievement
    "success", "achieve", "accomplished", "complete", "finished", "done", "won",
    "victory", "triumph", "breakthrough", "progress", "improvement", "advance",
    "growth", "development", "innovation", "creative", "productive",
    # Relationships
    "love", "friend", "family", "support", "help", "team", "together",
    "connected", "close", "bond", "trust", "respect", "appreciation",
    "kindness", "generous", "caring", "compassionate", "understanding",
    # Work and career
    "opportunity", "promotion", "raise", "bonus", "recognition", "praise",
    "compliment", "recommendation", "approval", "acceptance", "hired",
    "qualified", "skilled", "expert", "professional", "capable",
    # Health and wellbeing
    "healthy", "energetic", "strong", "fit", "well", "better", "recovered",
    "refreshed", "relaxed", "calm", "peaceful", "centered", "balanced",
    # General
    "good", "nice", "fine", "okay", "alright", "pleasant", "smooth", "easy",
    "simple", "clear", "bright", "beautiful", "lovely", "pretty", "cool",
    "interesting", "fun", "enjoyable", "entertaining", "engaging",
)

NEGATIVE_WORDS = (
    # Emotions
    "sad", "angry", "frustrated", "annoyed", "upset", "disappointed",
    "depressed", "anxious", "worried", "stressed", "overwhelmed", "exhausted",
    "tired", "bored", "lonely", "isolated", "rejected", "hurt", "pain",
    "suffering", "miserable", "terrible", "awful", "horrible", "disgusting",
    # Problems
    "problem", "issue", "trouble", "difficulty", "struggle", "challenge",
    "obstacle", "barrier", "setback", "failure", "mistake", "error", "wrong",
    "bad", "worse", "worst", "failed", "broken", "damaged",
    # Work and career
    "fired", "laid off", "rejected", "denied", "refused", "criticized",
    "complained", "blamed", "accused", "punished", "penalized", "demoted",
    "overworked", "underpaid", "unfair", "biased", "discrimination",
    # Health
    "sick", "ill", "disease", "injury", "hurt", "ache", "sore", "weak",
    "fatigue", "nausea", "fever", "infection", "allergic", "chronic",
    # Relationships
    "argument", "fight", "conflict", "disagreement", "breakup", "divorce",
    "betrayed", "cheated", "lied", "deceived", "abandoned", "ignored",
    "excluded", "bullied", "harassed", "abused", "threatened",
    # General
    "hate", "dislike", "avoid", "prevent", "stop", "quit", "give up",
    "impossible", "hopeless", "useless", "worthless", "meaningless", "waste",
    "loss", "lose", "lost", "missing", "gone", "empty", "nothing",
)

INTENSIFIERS = (
    "very", "extremely", "incredibly", "amazingly", "absolutely", "completely",
    "totally", "entirely", "perfectly", "fully", "really", "truly", "genuinely",
    "seriously", "definitely", "certainly", "surely", "quite", "rather",
    "pretty", "fairly", "somewhat", "kind of", "super", "mega", "ultra",
    "highly", "deeply", "strongly", "tremendously", "enormously", "immensely",
    "exceptionally",
)

NEGATORS = (
    "not", "no", "never", "nothing", "nobody", "none", "neither", "without",
    "lack", "lacking", "missing", "absent", "void",
    "don't", "won't", "can't", "shouldn't", "wouldn't", "couldn't",
    "isn't", "aren't", "wasn't", "weren't", "hasn't", "haven't", "hadn't",
    "doesn't", "didn't",
    "barely", "hardly", "scarcely", "refuse", "deny", "reject", "avoid",
    "prevent", "stop",
)

# Subjective strength tiers; every other word takes the default tier
POSITIVE_TIERS: Dict[float, tuple] = {
    0.8: ("amazing", "awesome", "fantastic", "excellent", "perfect", "brilliant"),
    0.6: ("great", "good", "nice", "happy", "wonderful"),
}
NEGATIVE_TIERS: Dict[float, tuple] = {
    -0.8: ("terrible", "awful", "horrible", "hate", "disgusting"),
    -0.6: ("bad", "sad", "angry", "problem", "wrong"),
}
DEFAULT_POSITIVE_SCORE = 0.4
DEFAULT_NEGATIVE_SCORE = -0.4


# ============================================================
# VOCABULARY SNAPSHOT
# ============================================================


@dataclass(frozen=True)
class _Vocabulary:
    """Immutable vocabulary snapshot shared by concurrent readers."""

    positive: FrozenSet[str]
    negative: FrozenSet[str]
    intensifiers: FrozenSet[str]
    negators: FrozenSet[str]
    positive_scores: Mapping[str, float]
    negative_scores: Mapping[str, float]


def _build_scores(
    words: Iterable[str],
    tiers: Dict[float, tuple],
    default: float,
) -> Dict[str, float]:
    scores = {word: default for word in words}
    for score, tier_words in tiers.items():
        for word in tier_words:
            scores[word] = score
    return scores


# ============================================================
# SENTIMENT DICTIONARY
# ============================================================


class SentimentDictionary:
    """
    Dictionary-based contextual sentiment scorer.

    ============================================================
    USAGE
    ============================================================
    ```python
    dictionary = SentimentDictionary()

    outcome = dictionary.analyze(text, tokens)
    print(outcome.score, outcome.label)

    dictionary.add_custom_words(positive=["stoked"], negative=["meh"])
    ```

    ============================================================
    """

    def __init__(self, config: Optional[SentimentDictionaryConfig] = None) -> None:
        """
        Initialize the sentiment dictionary.

        Args:
            config: Scoring configuration
        """
        self._config = config or SentimentDictionaryConfig()
        self._lock = threading.RLock()
        self._vocab = _Vocabulary(
            positive=frozenset(POSITIVE_WORDS),
            negative=frozenset(NEGATIVE_WORDS),
            intensifiers=frozenset(INTENSIFIERS),
            negators=frozenset(NEGATORS),
            positive_scores=MappingProxyType(_build_scores(
                POSITIVE_WORDS, POSITIVE_TIERS, DEFAULT_POSITIVE_SCORE,
            )),
            negative_scores=MappingProxyType(_build_scores(
                NEGATIVE_WORDS, NEGATIVE_TIERS, DEFAULT_NEGATIVE_SCORE,
            )),
        )

        logger.info(f"SentimentDictionary initialized with {self.get_size()} entries")

    @property
    def version(self) -> str:
        """Get dictionary version."""
        return self._config.version

    # =========================================================
    # PUBLIC API
    # =========================================================

    def analyze(self, text: str, tokens: Sequence[str]) -> SentimentOutcome:
        """
        Score a token sequence with negation and intensifier context.

        Args:
            text: Cleaned text the tokens came from
            tokens: Word tokens in order

        Returns:
            SentimentOutcome with score, confidence, label and breakdown
        """
        vocab = self._vocab
        cfg = self._config
        words = [t.lower() for t in tokens]
        breakdown = SentimentBreakdown()

        total_score = 0.0
        sentiment_words = 0

        for i, word in enumerate(words):
            prev_word = words[i - 1] if i > 0 else ""
            next_word = words[i + 1] if i < len(words) - 1 else ""

            if word in vocab.intensifiers:
                breakdown.intensifiers.append(word)
                continue

            if word in vocab.negators:
                breakdown.negators.append(word)
                continue

            if word in vocab.positive:
                word_score = vocab.positive_scores.get(word, DEFAULT_POSITIVE_SCORE)
                breakdown.positive_words.append(word)
            elif word in vocab.negative:
                word_score = vocab.negative_scores.get(word, DEFAULT_NEGATIVE_SCORE)
                breakdown.negative_words.append(word)
            else:
                continue

            window = words[max(0, i - cfg.negation_window):i]
            if any(w in vocab.negators for w in window):
                word_score = -word_score * cfg.negation_damping

            multiplier = 1.0
            if prev_word in vocab.intensifiers:
                multiplier = cfg.prefix_intensity
            if next_word in vocab.intensifiers:
                multiplier = max(multiplier, cfg.suffix_intensity)

            total_score += word_score * multiplier
            sentiment_words += 1

        average = total_score / sentiment_words if sentiment_words else 0.0
        score = max(-1.0, min(1.0, average))

        density = sentiment_words / max(1, len(tokens))
        consistency = abs(total_score) / sentiment_words if sentiment_words else 0.0
        confidence = min(cfg.max_confidence, density * 2 + consistency * 0.5)

        return SentimentOutcome(
            score=round(score, 3),
            confidence=round(confidence, 3),
            label=self._label_for(score),
            breakdown=breakdown,
        )

    def quick_analyze(self, tokens: Sequence[str]) -> QuickSentiment:
        """
        Count positive vs negative hits without context.

        Returns:
            QuickSentiment (emoji left empty, the engine assigns it)
        """
        vocab = self._vocab
        positive_count = 0
        negative_count = 0

        for token in tokens:
            word = token.lower()
            if word in vocab.positive:
                positive_count += 1
            elif word in vocab.negative:
                negative_count += 1

        total = positive_count + negative_count
        if total == 0:
            return QuickSentiment(label=SentimentLabel.NEUTRAL, confidence=0.0)

        ratio = positive_count / total
        confidence = min(self._config.quick_max_confidence, total / max(1, len(tokens)) * 2)

        if ratio > 0.6:
            label = SentimentLabel.POSITIVE
        elif ratio < 0.4:
            label = SentimentLabel.NEGATIVE
        else:
            label = SentimentLabel.NEUTRAL

        return QuickSentiment(label=label, confidence=confidence)

    def add_custom_words(
        self,
        positive: Optional[Iterable[str]] = None,
        negative: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Add custom words to the vocabularies.

        Custom words take base score +0.5 / -0.5 and are visible to
        analysis calls that start after this returns.

        Raises:
            DictionaryUpdateError: any entry is not a non-empty string
        """
        positive_words = self._normalize_words(positive)
        negative_words = self._normalize_words(negative)

        with self._lock:
            current = self._vocab
            positive_scores = dict(current.positive_scores)
            negative_scores = dict(current.negative_scores)
            for word in positive_words:
                positive_scores[word] = self._config.custom_positive_score
            for word in negative_words:
                negative_scores[word] = self._config.custom_negative_score

            self._vocab = _Vocabulary(
                positive=current.positive | frozenset(positive_words),
                negative=current.negative | frozenset(negative_words),
                intensifiers=current.intensifiers,
                negators=current.negators,
                positive_scores=MappingProxyType(positive_scores),
                negative_scores=MappingProxyType(negative_scores),
            )

        logger.info(
            f"Added {len(positive_words)} positive and "
            f"{len(negative_words)} negative custom words"
        )

    def get_size(self) -> int:
        """Total entries across all four vocabularies."""
        vocab = self._vocab
        return (
            len(vocab.positive) + len(vocab.negative)
            + len(vocab.intensifiers) + len(vocab.negators)
        )

    # =========================================================
    # VOCABULARY METADATA
    # =========================================================

    def is_positive(self, word: str) -> bool:
        return word.lower() in self._vocab.positive

    def is_negative(self, word: str) -> bool:
        return word.lower() in self._vocab.negative

    def get_score(self, word: str) -> float:
        """Base score of a word, 0.0 when it carries no sentiment."""
        vocab = self._vocab
        word = word.lower()
        if word in vocab.positive:
            return vocab.positive_scores.get(word, DEFAULT_POSITIVE_SCORE)
        if word in vocab.negative:
            return vocab.negative_scores.get(word, DEFAULT_NEGATIVE_SCORE)
        return 0.0

    # =========================================================
    # INTERNAL METHODS
    # =========================================================

    def _label_for(self, score: float) -> SentimentLabel:
        if score > self._config.positive_threshold:
            return SentimentLabel.POSITIVE
        elif score < self._config.negative_threshold:
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL

    @staticmethod
    def _normalize_words(words: Optional[Iterable[str]]) -> List[str]:
        """Lowercase and strip words, rejecting the batch on any bad entry."""
        if words is None:
            return []
        if isinstance(words, str):
            raise DictionaryUpdateError(
                "Custom words must be a list of strings, not a single string",
                invalid_words=[words],
            )

        words = list(words)
        invalid = [w for w in words if not isinstance(w, str) or not w.strip()]
        if invalid:
            raise DictionaryUpdateError(
                f"{len(invalid)} custom word(s) are empty or not strings",
                invalid_words=invalid,
            )
        return [w.strip().lower() for w in words]


__all__ = [
    "SentimentDictionary",
    "SentimentDictionaryConfig",
    "POSITIVE_WORDS",
    "NEGATIVE_WORDS",
    "INTENSIFIERS",
    "NEGATORS",
]

"""
Offline NLP - Insight Generator.

============================================================
PURPOSE
============================================================
Turns sentiment, action and topic outputs into a short summary.

Produces:
1. Mood (finer-grained than sentiment polarity)
2. Energy level bucket
3. Focus classification
4. Ordered recommendations and behavioral patterns

============================================================
DESIGN PRINCIPLES
============================================================
- Pure functions: same input = same output
- Threshold-based, deterministic logic
- Missing stage outputs are treated as neutral
- Recommendations are never empty

============================================================
ASSESSMENT LOGIC
============================================================
Mood:
    no sentiment words           -> neutral (or thoughtful, below)
    score >= 0.5 and (intensifier or confidence >= 0.6) -> excited
    score > 0.1                  -> positive
    score <= -0.5                -> negative
    score < -0.1                 -> concerned
    3+ sentences and (personal_development or 5+ keywords) -> thoughtful

Energy = |score| * 0.5 + min(1, actions / 5) * 0.3
         + min(1, intensifiers / 3) * 0.2
    >= 0.5 high, < 0.2 low, else medium

Focus:
    no topics and no actions         -> mixed
    <= 2 categories and <= 3 actions -> clear
    >= 4 categories, or >= 6 actions with >= 3 categories -> scattered
    otherwise                        -> mixed

============================================================
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models import (
    ActionDetectionResult,
    Energy,
    Focus,
    InsightSummary,
    Mood,
    Priority,
    SentimentOutcome,
    TopicResult,
    UsageContext,
)


logger = logging.getLogger(__name__)


# ============================================================
# CONFIGURATION
# ============================================================


@dataclass
class InsightConfig:
    """Thresholds for insight synthesis."""

    # Mood
    excited_score: float = 0.5
    excited_confidence: float = 0.6
    positive_score: float = 0.1
    negative_score: float = -0.5
    concerned_score: float = -0.1
    thoughtful_min_sentences: int = 3
    thoughtful_min_keywords: int = 5

    # Energy
    energy_sentiment_weight: float = 0.5
    energy_action_weight: float = 0.3
    energy_intensifier_weight: float = 0.2
    energy_action_saturation: int = 5
    energy_intensifier_saturation: int = 3
    high_energy: float = 0.5
    low_energy: float = 0.2

    # Focus
    clear_max_categories: int = 2
    clear_max_actions: int = 3
    scattered_min_categories: int = 4
    busy_min_actions: int = 6
    busy_min_categories: int = 3

    # Patterns
    action_oriented_min_actions: int = 3
    expressive_min_words: int = 2
    consistent_min_active_days: int = 5
    longer_than_usual_ratio: float = 1.5

    max_recommendations: int = 5


FALLBACK_RECOMMENDATION = "Keep recording your thoughts to build richer insights"

# Action categories that indicate forward planning
PLANNING_CATEGORIES = ("planning", "scheduled", "deadline", "meeting")

CATEGORY_RECOMMENDATIONS: Dict[str, str] = {
    "work": "Block focused time for your top work priority",
    "health": "Keep noting how you feel to spot health trends",
    "relationships": "Make time to reconnect with the people you mentioned",
    "personal_development": "Write down one small step toward your growth goal",
    "finance": "Review your budget while the numbers are fresh",
    "technology": "Note the tools that slowed you down and look for fixes",
    "home": "Pick one home task to finish this week",
    "travel": "Start a short checklist for your upcoming plans",
}


# ============================================================
# INSIGHT GENERATOR
# ============================================================


class InsightGenerator:
    """
    Rule-based insight synthesizer.

    ============================================================
    USAGE
    ============================================================
    ```python
    generator = InsightGenerator()

    summary = generator.generate(
        sentiment=sentiment,
        actions=actions,
        topics=topics,
        word_count=42,
        sentence_count=3,
    )
    print(summary.mood, summary.recommendations)
    ```

    ============================================================
    """

    def __init__(self, config: Optional[InsightConfig] = None) -> None:
        self._config = config or InsightConfig()

    # =========================================================
    # PUBLIC API
    # =========================================================

    def generate(
        self,
        sentiment: Optional[SentimentOutcome] = None,
        actions: Optional[ActionDetectionResult] = None,
        topics: Optional[TopicResult] = None,
        word_count: int = 0,
        sentence_count: int = 0,
        usage: Optional[UsageContext] = None,
    ) -> InsightSummary:
        """
        Synthesize mood, energy, focus and recommendations.

        Stage outputs that were skipped or failed may be passed as None.

        Returns:
            InsightSummary with valid enum values and at least one
            recommendation
        """
        sentiment = sentiment or SentimentOutcome.neutral()
        actions = actions or ActionDetectionResult()
        topics = topics or TopicResult()

        if word_count <= 0:
            return InsightSummary(recommendations=[FALLBACK_RECOMMENDATION])

        mood = self.assess_mood(sentiment, topics, sentence_count)
        energy = self.assess_energy(sentiment, actions)
        focus = self.assess_focus(actions, topics)

        summary = InsightSummary(
            mood=mood,
            energy=energy,
            focus=focus,
            recommendations=self._recommendations(
                mood, energy, focus, actions, topics, usage,
            ),
            patterns=self._patterns(sentiment, actions, topics, word_count, usage),
        )

        logger.debug(
            f"Insights: mood={mood.value} energy={energy.value} focus={focus.value}"
        )
        return summary

    def assess_mood(
        self,
        sentiment: SentimentOutcome,
        topics: TopicResult,
        sentence_count: int,
    ) -> Mood:
        cfg = self._config
        score = sentiment.score

        if sentiment.breakdown.sentiment_word_count > 0:
            if score >= cfg.excited_score and (
                sentiment.breakdown.intensifiers
                or sentiment.confidence >= cfg.excited_confidence
            ):
                return Mood.EXCITED
            if score > cfg.positive_score:
                return Mood.POSITIVE
            if score <= cfg.negative_score:
                return Mood.NEGATIVE
            if score < cfg.concerned_score:
                return Mood.CONCERNED

        if sentence_count >= cfg.thoughtful_min_sentences and (
            "personal_development" in topics.categories
            or len(topics.keywords) >= cfg.thoughtful_min_keywords
        ):
            return Mood.THOUGHTFUL

        return Mood.NEUTRAL

    def assess_energy(
        self,
        sentiment: SentimentOutcome,
        actions: ActionDetectionResult,
    ) -> Energy:
        cfg = self._config
        action_factor = min(1.0, actions.total_count / cfg.energy_action_saturation)
        intensifier_factor = min(
            1.0,
            len(sentiment.breakdown.intensifiers) / cfg.energy_intensifier_saturation,
        )
        energy = (
            abs(sentiment.score) * cfg.energy_sentiment_weight
            + action_factor * cfg.energy_action_weight
            + intensifier_factor * cfg.energy_intensifier_weight
        )

        if energy >= cfg.high_energy:
            return Energy.HIGH
        elif energy < cfg.low_energy:
            return Energy.LOW
        return Energy.MEDIUM

    def assess_focus(
        self,
        actions: ActionDetectionResult,
        topics: TopicResult,
    ) -> Focus:
        cfg = self._config
        category_count = len(topics.categories)
        action_count = actions.total_count

        if category_count == 0 and not topics.keywords and action_count == 0:
            return Focus.MIXED
        if category_count <= cfg.clear_max_categories and action_count <= cfg.clear_max_actions:
            return Focus.CLEAR
        if category_count >= cfg.scattered_min_categories or (
            action_count >= cfg.busy_min_actions
            and category_count >= cfg.busy_min_categories
        ):
            return Focus.SCATTERED
        return Focus.MIXED

    # =========================================================
    # INTERNAL METHODS
    # =========================================================

    def _recommendations(
        self,
        mood: Mood,
        energy: Energy,
        focus: Focus,
        actions: ActionDetectionResult,
        topics: TopicResult,
        usage: Optional[UsageContext],
    ) -> List[str]:
        cfg = self._config
        recommendations: List[str] = []

        high_count = actions.count_by_priority(Priority.HIGH)
        if high_count:
            recommendations.append(
                f"Tackle your {high_count} high-priority "
                f"item{'s' if high_count != 1 else ''} first"
            )
        if actions.total_count >= cfg.busy_min_actions:
            recommendations.append("Break your action items into smaller steps")

        if mood in (Mood.NEGATIVE, Mood.CONCERNED):
            recommendations.append("Take a short break and note what is weighing on you")
        elif mood in (Mood.EXCITED, Mood.POSITIVE):
            recommendations.append("Capture what is going well while the momentum is there")
        elif mood == Mood.THOUGHTFUL:
            recommendations.append("Turn one of these reflections into a concrete next step")

        if focus == Focus.SCATTERED:
            recommendations.append("Try focusing on one topic at a time")

        if energy == Energy.LOW:
            recommendations.append("Plan lighter tasks for low-energy moments")

        if topics.top_category in CATEGORY_RECOMMENDATIONS:
            recommendations.append(CATEGORY_RECOMMENDATIONS[topics.top_category])

        if usage is not None and usage.memory_count < 3:
            recommendations.append("Record a few more entries to unlock trends")

        unique: List[str] = []
        for rec in recommendations:
            if rec not in unique:
                unique.append(rec)

        return unique[:cfg.max_recommendations] or [FALLBACK_RECOMMENDATION]

    def _patterns(
        self,
        sentiment: SentimentOutcome,
        actions: ActionDetectionResult,
        topics: TopicResult,
        word_count: int,
        usage: Optional[UsageContext],
    ) -> List[str]:
        cfg = self._config
        patterns: List[str] = []
        breakdown = sentiment.breakdown

        if actions.total_count >= cfg.action_oriented_min_actions:
            patterns.append("Action-oriented thinking")

        if any(c in actions.categories for c in PLANNING_CATEGORIES):
            patterns.append("Planning ahead")

        positive = len(breakdown.positive_words)
        negative = len(breakdown.negative_words)
        if positive and negative:
            patterns.append("Mixed emotions")
        elif positive >= cfg.expressive_min_words:
            patterns.append("Positive self-expression")
        elif negative >= cfg.expressive_min_words:
            patterns.append("Working through difficulties")

        if topics.top_category:
            patterns.append(f"Focus on {topics.top_category.replace('_', ' ')}")

        if usage is not None:
            if usage.active_days_last_week >= cfg.consistent_min_active_days:
                patterns.append("Consistent daily reflection")
            if (
                usage.average_word_count > 0
                and word_count > usage.average_word_count * cfg.longer_than_usual_ratio
            ):
                patterns.append("Longer reflection than usual")

        return patterns


__all__ = [
    "InsightGenerator",
    "InsightConfig",
    "FALLBACK_RECOMMENDATION",
]

"""
Offline NLP - Topic Extractor.

============================================================
RESPONSIBILITY
============================================================
Extracts ranked keywords and topic categories from transcripts.

- Word frequency statistics over non-stop-word tokens
- Blended relevance (frequency, domain weight, length, position)
- Keyword-to-category matching (exact and partial)
- Primary / secondary topic hierarchy

============================================================
DESIGN PRINCIPLES
============================================================
- Categories are predefined, not discovered
- Relevance always travels with its raw frequency
- Category data is read-only during extraction
- DESCRIPTIVE labels only

============================================================
TOPIC TAXONOMY
============================================================
- work: Career, meetings, projects
- health: Fitness, medical, wellbeing
- relationships: Family, friends, social
- personal_development: Learning, goals, reflection
- finance: Money, budget, investment
- technology: Devices, software, data
- home: Living space, maintenance
- travel: Trips, recreation, hobbies

============================================================
"""

import logging
import re
import threading
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import CategoryRegistrationError
from ..models import CategoryScore, QuickTopics, TopicKeyword, TopicResult


logger = logging.getLogger(__name__)


# ============================================================
# CONFIGURATION
# ============================================================


@dataclass
class TopicExtractorConfig:
    """Configuration for topic extraction."""

    # Token length must fall in [min_word_length, max_word_length)
    min_word_length: int = 3
    max_word_length: int = 20

    # Relevance weights
    frequency_weight: float = 0.4
    domain_weight: float = 0.4
    default_domain_score: float = 0.3
    max_length_bonus: float = 0.3
    length_bonus_step: float = 0.05
    position_bonus: float = 0.1

    # Words within this fraction of either end of the text get the position bonus
    position_window: float = 0.2

    min_relevance: float = 0.2
    primary_relevance: float = 0.5
    secondary_relevance: float = 0.3

    # Weight of a partial (substring) keyword/category match
    partial_match_weight: float = 0.5

    max_keywords: int = 15
    max_categories: int = 5

    version: str = "1.0.0"


# ============================================================
# VOCABULARIES
# ============================================================


STOP_WORDS = frozenset({
    # Articles and determiners
    "a", "an", "the", "this", "that", "these", "those", "my", "your", "his",
    "her", "its", "our", "their",
    # Pronouns
    "i", "me", "you", "he", "him", "she", "it", "we", "us", "they", "them",
    "myself", "yourself",
    # Prepositions
    "in", "on", "at", "by", "for", "with", "about", "against", "between",
    "into", "through", "during", "before", "after", "above", "below", "up",
    "down", "out", "off", "over", "under", "again", "further",
    # Conjunctions
    "and", "or", "but", "if", "then", "because", "as", "until", "while", "of",
    "to", "from", "since",
    # Auxiliary verbs
    "is", "am", "are", "was", "were", "be", "been", "being", "have", "has",
    "had", "having", "do", "does", "did", "doing", "will", "would", "could",
    "should", "may", "might", "must", "can", "shall",
    # Common adverbs
    "very", "really", "quite", "rather", "just", "only", "also", "too", "so",
    "now", "here", "there", "when", "where", "why", "how", "all", "any",
    "both", "each", "few", "more", "most", "other", "some", "such", "no",
    "nor", "not", "own", "same", "than", "well",
    # Time and frequency
    "today", "tomorrow", "yesterday", "always", "never", "sometimes", "often",
    "usually", "maybe", "perhaps", "probably", "definitely", "certainly",
    "surely",
})

TOPIC_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "work": (
        "work", "job", "career", "office", "meeting", "project", "task",
        "deadline", "team", "manager", "boss", "colleague", "client", "customer",
        "presentation", "report", "proposal", "budget", "strategy", "planning",
        "development", "business", "company", "organization", "department",
        "position", "role", "responsibility", "skill", "experience", "training",
        "conference", "interview", "promotion", "raise", "bonus", "performance",
        "review", "feedback", "goal", "objective", "target", "achievement",
        "success", "failure", "challenge", "opportunity", "email", "phone",
        "call", "communication", "collaboration", "teamwork", "leadership",
        "management", "administration", "coordination", "supervision",
        "delegation", "execution",
    ),
    "health": (
        "health", "wellness", "fitness", "exercise", "workout", "gym", "running",
        "walking", "sport", "yoga", "meditation", "diet", "nutrition", "food",
        "eating", "meal", "cooking", "recipe", "doctor", "medical",
        "appointment", "checkup", "treatment", "medicine", "medication",
        "hospital", "clinic", "therapy", "counseling", "mental", "emotional",
        "stress", "anxiety", "depression", "mood", "feeling", "energy", "sleep",
        "rest", "relaxation", "recovery", "injury", "pain", "ache", "sick",
        "illness", "disease", "condition", "symptom", "weight", "muscle",
        "strength", "cardio", "flexibility", "balance", "coordination",
        "breathing", "heart", "blood", "pressure", "cholesterol", "diabetes",
        "allergy",
    ),
    "relationships": (
        "family", "friend", "relationship", "partner", "spouse", "marriage",
        "dating", "love", "romance", "friendship", "social", "party",
        "gathering", "event", "celebration", "communication", "conversation",
        "discussion", "argument", "conflict", "agreement", "support", "help",
        "advice", "guidance", "understanding", "empathy", "compassion", "trust",
        "respect", "loyalty", "commitment", "bond", "connection", "intimacy",
        "parent", "child", "son", "daughter", "mother", "father", "brother",
        "sister", "grandparent", "uncle", "aunt", "cousin", "neighbor",
        "community", "group", "club", "organization", "network", "contact",
        "acquaintance", "colleague",
    ),
    "personal_development": (
        "learning", "education", "study", "course", "class", "training",
        "skill", "knowledge", "growth", "development", "improvement",
        "progress", "achievement", "goal", "objective", "plan", "strategy",
        "vision", "dream", "aspiration", "ambition", "motivation",
        "inspiration", "creativity", "innovation", "thinking", "reflection",
        "contemplation", "mindfulness", "awareness", "consciousness",
        "spirituality", "philosophy", "wisdom", "book", "reading", "writing",
        "journal", "diary", "note", "idea", "thought", "concept", "theory",
        "practice", "habit", "routine", "discipline", "consistency",
        "challenge", "opportunity", "experience", "adventure", "exploration",
        "discovery",
    ),
    "finance": (
        "money", "finance", "financial", "budget", "expense", "cost", "price",
        "payment", "salary", "income", "earning", "profit", "loss", "saving",
        "spending", "investment", "stock", "bond", "portfolio", "retirement",
        "pension", "insurance", "tax", "debt", "loan", "mortgage", "credit",
        "banking", "account", "transaction", "purchase", "buy", "sell", "trade",
        "market", "economy", "inflation", "recession", "growth", "wealth",
        "rich", "poor", "expensive", "cheap", "affordable", "valuable", "worth",
    ),
    "technology": (
        "technology", "computer", "laptop", "desktop", "phone", "mobile",
        "smartphone", "tablet", "software", "application", "app", "program",
        "system", "platform", "website", "internet", "online", "digital",
        "electronic", "device", "gadget", "tool", "equipment", "hardware",
        "network", "connection", "wireless", "bluetooth", "wifi", "data",
        "information", "database", "server", "cloud", "storage", "backup",
        "security", "privacy", "encryption", "coding", "programming",
        "development", "design", "interface", "user", "experience",
        "artificial", "intelligence", "machine", "learning", "automation",
        "robot", "smart",
    ),
    "home": (
        "home", "house", "apartment", "room", "bedroom", "kitchen", "bathroom",
        "living", "dining", "office", "garage", "garden", "yard", "furniture",
        "decoration", "design", "renovation", "repair", "maintenance",
        "cleaning", "organization", "storage", "appliance", "electric",
        "plumbing", "heating", "cooling", "lighting", "security",
        "neighborhood", "location", "address", "rent", "mortgage", "property",
        "real estate", "moving", "packing", "unpacking", "settling", "comfort",
        "cozy", "spacious", "modern",
    ),
    "travel": (
        "travel", "trip", "vacation", "holiday", "journey", "adventure",
        "exploration", "tour", "destination", "location", "place", "city",
        "country", "continent", "culture", "local", "flight", "plane",
        "airport", "hotel", "accommodation", "booking", "reservation",
        "restaurant", "food", "cuisine", "sightseeing", "attraction", "museum",
        "park", "beach", "mountain", "nature", "landscape", "scenery", "photo",
        "memory", "experience", "recreation", "entertainment", "fun", "hobby",
        "interest", "passion", "activity", "sport", "game", "music", "movie",
        "book", "art", "creativity", "relaxation",
    ),
}

# Base relevance of domain-significant words (others use the default)
DOMAIN_KEYWORDS: Tuple[Tuple[float, Tuple[str, ...]], ...] = (
    # Emotional / psychological
    (0.8, ("feel", "feeling", "emotion", "mood", "think", "thought", "mind", "mental")),
    # Action / productivity
    (0.7, ("plan", "goal", "objective", "task", "project", "work", "complete", "finish")),
    # Time / scheduling
    (0.6, ("time", "schedule", "calendar", "deadline", "urgent", "priority", "important")),
    # Learning / growth
    (0.7, ("learn", "study", "practice", "skill", "knowledge", "improve", "develop", "grow")),
    # Problem / solution
    (0.8, ("problem", "issue", "challenge", "solution", "fix", "solve", "resolve", "handle")),
    # Relationships
    (0.6, ("family", "friend", "colleague", "team", "partner", "relationship", "communication")),
)


# ============================================================
# TOPIC EXTRACTOR
# ============================================================


class TopicExtractor:
    """
    Frequency and relevance based topic extractor.

    ============================================================
    USAGE
    ============================================================
    ```python
    extractor = TopicExtractor()

    result = extractor.extract(text, tokens)
    print(result.primary)
    print(result.categories)
    ```

    ============================================================
    """

    NON_WORD = re.compile(r"[^\w]")
    DIGITS = re.compile(r"^\d+$")

    def __init__(self, config: Optional[TopicExtractorConfig] = None) -> None:
        """
        Initialize the topic extractor.

        Args:
            config: Extraction configuration
        """
        self._config = config or TopicExtractorConfig()
        self._lock = threading.RLock()
        self._categories: Mapping[str, Tuple[str, ...]] = MappingProxyType(
            dict(TOPIC_CATEGORIES)
        )
        self._domain_scores: Mapping[str, float] = MappingProxyType({
            word: score
            for score, words in DOMAIN_KEYWORDS
            for word in words
        })

        logger.info(
            f"TopicExtractor initialized with {len(self._categories)} categories "
            f"and {len(STOP_WORDS)} stop words"
        )

    @property
    def version(self) -> str:
        """Get extractor version."""
        return self._config.version

    # =========================================================
    # PUBLIC API
    # =========================================================

    def extract(self, text: str, tokens: Sequence[str]) -> TopicResult:
        """
        Extract keywords, categories and the topic hierarchy.

        Args:
            text: Cleaned transcript text (used for position bonus)
            tokens: Word tokens of the same text

        Returns:
            TopicResult with top keywords and categories
        """
        categories = self._categories
        frequencies = self._word_frequencies(tokens)
        keywords = self._score_keywords(frequencies, text or "")
        category_scores = self._score_categories(keywords, categories)
        primary, secondary = self._build_hierarchy(keywords, category_scores)

        logger.debug(
            f"Extracted {len(primary)} primary and {len(secondary)} secondary topics"
        )

        return TopicResult(
            primary=primary,
            secondary=secondary,
            keywords=keywords[:self._config.max_keywords],
            categories=[c.name for c in category_scores[:self._config.max_categories]],
            category_scores=category_scores,
        )

    def quick_analyze(self, tokens: Sequence[str]) -> QuickTopics:
        """Top five words by raw frequency, for real-time feedback."""
        frequencies = self._word_frequencies(tokens)
        top_words = [
            word for word, _ in sorted(
                frequencies.items(), key=lambda item: item[1], reverse=True,
            )[:5]
        ]
        return QuickTopics(
            topics=tuple(top_words),
            confidence=round(min(0.9, len(top_words) * 0.15), 2),
        )

    def add_custom_category(self, name: str, keywords: Iterable[str]) -> None:
        """
        Add or replace a topic category.

        Raises:
            CategoryRegistrationError: empty name or keyword list
        """
        if not isinstance(name, str) or not name.strip():
            raise CategoryRegistrationError(
                "Category name must be a non-empty string",
                category=str(name),
            )
        if isinstance(keywords, str):
            raise CategoryRegistrationError(
                "Category keywords must be a list of strings",
                category=name,
            )

        words = list(keywords or [])
        if not words or any(not isinstance(w, str) or not w.strip() for w in words):
            raise CategoryRegistrationError(
                "Category keywords must be a non-empty list of non-empty strings",
                category=name,
            )

        name = name.strip()
        with self._lock:
            updated = dict(self._categories)
            updated[name] = tuple(w.strip().lower() for w in words)
            self._categories = MappingProxyType(updated)

        logger.info(f"Added custom topic category: {name} with {len(words)} keywords")

    def get_categories(self) -> List[str]:
        return list(self._categories.keys())

    def get_category_count(self) -> int:
        return len(self._categories)

    def get_category_keywords(self, category: str) -> List[str]:
        """Get keywords for a specific category."""
        return list(self._categories.get(category, ()))

    # =========================================================
    # INTERNAL METHODS
    # =========================================================

    def _word_frequencies(self, tokens: Sequence[str]) -> Counter:
        """Count normalized content words, preserving first-seen order."""
        cfg = self._config
        frequencies: Counter = Counter()
        for token in tokens:
            word = self.NON_WORD.sub("", token.lower())
            if not cfg.min_word_length <= len(word) < cfg.max_word_length:
                continue
            if word in STOP_WORDS or self.DIGITS.match(word):
                continue
            frequencies[word] += 1
        return frequencies

    def _score_keywords(self, frequencies: Counter, text: str) -> List[TopicKeyword]:
        """Blend frequency, domain weight, length and position into relevance."""
        if not frequencies:
            return []

        cfg = self._config
        max_freq = max(frequencies.values())
        lower_text = text.lower()
        text_length = len(text)

        scored: List[TopicKeyword] = []
        for word, frequency in frequencies.items():
            normalized = frequency / max_freq
            domain = self._domain_scores.get(word, cfg.default_domain_score)
            length_bonus = min(
                cfg.max_length_bonus,
                (len(word) - 3) * cfg.length_bonus_step,
            )

            # Words missing from the text (find == -1) count as early
            first = lower_text.find(word)
            last = lower_text.rfind(word)
            near_edge = (
                first < text_length * cfg.position_window
                or last > text_length * (1 - cfg.position_window)
            )
            position_bonus = cfg.position_bonus if near_edge else 0.0

            relevance = (
                normalized * cfg.frequency_weight
                + domain * cfg.domain_weight
                + length_bonus
                + position_bonus
            )
            scored.append(TopicKeyword(
                word=word,
                frequency=frequency,
                relevance=round(relevance, 3),
            ))

        scored.sort(key=lambda k: k.relevance, reverse=True)
        return [k for k in scored if k.relevance > cfg.min_relevance]

    def _score_categories(
        self,
        keywords: List[TopicKeyword],
        categories: Mapping[str, Tuple[str, ...]],
    ) -> List[CategoryScore]:
        """
        Score categories by keyword matches.

        An exact match adds full relevance; every substring overlap in
        either direction adds partial relevance (an exact match counts
        for both).
        """
        weight = self._config.partial_match_weight
        scores: List[CategoryScore] = []

        for name, category_words in categories.items():
            score = 0.0
            for keyword in keywords:
                word = keyword.word.lower()
                if word in category_words:
                    score += keyword.relevance
                for category_word in category_words:
                    if category_word in word or word in category_word:
                        score += keyword.relevance * weight
            if score > 0:
                scores.append(CategoryScore(name=name, score=score))

        scores.sort(key=lambda c: c.score, reverse=True)
        return scores

    def _build_hierarchy(
        self,
        keywords: List[TopicKeyword],
        category_scores: List[CategoryScore],
    ) -> Tuple[List[str], List[str]]:
        """Split keywords and categories into primary and secondary topics."""
        cfg = self._config
        category_names = [c.name for c in category_scores]

        primary: List[str] = []
        for topic in (
            [k.word for k in keywords[:5] if k.relevance > cfg.primary_relevance]
            + category_names[:2]
        ):
            if topic not in primary:
                primary.append(topic)

        secondary: List[str] = []
        for topic in (
            [k.word for k in keywords[5:10] if k.relevance > cfg.secondary_relevance]
            + category_names[2:4]
        ):
            if topic not in secondary and topic not in primary:
                secondary.append(topic)

        return primary, secondary


__all__ = [
    "TopicExtractor",
    "TopicExtractorConfig",
    "STOP_WORDS",
    "TOPIC_CATEGORIES",
    "DOMAIN_KEYWORDS",
]

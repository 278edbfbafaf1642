"""
Offline NLP Data Models - Normalized analysis structures.

All intermediate outputs are created fresh per process_text call.
AnalysisResult is the only object handed back to callers; its to_dict()
form is the wire contract for persistence and transport collaborators.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .schemas import AnalysisResultSchema


# ============================================================
# ENUMS
# ============================================================


class SentimentLabel(Enum):
    """Sentiment polarity label."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Priority(Enum):
    """Action pattern priority tier."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def score(self) -> int:
        """Numeric score used for ordering (high=3, medium=2, low=1)."""
        return PRIORITY_SCORES[self]


PRIORITY_SCORES: Dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


class Mood(Enum):
    """Mood classification, finer-grained than sentiment."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    EXCITED = "excited"
    CONCERNED = "concerned"
    THOUGHTFUL = "thoughtful"


class Energy(Enum):
    """Energy level bucket."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Focus(Enum):
    """Focus classification."""
    CLEAR = "clear"
    SCATTERED = "scattered"
    MIXED = "mixed"


# ============================================================
# SENTIMENT
# ============================================================


@dataclass
class SentimentBreakdown:
    """Tokens that supported a sentiment score."""
    positive_words: List[str] = field(default_factory=list)
    negative_words: List[str] = field(default_factory=list)
    intensifiers: List[str] = field(default_factory=list)
    negators: List[str] = field(default_factory=list)

    @property
    def sentiment_word_count(self) -> int:
        return len(self.positive_words) + len(self.negative_words)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "positiveWords": list(self.positive_words),
            "negativeWords": list(self.negative_words),
            "intensifiers": list(self.intensifiers),
            "negators": list(self.negators),
        }


@dataclass(frozen=True)
class SentimentOutcome:
    """
    Sentiment analysis output.

    score: -1.0 (negative) to +1.0 (positive)
    confidence: 0.0 to 1.0
    label: derived from score via fixed thresholds
    """
    score: float
    confidence: float
    label: SentimentLabel
    breakdown: SentimentBreakdown = field(default_factory=SentimentBreakdown)

    def __post_init__(self) -> None:
        """Clamp score and confidence to their ranges."""
        if not -1.0 <= self.score <= 1.0:
            object.__setattr__(self, "score", max(-1.0, min(1.0, self.score)))
        if not 0.0 <= self.confidence <= 1.0:
            object.__setattr__(self, "confidence", max(0.0, min(1.0, self.confidence)))

    @classmethod
    def neutral(cls) -> "SentimentOutcome":
        """Zero-valued default."""
        return cls(score=0.0, confidence=0.0, label=SentimentLabel.NEUTRAL)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "confidence": self.confidence,
            "label": self.label.value,
            "breakdown": self.breakdown.to_dict(),
        }


@dataclass(frozen=True)
class QuickSentiment:
    """Cheap sentiment estimate for real-time feedback."""
    label: SentimentLabel
    confidence: float
    emoji: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label.value,
            "confidence": self.confidence,
            "emoji": self.emoji,
        }


# ============================================================
# ACTION ITEMS
# ============================================================


@dataclass(frozen=True)
class PatternEntry:
    """A named action detection pattern. Immutable once registered."""
    name: str
    regex: "re.Pattern[str]"
    priority: Priority
    category: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "regex": self.regex.pattern,
            "priority": self.priority.value,
            "category": self.category,
            "description": self.description,
        }


@dataclass(frozen=True)
class ActionCandidate:
    """A cleaned fragment judged to be an actionable statement."""
    text: str
    pattern: str
    priority: Priority


@dataclass
class PatternMatchGroup:
    """Cleaned, deduplicated matches produced by one pattern."""
    pattern: str
    matches: List[str]
    priority: Priority
    category: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "matches": list(self.matches),
            "priority": self.priority.value,
        }


@dataclass
class ActionDetectionResult:
    """Result of action item detection."""
    items: List[str] = field(default_factory=list)
    patterns: List[PatternMatchGroup] = field(default_factory=list)
    total_count: int = 0
    candidates: List[ActionCandidate] = field(default_factory=list)

    @property
    def has_items(self) -> bool:
        return self.total_count > 0

    def count_by_priority(self, priority: Priority) -> int:
        """Number of unique items whose best priority is the given tier."""
        return sum(1 for c in self.candidates if c.priority == priority)

    @property
    def categories(self) -> List[str]:
        """Categories of the patterns that produced matches."""
        seen: List[str] = []
        for group in self.patterns:
            if group.category and group.category not in seen:
                seen.append(group.category)
        return seen

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": list(self.items),
            "patterns": [p.to_dict() for p in self.patterns],
            "totalCount": self.total_count,
        }


@dataclass(frozen=True)
class ActionPresence:
    """Cheap existence check for action items."""
    has_actions: bool
    confidence: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasActions": self.has_actions,
            "confidence": self.confidence,
            "count": self.count,
        }


# ============================================================
# TOPICS
# ============================================================


@dataclass(frozen=True)
class TopicKeyword:
    """A ranked keyword. Relevance is always paired with its raw frequency."""
    word: str
    frequency: int
    relevance: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "frequency": self.frequency,
            "relevance": self.relevance,
        }


@dataclass(frozen=True)
class CategoryScore:
    """A topic bucket with its aggregate relevance."""
    name: str
    score: float


@dataclass
class TopicResult:
    """Result of topic extraction."""
    primary: List[str] = field(default_factory=list)
    secondary: List[str] = field(default_factory=list)
    keywords: List[TopicKeyword] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    category_scores: List[CategoryScore] = field(default_factory=list)

    @property
    def top_category(self) -> Optional[str]:
        return self.categories[0] if self.categories else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary": list(self.primary),
            "secondary": list(self.secondary),
            "keywords": [k.to_dict() for k in self.keywords],
            "categories": list(self.categories),
        }


@dataclass(frozen=True)
class QuickTopics:
    """Cheap topic estimate for real-time feedback."""
    topics: Tuple[str, ...]
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {"topics": list(self.topics), "confidence": self.confidence}


# ============================================================
# INSIGHTS
# ============================================================


@dataclass(frozen=True)
class UsageContext:
    """
    Optional usage statistics supplied by the host application.

    The engine never collects these itself.
    """
    memory_count: int = 0
    active_days_last_week: int = 0
    average_word_count: float = 0.0


@dataclass
class InsightSummary:
    """Mood/energy/focus summary with recommendations."""
    mood: Mood = Mood.NEUTRAL
    energy: Energy = Energy.MEDIUM
    focus: Focus = Focus.MIXED
    recommendations: List[str] = field(default_factory=list)
    patterns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mood": self.mood.value,
            "energy": self.energy.value,
            "focus": self.focus.value,
            "recommendations": list(self.recommendations),
            "patterns": list(self.patterns),
        }


# ============================================================
# ANALYSIS RESULT
# ============================================================


@dataclass(frozen=True)
class AnalysisResult:
    """
    Complete snapshot of one process_text call.

    This is the sole artifact exposed outside the engine.
    """
    original_text: str
    processed_text: str
    word_count: int
    sentence_count: int
    sentiment: SentimentOutcome
    action_items: ActionDetectionResult
    topics: TopicResult
    insights: InsightSummary
    processing_time: int  # milliseconds
    timestamp: datetime
    no_data_stored: bool = True

    @property
    def privacy(self) -> Dict[str, bool]:
        return {
            "dataProcessedLocally": True,
            "noExternalCalls": True,
            "noDataStored": self.no_data_stored,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire dictionary."""
        timestamp = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        timestamp = timestamp.astimezone(timezone.utc)
        return {
            "originalText": self.original_text,
            "processedText": self.processed_text,
            "wordCount": self.word_count,
            "sentenceCount": self.sentence_count,
            "sentiment": self.sentiment.to_dict(),
            "actionItems": self.action_items.to_dict(),
            "topics": self.topics.to_dict(),
            "insights": self.insights.to_dict(),
            "processingTime": self.processing_time,
            "timestamp": timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "privacy": self.privacy,
        }

    def to_schema(self) -> AnalysisResultSchema:
        """Validate the wire dictionary against the pydantic schema."""
        return AnalysisResultSchema.model_validate(self.to_dict())

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the validated wire dictionary."""
        return json.dumps(
            self.to_schema().model_dump(mode="json"),
            indent=indent,
            ensure_ascii=False,
        )


__all__ = [
    "SentimentLabel",
    "Priority",
    "PRIORITY_SCORES",
    "Mood",
    "Energy",
    "Focus",
    "SentimentBreakdown",
    "SentimentOutcome",
    "QuickSentiment",
    "PatternEntry",
    "ActionCandidate",
    "PatternMatchGroup",
    "ActionDetectionResult",
    "ActionPresence",
    "TopicKeyword",
    "CategoryScore",
    "TopicResult",
    "QuickTopics",
    "UsageContext",
    "InsightSummary",
    "AnalysisResult",
]

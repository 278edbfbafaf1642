"""
Pydantic Schemas for the Offline NLP wire contract and local API.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


# =============================================================
# ENUMS
# =============================================================

class SentimentLabelEnum(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class PriorityEnum(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MoodEnum(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    EXCITED = "excited"
    CONCERNED = "concerned"
    THOUGHTFUL = "thoughtful"


class EnergyEnum(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FocusEnum(str, Enum):
    CLEAR = "clear"
    SCATTERED = "scattered"
    MIXED = "mixed"


# =============================================================
# ANALYSIS RESULT (wire contract)
# =============================================================

class SentimentBreakdownSchema(BaseModel):
    """Tokens supporting the sentiment score."""
    model_config = ConfigDict(extra="forbid")

    positiveWords: List[str] = Field(default_factory=list)
    negativeWords: List[str] = Field(default_factory=list)
    intensifiers: List[str] = Field(default_factory=list)
    negators: List[str] = Field(default_factory=list)


class SentimentSchema(BaseModel):
    """Sentiment section."""
    model_config = ConfigDict(extra="forbid")

    score: float = Field(ge=-1.0, le=1.0)
    confidence: float = Field(ge=0.0, le=1.0)
    label: SentimentLabelEnum
    breakdown: SentimentBreakdownSchema


class PatternMatchSchema(BaseModel):
    """Matches produced by one action pattern."""
    model_config = ConfigDict(extra="forbid")

    pattern: str
    matches: List[str]
    priority: PriorityEnum


class ActionItemsSchema(BaseModel):
    """Action item section."""
    model_config = ConfigDict(extra="forbid")

    items: List[str] = Field(default_factory=list)
    patterns: List[PatternMatchSchema] = Field(default_factory=list)
    totalCount: int = Field(ge=0)


class KeywordSchema(BaseModel):
    """A ranked topic keyword."""
    model_config = ConfigDict(extra="forbid")

    word: str
    frequency: int = Field(ge=1)
    relevance: float


class TopicsSchema(BaseModel):
    """Topic section."""
    model_config = ConfigDict(extra="forbid")

    primary: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)
    keywords: List[KeywordSchema] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)


class InsightsSchema(BaseModel):
    """Insight section."""
    model_config = ConfigDict(extra="forbid")

    mood: MoodEnum
    energy: EnergyEnum
    focus: FocusEnum
    recommendations: List[str] = Field(default_factory=list)
    patterns: List[str] = Field(default_factory=list)


class PrivacySchema(BaseModel):
    """Privacy guarantees of a result."""
    model_config = ConfigDict(extra="forbid")

    dataProcessedLocally: bool = True
    noExternalCalls: bool = True
    noDataStored: bool = True


class AnalysisResultSchema(BaseModel):
    """Complete analysis result as persisted or transmitted."""
    model_config = ConfigDict(extra="forbid")

    originalText: str
    processedText: str
    wordCount: int = Field(ge=0)
    sentenceCount: int = Field(ge=0)
    sentiment: SentimentSchema
    actionItems: ActionItemsSchema
    topics: TopicsSchema
    insights: InsightsSchema
    processingTime: int = Field(ge=0)
    timestamp: str
    privacy: PrivacySchema


# =============================================================
# INTROSPECTION
# =============================================================

class QuickSentimentSchema(BaseModel):
    """Real-time sentiment estimate."""
    label: SentimentLabelEnum
    confidence: float = Field(ge=0.0, le=1.0)
    emoji: str


class EngineStatsSchema(BaseModel):
    """Engine statistics."""
    dictionarySize: int
    patternCount: int
    topicCategories: int
    isReady: bool
    privacy: str


# =============================================================
# REQUESTS
# =============================================================

class AnalyzeRequest(BaseModel):
    """Body of POST /analyze."""
    model_config = ConfigDict(extra="forbid")

    text: str
    options: Optional[Dict[str, Any]] = None


class QuickSentimentRequest(BaseModel):
    """Body of POST /sentiment/quick."""
    model_config = ConfigDict(extra="forbid")

    text: str


class CustomPatternRequest(BaseModel):
    """Body of POST /patterns."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    regex: str = Field(min_length=1)
    priority: PriorityEnum = PriorityEnum.MEDIUM
    category: str = Field(min_length=1)
    description: str = ""


class CustomWordsRequest(BaseModel):
    """Body of POST /words."""
    model_config = ConfigDict(extra="forbid")

    positive: List[str] = Field(default_factory=list)
    negative: List[str] = Field(default_factory=list)


__all__ = [
    "SentimentLabelEnum",
    "PriorityEnum",
    "MoodEnum",
    "EnergyEnum",
    "FocusEnum",
    "SentimentBreakdownSchema",
    "SentimentSchema",
    "PatternMatchSchema",
    "ActionItemsSchema",
    "KeywordSchema",
    "TopicsSchema",
    "InsightsSchema",
    "PrivacySchema",
    "AnalysisResultSchema",
    "QuickSentimentSchema",
    "EngineStatsSchema",
    "AnalyzeRequest",
    "QuickSentimentRequest",
    "CustomPatternRequest",
    "CustomWordsRequest",
]

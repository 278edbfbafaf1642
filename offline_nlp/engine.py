"""
Offline NLP - Analysis Pipeline.

============================================================
RESPONSIBILITY
============================================================
Sequences the analysis stages and assembles the result.

- Preprocess once, then sentiment, action items, topics, insights
- Honor per-call skip flags
- Isolate stage failures (a failed stage keeps its defaults)
- Stamp processing time and timestamp

============================================================
DESIGN PRINCIPLES
============================================================
- process_text never raises for analysis failures
- Engines are owned values built by create_engine(), no module singleton
- Shared dictionaries are read-only snapshots during analysis
- Transcript text is never logged, only its length

============================================================
"""

import asyncio
import functools
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .cleaning import TextPreprocessor, TextPreprocessorConfig
from .config import EngineConfig, ProcessingOptions
from .exceptions import ConfigurationError, StageError
from .insights import InsightGenerator
from .labeling import (
    ActionPatternConfig,
    ActionPatternRegistry,
    TopicExtractor,
)
from .models import (
    ActionDetectionResult,
    ActionPresence,
    AnalysisResult,
    InsightSummary,
    PatternEntry,
    Priority,
    QuickSentiment,
    QuickTopics,
    SentimentLabel,
    SentimentOutcome,
    TopicResult,
    UsageContext,
)
from .sentiment import SentimentDictionary


logger = logging.getLogger(__name__)


FALLBACK_RECOMMENDATIONS = [
    "Text processed locally with basic analysis",
    "All processing completed on your device",
    "Your privacy is fully protected",
]

PRIVACY_STATEMENT = "100% Local Processing - No Data Transmitted"

SENTIMENT_EMOJI = {
    SentimentLabel.POSITIVE: "\U0001F60A",
    SentimentLabel.NEGATIVE: "\U0001F614",
    SentimentLabel.NEUTRAL: "\U0001F610",
}


# ============================================================
# STAGES
# ============================================================


class AnalysisStage(Enum):
    """Analysis stages in execution order."""
    PREPROCESS = (1, "Text preprocessing")
    SENTIMENT = (2, "Sentiment analysis")
    ACTION_ITEMS = (3, "Action item detection")
    TOPICS = (4, "Topic extraction")
    INSIGHTS = (5, "Insight generation")

    @property
    def order(self) -> int:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


@dataclass
class StageOutcome:
    """Outcome of a single stage execution."""
    stage: AnalysisStage
    success: bool
    value: Any = None
    duration_ms: float = 0.0
    error: Optional[StageError] = None


class StageExecutor:
    """
    Executes a single stage with timing and error handling.
    """

    def __init__(self, stage: AnalysisStage, handler: Callable[[], Any]):
        self.stage = stage
        self.handler = handler
        self._logger = logging.getLogger(__name__)

    def execute(self) -> StageOutcome:
        started = time.perf_counter()

        self._logger.debug(
            f"Stage [{self.stage.order:02d}] START: {self.stage.description}"
        )

        try:
            value = self.handler()
        except Exception as e:
            duration = (time.perf_counter() - started) * 1000
            error = StageError(
                f"{self.stage.description} failed: {type(e).__name__}: {e}",
                stage=self.stage.name.lower(),
                cause=e,
            )
            self._logger.error(
                f"Stage [{self.stage.order:02d}] ERROR: {self.stage.description} "
                f"- {type(e).__name__}: {e}",
                exc_info=True,
            )
            return StageOutcome(
                stage=self.stage,
                success=False,
                duration_ms=duration,
                error=error,
            )

        duration = (time.perf_counter() - started) * 1000
        self._logger.debug(
            f"Stage [{self.stage.order:02d}] COMPLETE: {self.stage.description} "
            f"({duration:.2f}ms)"
        )
        return StageOutcome(
            stage=self.stage,
            success=True,
            value=value,
            duration_ms=duration,
        )


# ============================================================
# ANALYSIS PIPELINE
# ============================================================


class AnalysisPipeline:
    """
    Offline transcript analysis engine.

    Construction builds every dictionary, pattern bank and category
    table once; afterwards the engine is safe for concurrent
    process_text calls.

    ============================================================
    USAGE
    ============================================================
    ```python
    engine = create_engine()

    result = engine.process_text("I need to finish the report by Friday.")
    print(result.to_json(indent=2))

    engine.quick_sentiment("what a great day")
    ```

    ============================================================
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        preprocessor: Optional[TextPreprocessor] = None,
        sentiment_dictionary: Optional[SentimentDictionary] = None,
        action_patterns: Optional[ActionPatternRegistry] = None,
        topic_extractor: Optional[TopicExtractor] = None,
        insight_generator: Optional[InsightGenerator] = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._preprocessor = preprocessor or TextPreprocessor(
            TextPreprocessorConfig(max_length=self._config.max_text_length)
        )
        self._sentiment = sentiment_dictionary or SentimentDictionary()
        self._actions = action_patterns or ActionPatternRegistry(
            ActionPatternConfig(max_items=self._config.max_action_items)
        )
        self._topics = topic_extractor or TopicExtractor()
        self._insights = insight_generator or InsightGenerator()

    @property
    def config(self) -> EngineConfig:
        return self._config

    # =========================================================
    # PUBLIC API
    # =========================================================

    def process_text(
        self,
        text: str,
        options: Union[ProcessingOptions, Mapping[str, Any], None] = None,
        usage: Optional[UsageContext] = None,
    ) -> AnalysisResult:
        """
        Analyze a transcript.

        Args:
            text: Raw transcript text
            options: ProcessingOptions or a mapping of option flags
            usage: Optional usage statistics for insight patterns

        Returns:
            AnalysisResult; failed or skipped stages keep default sections

        Raises:
            InvalidOptionsError: options mapping has unknown or non-boolean
                entries (checked before any analysis starts)
        """
        started = time.perf_counter()
        opts = self._resolve_options(options)
        text = "" if text is None else str(text)

        logger.debug(f"Processing text locally ({len(text)} chars)")

        processed_text = text
        sentences: List[str] = []
        tokens: List[str] = []
        sentiment = SentimentOutcome.neutral()
        actions = ActionDetectionResult()
        topics = TopicResult()
        insights = InsightSummary()
        fallback = False

        preprocess = StageExecutor(
            AnalysisStage.PREPROCESS,
            lambda: self._preprocess(text),
        ).execute()
        if preprocess.success:
            processed_text, sentences, tokens = preprocess.value
        else:
            fallback = True

        if not fallback:
            if not opts.skip_sentiment:
                outcome = StageExecutor(
                    AnalysisStage.SENTIMENT,
                    lambda: self._sentiment.analyze(processed_text, tokens),
                ).execute()
                if outcome.success:
                    sentiment = outcome.value

            if not opts.skip_action_items:
                outcome = StageExecutor(
                    AnalysisStage.ACTION_ITEMS,
                    lambda: self._actions.detect(processed_text, sentences),
                ).execute()
                if outcome.success:
                    actions = outcome.value

            if not opts.skip_topics:
                outcome = StageExecutor(
                    AnalysisStage.TOPICS,
                    lambda: self._topics.extract(processed_text, tokens),
                ).execute()
                if outcome.success:
                    topics = outcome.value

            if not opts.skip_insights:
                outcome = StageExecutor(
                    AnalysisStage.INSIGHTS,
                    lambda: self._insights.generate(
                        sentiment=sentiment,
                        actions=actions,
                        topics=topics,
                        word_count=len(tokens),
                        sentence_count=len(sentences),
                        usage=usage,
                    ),
                ).execute()
                if outcome.success:
                    insights = outcome.value
                else:
                    fallback = True

        if fallback:
            insights = InsightSummary(recommendations=list(FALLBACK_RECOMMENDATIONS))

        processing_time = int((time.perf_counter() - started) * 1000)

        logger.debug(
            f"Local processing complete in {processing_time}ms "
            f"(words={len(tokens)}, actions={actions.total_count})"
        )

        return AnalysisResult(
            original_text=text,
            processed_text=processed_text,
            word_count=len(tokens),
            sentence_count=len(sentences),
            sentiment=sentiment,
            action_items=actions,
            topics=topics,
            insights=insights,
            processing_time=processing_time,
            timestamp=datetime.now(timezone.utc),
            no_data_stored=not opts.store_results,
        )

    async def aprocess_text(
        self,
        text: str,
        options: Union[ProcessingOptions, Mapping[str, Any], None] = None,
        usage: Optional[UsageContext] = None,
    ) -> AnalysisResult:
        """Run process_text off the event loop thread."""
        opts = self._resolve_options(options)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            functools.partial(self.process_text, text, opts, usage),
        )

    def quick_sentiment(self, text: str) -> QuickSentiment:
        """Count-only sentiment estimate for real-time feedback."""
        if not text or not text.strip():
            return QuickSentiment(
                label=SentimentLabel.NEUTRAL,
                confidence=0.0,
                emoji=SENTIMENT_EMOJI[SentimentLabel.NEUTRAL],
            )

        tokens = self._preprocessor.tokenize(text.lower())
        estimate = self._sentiment.quick_analyze(tokens)
        return QuickSentiment(
            label=estimate.label,
            confidence=estimate.confidence,
            emoji=SENTIMENT_EMOJI[estimate.label],
        )

    def quick_topics(self, text: str) -> QuickTopics:
        """Top words by frequency for real-time feedback."""
        return self._topics.quick_analyze(self._preprocessor.tokenize(text or ""))

    def has_action_items(self, text: str) -> ActionPresence:
        return self._actions.has_action_items(text or "")

    def get_stats(self) -> Dict[str, Any]:
        """Engine introspection."""
        return {
            "dictionarySize": self._sentiment.get_size(),
            "patternCount": self._actions.get_pattern_count(),
            "topicCategories": self._topics.get_category_count(),
            "isReady": True,
            "privacy": PRIVACY_STATEMENT,
        }

    def add_custom_pattern(
        self,
        name: str,
        regex: Any,
        priority: Union[str, Priority],
        category: str,
        description: str = "",
    ) -> PatternEntry:
        """Register an action pattern for subsequent calls."""
        return self._actions.add_custom_pattern(
            name, regex, priority, category, description,
        )

    def add_custom_words(
        self,
        positive: Optional[Iterable[str]] = None,
        negative: Optional[Iterable[str]] = None,
    ) -> None:
        """Add sentiment words for subsequent calls."""
        self._sentiment.add_custom_words(positive, negative)

    def add_custom_category(self, name: str, keywords: Iterable[str]) -> None:
        """Add or replace a topic category for subsequent calls."""
        self._topics.add_custom_category(name, keywords)

    # =========================================================
    # INTERNAL METHODS
    # =========================================================

    def _preprocess(self, text: str):
        processed = self._preprocessor.clean(text)
        return (
            processed,
            self._preprocessor.split_sentences(processed),
            self._preprocessor.tokenize(processed),
        )

    @staticmethod
    def _resolve_options(
        options: Union[ProcessingOptions, Mapping[str, Any], None],
    ) -> ProcessingOptions:
        if isinstance(options, ProcessingOptions):
            return options
        return ProcessingOptions.from_dict(options)


# ============================================================
# FACTORY
# ============================================================


def create_engine(
    config: Optional[EngineConfig] = None,
    from_env: bool = False,
) -> AnalysisPipeline:
    """
    Build a ready engine.

    Construction compiles the pattern bank and builds all vocabularies;
    reuse the returned engine across calls.

    Args:
        config: Engine configuration (default: built-in defaults)
        from_env: Load configuration from OFFLINE_NLP_* variables
            when no config is given

    Raises:
        ConfigurationError: configuration fails validation
    """
    if config is None:
        config = EngineConfig.from_env() if from_env else EngineConfig()

    errors = config.validate()
    if errors:
        raise ConfigurationError(
            f"Invalid engine configuration: {'; '.join(errors)}",
            errors=errors,
        )

    started = time.perf_counter()
    engine = AnalysisPipeline(config)
    stats = engine.get_stats()

    logger.info(
        f"Offline NLP engine ready in {(time.perf_counter() - started) * 1000:.1f}ms "
        f"(dictionary={stats['dictionarySize']}, patterns={stats['patternCount']}, "
        f"categories={stats['topicCategories']})"
    )
    return engine


__all__ = [
    "AnalysisPipeline",
    "AnalysisStage",
    "StageExecutor",
    "StageOutcome",
    "create_engine",
    "FALLBACK_RECOMMENDATIONS",
    "PRIVACY_STATEMENT",
    "SENTIMENT_EMOJI",
]

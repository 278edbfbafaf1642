"""
Offline NLP - Labeling Package.

Modules:
- action_patterns: Regex-bank action item detection
- topic_extractor: Keyword and category extraction
"""

from .action_patterns import ActionPatternConfig, ActionPatternRegistry
from .topic_extractor import TopicExtractor, TopicExtractorConfig

__all__ = [
    "ActionPatternRegistry",
    "ActionPatternConfig",
    "TopicExtractor",
    "TopicExtractorConfig",
]

"""
Offline NLP - Sentiment Package.

Modules:
- sentiment_dictionary: Contextual dictionary-based sentiment scoring
"""

from .sentiment_dictionary import SentimentDictionary, SentimentDictionaryConfig

__all__ = [
    "SentimentDictionary",
    "SentimentDictionaryConfig",
]

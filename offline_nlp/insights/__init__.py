"""
Offline NLP - Insights Package.

Modules:
- insight_generator: Rule-based mood/energy/focus synthesis
"""

from .insight_generator import FALLBACK_RECOMMENDATION, InsightConfig, InsightGenerator

__all__ = [
    "InsightGenerator",
    "InsightConfig",
    "FALLBACK_RECOMMENDATION",
]

"""
Offline NLP - On-device transcript analysis.

============================================================
PURPOSE
============================================================
Turns a raw spoken-word transcript into structured sentiment,
action items, topics and behavioral insights using only local
dictionaries, regex pattern banks and frequency statistics.

No network calls. No model inference. No persistence.

============================================================
USAGE
============================================================
```python
from offline_nlp import create_engine

engine = create_engine()
result = engine.process_text("I need to call John about the deadline tomorrow")
print(result.to_dict()["actionItems"]["items"])
```

============================================================
"""

from .config import EngineConfig, ProcessingOptions, setup_logging
from .engine import AnalysisPipeline, create_engine
from .exceptions import (
    CategoryRegistrationError,
    ConfigurationError,
    DictionaryUpdateError,
    InvalidOptionsError,
    OfflineNLPError,
    PatternRegistrationError,
    StageError,
)
from .models import (
    AnalysisResult,
    Energy,
    Focus,
    Mood,
    Priority,
    SentimentLabel,
    UsageContext,
)

__version__ = "1.0.0"

__all__ = [
    "create_engine",
    "AnalysisPipeline",
    "AnalysisResult",
    "EngineConfig",
    "ProcessingOptions",
    "UsageContext",
    "setup_logging",
    "SentimentLabel",
    "Priority",
    "Mood",
    "Energy",
    "Focus",
    "OfflineNLPError",
    "ConfigurationError",
    "InvalidOptionsError",
    "PatternRegistrationError",
    "DictionaryUpdateError",
    "CategoryRegistrationError",
    "StageError",
]

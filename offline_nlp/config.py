"""
Offline NLP - Configuration.

============================================================
RESPONSIBILITY
============================================================
All configuration for the offline analysis engine.

- ProcessingOptions: per-call flags (which stages to run)
- EngineConfig: process-wide settings loaded from environment
- setup_logging: structured stdout logging

============================================================
ENVIRONMENT
============================================================
OFFLINE_NLP_LOG_LEVEL         (default: INFO)
OFFLINE_NLP_LOG_FORMAT        (json | text, default: text)
OFFLINE_NLP_MAX_TEXT_LENGTH   (default: 100000)
OFFLINE_NLP_MAX_ACTION_ITEMS  (default: 0 = unlimited)
OFFLINE_NLP_API_HOST          (default: 127.0.0.1)
OFFLINE_NLP_API_PORT          (default: 8765)

============================================================
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, TextIO

from dotenv import find_dotenv, load_dotenv

from .exceptions import InvalidOptionsError


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMATS = ["json", "text"]


# ============================================================
# PROCESSING OPTIONS
# ============================================================

@dataclass(frozen=True)
class ProcessingOptions:
    """Flags recognized by process_text."""

    skip_sentiment: bool = False
    """Leave the sentiment section at neutral defaults."""

    skip_action_items: bool = False
    """Leave the action item section empty."""

    skip_topics: bool = False
    """Leave the topic section empty."""

    skip_insights: bool = False
    """Leave insights at neutral/medium/mixed with no recommendations."""

    store_results: bool = False
    """Caller intends to persist the result. Only affects privacy.noDataStored."""

    # Wire (camelCase) name -> field name
    _WIRE_NAMES = {
        "skipSentiment": "skip_sentiment",
        "skipActionItems": "skip_action_items",
        "skipTopics": "skip_topics",
        "skipInsights": "skip_insights",
        "storeResults": "store_results",
    }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProcessingOptions":
        """
        Build options from a mapping.

        Accepts both wire names (skipSentiment) and field names
        (skip_sentiment). None values are treated as False.

        Raises:
            InvalidOptionsError: unknown key or non-boolean value
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        values: Dict[str, bool] = {}

        for key, value in data.items():
            name = cls._WIRE_NAMES.get(key, key)
            if name not in known:
                raise InvalidOptionsError(
                    f"Unknown processing option: {key}",
                    option=str(key),
                )
            if value is None:
                value = False
            if not isinstance(value, bool):
                raise InvalidOptionsError(
                    f"Option {key} must be a boolean, got {type(value).__name__}",
                    option=str(key),
                )
            values[name] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, bool]:
        """Convert to wire form."""
        return {
            wire: getattr(self, name)
            for wire, name in self._WIRE_NAMES.items()
        }


# ============================================================
# ENGINE CONFIGURATION
# ============================================================

@dataclass
class EngineConfig:
    """Process-wide configuration for the engine and its surfaces."""

    log_level: str = "INFO"
    """Logging level."""

    log_format: str = "text"
    """Logging output format (json or text)."""

    max_text_length: int = 100000
    """Input longer than this is truncated before analysis."""

    max_action_items: int = 0
    """Cap on returned action items (0 = unlimited)."""

    api_host: str = "127.0.0.1"
    """Bind host for the local HTTP API."""

    api_port: int = 8765
    """Bind port for the local HTTP API."""

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "EngineConfig":
        """Load configuration from environment variables and ./.env."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        return cls(
            log_level=os.getenv("OFFLINE_NLP_LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("OFFLINE_NLP_LOG_FORMAT", "text").lower(),
            max_text_length=int(os.getenv("OFFLINE_NLP_MAX_TEXT_LENGTH", "100000")),
            max_action_items=int(os.getenv("OFFLINE_NLP_MAX_ACTION_ITEMS", "0")),
            api_host=os.getenv("OFFLINE_NLP_API_HOST", "127.0.0.1"),
            api_port=int(os.getenv("OFFLINE_NLP_API_PORT", "8765")),
        )

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"log_level must be one of {LOG_LEVELS}")

        if self.log_format not in LOG_FORMATS:
            errors.append(f"log_format must be one of {LOG_FORMATS}")

        if self.max_text_length < 1:
            errors.append("max_text_length must be at least 1")

        if self.max_action_items < 0:
            errors.append("max_action_items must not be negative")

        if not 0 < self.api_port < 65536:
            errors.append("api_port must be between 1 and 65535")

        return errors


# ============================================================
# LOGGING SETUP
# ============================================================

def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Set up structured logging.

    Args:
        level: Log level
        log_format: Output format (json or text)
        stream: Output stream (default: stdout)

    Returns:
        Configured package logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(
            json.dumps({
                "timestamp": "%(asctime)s",
                "level": "%(levelname)s",
                "logger": "%(name)s",
                "message": "%(message)s",
            })
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    return logging.getLogger("offline_nlp")


__all__ = [
    "ProcessingOptions",
    "EngineConfig",
    "setup_logging",
    "LOG_LEVELS",
    "LOG_FORMATS",
]

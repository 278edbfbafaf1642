"""
Offline NLP Exceptions - Custom error hierarchy.

============================================================
EXCEPTION HIERARCHY
============================================================
OfflineNLPError (base)
├── ConfigurationError
├── InvalidOptionsError
├── PatternRegistrationError
├── DictionaryUpdateError
├── CategoryRegistrationError
└── StageError

Registration and configuration errors are raised to the caller.
StageError is for internal logging only. A failing stage never
escapes process_text, the result carries default sections instead.

============================================================
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class OfflineNLPError(Exception):
    """Base exception for all offline NLP errors."""

    def __init__(
        self,
        message: str,
        component: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.component = component
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "component": self.component,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ConfigurationError(OfflineNLPError):
    """Engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        errors: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "config", details)
        self.errors = list(errors or [])

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class InvalidOptionsError(OfflineNLPError):
    """Unknown or mistyped processing option."""

    def __init__(
        self,
        message: str,
        option: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "options", details)
        self.option = option

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["option"] = self.option
        return data


class PatternRegistrationError(OfflineNLPError):
    """A custom action pattern was rejected at registration time."""

    def __init__(
        self,
        message: str,
        pattern_name: str = "",
        regex: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "action_patterns", details)
        self.pattern_name = pattern_name
        self.regex = regex[:200] if regex else None  # Truncate for logging

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "pattern_name": self.pattern_name,
            "regex": self.regex,
        })
        return data


class DictionaryUpdateError(OfflineNLPError):
    """Custom sentiment words were rejected."""

    def __init__(
        self,
        message: str,
        invalid_words: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "sentiment_dictionary", details)
        self.invalid_words = [repr(w)[:50] for w in (invalid_words or [])]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["invalid_words"] = self.invalid_words
        return data


class CategoryRegistrationError(OfflineNLPError):
    """A custom topic category was rejected."""

    def __init__(
        self,
        message: str,
        category: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "topic_extractor", details)
        self.category = category

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["category"] = self.category
        return data


class StageError(OfflineNLPError):
    """Unexpected failure inside a single analysis stage."""

    def __init__(
        self,
        message: str,
        stage: str = "",
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, stage, details)
        self.stage = stage
        self.cause = cause
        if cause is not None:
            self.details["cause_type"] = type(cause).__name__
            self.details["cause_message"] = str(cause)


__all__ = [
    "OfflineNLPError",
    "ConfigurationError",
    "InvalidOptionsError",
    "PatternRegistrationError",
    "DictionaryUpdateError",
    "CategoryRegistrationError",
    "StageError",
]

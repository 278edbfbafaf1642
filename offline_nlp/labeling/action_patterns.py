"""
Offline NLP - Action Pattern Registry.

============================================================
RESPONSIBILITY
============================================================
Surfaces actionable statements from transcript text.

- Holds an ordered bank of named, categorized regex patterns
- Cleans and deduplicates every match
- Ranks fragments by priority tier, then by specificity (length)
- Accepts custom patterns at runtime

============================================================
DESIGN PRINCIPLES
============================================================
- Patterns are immutable records built once at construction
- Registration swaps the pattern tuple under a lock;
  detection reads one snapshot per call
- Bad custom patterns are rejected, never stored
- DESCRIPTIVE matching only - fragments are quoted, not inferred

============================================================
PRIORITY TIERS
============================================================
- high (3): urgent, deadline, obligation
- medium (2): todo, planning, meeting, communication, research,
  generic action verbs, scheduled, work, personal
- low (1): consideration, aspiration, someday, question

============================================================
"""

import logging
import re
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..exceptions import PatternRegistrationError
from ..models import (
    ActionCandidate,
    ActionDetectionResult,
    ActionPresence,
    PatternEntry,
    PatternMatchGroup,
    Priority,
)


logger = logging.getLogger(__name__)


# ============================================================
# CONFIGURATION
# ============================================================


@dataclass
class ActionPatternConfig:
    """Configuration for action item detection."""

    # Cleaned fragment length must fall in [min_length, max_length)
    min_length: int = 10
    max_length: int = 200

    # Cap on returned items (0 = unlimited); total_count is never capped
    max_items: int = 0

    max_confidence: float = 0.95

    # Longest regex source accepted for a custom pattern
    max_regex_length: int = 500

    # Prefix for runtime-registered pattern names
    custom_prefix: str = "custom_"

    version: str = "1.0.0"


# ============================================================
# PATTERN BANK
# ============================================================


# Every pattern ends at a sentence terminator or end of text
_END = r"(?:\.|!|$)"

# (name, regex, priority, category, description)
DEFAULT_PATTERNS: Tuple[Tuple[str, str, Priority, str, str], ...] = (
    (
        "urgent_tasks",
        r"(?:urgent|asap|immediately|right away|emergency|critical|must do)\s+.{1,100}" + _END,
        Priority.HIGH, "urgent", "Urgent tasks requiring immediate attention",
    ),
    (
        "deadline_tasks",
        r"(?:due|deadline|by|before|until)\s+(?:today|tomorrow|this week|next week"
        r"|\d{1,2}[\/\-]\d{1,2}|\w+day).{0,100}" + _END,
        Priority.HIGH, "deadline", "Tasks with specific deadlines",
    ),
    (
        "need_to_actions",
        r"(?:need to|have to|must|should|got to)\s+(?:do|complete|finish|start|begin"
        r"|work on|handle|take care of|deal with)\s+.{1,80}" + _END,
        Priority.HIGH, "obligation", "Required actions and obligations",
    ),
    (
        "todo_items",
        r"(?:to do|todo|task|action item):\s*.{1,100}" + _END,
        Priority.MEDIUM, "todo", "Explicit todo items",
    ),
    (
        "planning_actions",
        r"(?:plan to|planning to|going to|will|intend to)\s+(?:do|make|create|build"
        r"|write|call|email|meet|visit|buy|get|start|finish).{0,80}" + _END,
        Priority.MEDIUM, "planning", "Planned future actions",
    ),
    (
        "meeting_actions",
        r"(?:schedule|arrange|set up|book)\s+(?:a|an)?\s*(?:meeting|call|appointment"
        r"|session)\s+(?:with|for).{0,60}" + _END,
        Priority.MEDIUM, "meeting", "Meeting and appointment scheduling",
    ),
    (
        "communication_actions",
        r"(?:call|email|text|message|contact|reach out to|follow up with)\s+.{1,50}" + _END,
        Priority.MEDIUM, "communication", "Communication tasks",
    ),
    (
        "research_actions",
        r"(?:research|look up|find out|investigate|explore|study|learn about)\s+.{1,60}" + _END,
        Priority.MEDIUM, "research", "Research and learning tasks",
    ),
    (
        "consideration_actions",
        r"(?:think about|consider|maybe|might|could|possibly)\s+(?:doing|making"
        r"|getting|trying).{0,60}" + _END,
        Priority.LOW, "consideration", "Things to consider",
    ),
    (
        "want_actions",
        r"(?:want to|would like to|wish to|hope to)\s+(?:do|make|get|try|start|learn"
        r"|buy|visit).{0,60}" + _END,
        Priority.LOW, "aspiration", "Desired actions and goals",
    ),
    (
        "someday_actions",
        r"(?:someday|eventually|one day|in the future|when I have time)\s*.{1,60}" + _END,
        Priority.LOW, "someday", "Long-term or someday actions",
    ),
    (
        "action_verbs",
        r"\b(?:buy|purchase|get|acquire|obtain|order|book|reserve|schedule|organize"
        r"|clean|fix|repair|update|upgrade|install|download|backup|review|check|verify"
        r"|confirm|submit|send|deliver|complete|finish|start|begin|create|make|build"
        r"|write|draft|prepare|practice|exercise|workout|study|read|watch|listen|attend"
        r"|visit|go to|travel|move|relocate|apply|register|sign up|cancel|delete|remove"
        r"|sell|donate|give away|throw away|declutter|sort|file|archive)\s+.{1,60}" + _END,
        Priority.MEDIUM, "action", "Generic action verbs",
    ),
    (
        "question_actions",
        r"(?:should I|what if I|how about|what about)\s+(?:do|make|get|try|start).{0,50}\?",
        Priority.LOW, "question", "Questions implying possible actions",
    ),
    (
        "time_actions",
        r"(?:this week|next week|this month|next month|today|tomorrow|later|soon)\s+"
        r"(?:I|we|they)?\s*(?:will|need to|should|must|have to|going to)\s+.{1,60}" + _END,
        Priority.MEDIUM, "scheduled", "Time-anchored actions",
    ),
    (
        "work_actions",
        r"(?:work on|project|assignment|report|presentation|proposal|document"
        r"|spreadsheet|analysis|review|meeting|client|customer|team|manager|boss"
        r"|deadline|budget|proposal|contract|deal|sale|marketing|strategy).{0,80}" + _END,
        Priority.MEDIUM, "work", "Work and professional actions",
    ),
    (
        "personal_actions",
        r"(?:health|doctor|appointment|exercise|gym|diet|family|friend|home|house|car"
        r"|maintenance|bills|finance|insurance|vacation|travel|hobby|learn|skill"
        r"|course|class).{0,60}" + _END,
        Priority.MEDIUM, "personal", "Personal life actions",
    ),
)


# ============================================================
# REGEX GUARD
# ============================================================

_UNBOUNDED_BRACE = re.compile(r"\{\d*,\}")


def _unbounded_quantifier_at(source: str, index: int) -> bool:
    if index >= len(source):
        return False
    return source[index] in "+*" or _UNBOUNDED_BRACE.match(source, index) is not None


def _has_nested_quantifier(source: str) -> bool:
    """
    True when an unbounded quantifier applies to a group whose body
    already holds one, as in (a+)+ or (?:x*y)*.

    Escapes and character classes are skipped.
    """
    # One flag per open group: does its body hold an unbounded quantifier
    stack: List[bool] = []
    in_class = False
    i = 0
    while i < len(source):
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
            i += 1
            continue
        if ch == "[":
            in_class = True
            i += 1
            # A leading "]" (after optional "^") is literal
            if i < len(source) and source[i] == "^":
                i += 1
            if i < len(source) and source[i] == "]":
                i += 1
            continue
        if ch == "(":
            stack.append(False)
        elif ch == ")":
            body_unbounded = stack.pop() if stack else False
            quantified = _unbounded_quantifier_at(source, i + 1)
            if body_unbounded and quantified:
                return True
            if stack and (body_unbounded or quantified):
                stack[-1] = True
        elif stack and _unbounded_quantifier_at(source, i):
            stack[-1] = True
        i += 1
    return False


# ============================================================
# ACTION PATTERN REGISTRY
# ============================================================


class ActionPatternRegistry:
    """
    Regex-bank action item detector.

    ============================================================
    USAGE
    ============================================================
    ```python
    registry = ActionPatternRegistry()

    result = registry.detect(text, sentences)
    for item in result.items:
        print(item)

    registry.add_custom_pattern(
        "invoice", r"send invoice to .{1,40}", "high", "billing",
    )
    ```

    ============================================================
    """

    LEADING_NON_WORD = re.compile(r"^\W+")
    TRAILING_NON_WORD = re.compile(r"\W+$")
    WHITESPACE = re.compile(r"\s+")
    LEADING_PRONOUN = re.compile(r"^(?:i|we|you|they|he|she|it)\s+")

    def __init__(self, config: Optional[ActionPatternConfig] = None) -> None:
        """
        Initialize the registry with the default pattern bank.

        Args:
            config: Detection configuration
        """
        self._config = config or ActionPatternConfig()
        self._lock = threading.RLock()
        self._patterns: Tuple[PatternEntry, ...] = tuple(
            PatternEntry(
                name=name,
                regex=re.compile(regex, re.IGNORECASE),
                priority=priority,
                category=category,
                description=description,
            )
            for name, regex, priority, category, description in DEFAULT_PATTERNS
        )

        logger.info(
            f"ActionPatternRegistry initialized with {len(self._patterns)} patterns"
        )

    @property
    def version(self) -> str:
        """Get registry version."""
        return self._config.version

    # =========================================================
    # PUBLIC API
    # =========================================================

    def detect(
        self,
        text: str,
        sentences: Optional[Sequence[str]] = None,
    ) -> ActionDetectionResult:
        """
        Detect action items in text.

        Args:
            text: Cleaned transcript text
            sentences: Sentence split of the same text (matching runs
                over the full text, sentences are accepted for callers
                that already have them)

        Returns:
            ActionDetectionResult with ranked unique fragments
        """
        if not text:
            return ActionDetectionResult()

        patterns = self._patterns
        groups: List[PatternMatchGroup] = []
        best_priority: Dict[str, PatternEntry] = {}
        ordered: List[str] = []

        logger.debug(f"Scanning {len(text)} characters with {len(patterns)} patterns")

        for entry in patterns:
            matches = self._clean_matches(
                m.group(0) for m in entry.regex.finditer(text)
            )
            if not matches:
                continue

            groups.append(PatternMatchGroup(
                pattern=entry.name,
                matches=matches,
                priority=entry.priority,
                category=entry.category,
            ))

            for match in matches:
                current = best_priority.get(match)
                if current is None:
                    ordered.append(match)
                    best_priority[match] = entry
                elif entry.priority.score > current.priority.score:
                    best_priority[match] = entry

        ranked = sorted(
            ordered,
            key=lambda item: (-best_priority[item].priority.score, -len(item)),
        )
        candidates = [
            ActionCandidate(
                text=item,
                pattern=best_priority[item].name,
                priority=best_priority[item].priority,
            )
            for item in ranked
        ]

        items = ranked
        if self._config.max_items:
            items = ranked[:self._config.max_items]

        logger.debug(f"Found {len(ranked)} potential action items")

        return ActionDetectionResult(
            items=items,
            patterns=groups,
            total_count=len(ranked),
            candidates=candidates,
        )

    def has_action_items(self, text: str) -> ActionPresence:
        """
        Cheap existence check over raw matches (no cleaning or dedup).

        Returns:
            ActionPresence with confidence rounded to 2 places
        """
        total = 0
        high = 0

        for entry in self._patterns:
            count = sum(1 for _ in entry.regex.finditer(text or ""))
            total += count
            if entry.priority == Priority.HIGH:
                high += count

        confidence = min(self._config.max_confidence, total * 0.3 + high * 0.5)
        return ActionPresence(
            has_actions=total > 0,
            confidence=round(confidence, 2),
            count=total,
        )

    def add_custom_pattern(
        self,
        name: str,
        regex: Union[str, "re.Pattern[str]"],
        priority: Union[str, Priority],
        category: str,
        description: str = "",
    ) -> PatternEntry:
        """
        Register a custom pattern for subsequent detect calls.

        A string regex is compiled case-insensitive. The pattern is
        stored under the name custom_<name>.

        Raises:
            PatternRegistrationError: empty name/regex, compile failure,
                overlong regex, nested unbounded quantifiers,
                regex matching the empty string, unknown priority, or
                duplicate name
        """
        raw = regex.pattern if isinstance(regex, re.Pattern) else regex

        if not isinstance(name, str) or not name.strip():
            raise PatternRegistrationError(
                "Pattern name must be a non-empty string",
                pattern_name=str(name),
                regex=raw if isinstance(raw, str) else None,
            )
        name = name.strip()

        compiled = self._compile(name, regex)
        tier = self._parse_priority(name, priority, compiled.pattern)

        if not isinstance(category, str) or not category.strip():
            raise PatternRegistrationError(
                "Pattern category must be a non-empty string",
                pattern_name=name,
                regex=compiled.pattern,
            )

        entry = PatternEntry(
            name=f"{self._config.custom_prefix}{name}",
            regex=compiled,
            priority=tier,
            category=category.strip(),
            description=description or "",
        )

        with self._lock:
            if any(p.name == entry.name for p in self._patterns):
                raise PatternRegistrationError(
                    f"Pattern already registered: {entry.name}",
                    pattern_name=name,
                    regex=compiled.pattern,
                )
            self._patterns = self._patterns + (entry,)

        logger.info(f"Added custom action pattern: {entry.name} ({tier.value})")
        return entry

    def get_pattern_count(self) -> int:
        return len(self._patterns)

    def get_categories(self) -> List[str]:
        """Unique pattern categories in registration order."""
        categories: List[str] = []
        for entry in self._patterns:
            if entry.category not in categories:
                categories.append(entry.category)
        return categories

    def get_patterns(self) -> List[PatternEntry]:
        return list(self._patterns)

    # =========================================================
    # INTERNAL METHODS
    # =========================================================

    def _clean_match(self, match: str) -> str:
        """Trim, strip edge punctuation, collapse spaces, lowercase, drop pronoun."""
        cleaned = match.strip()
        cleaned = self.LEADING_NON_WORD.sub("", cleaned)
        cleaned = self.TRAILING_NON_WORD.sub("", cleaned)
        cleaned = self.WHITESPACE.sub(" ", cleaned)
        cleaned = cleaned.lower()
        cleaned = self.LEADING_PRONOUN.sub("", cleaned)
        return cleaned.strip()

    def _clean_matches(self, raw_matches) -> List[str]:
        """Clean, length-filter and dedup one pattern's matches, keeping order."""
        cleaned: List[str] = []
        for raw in raw_matches:
            match = self._clean_match(raw)
            if not self._config.min_length <= len(match) < self._config.max_length:
                continue
            if match not in cleaned:
                cleaned.append(match)
        return cleaned

    def _compile(self, name: str, regex: Union[str, "re.Pattern[str]"]) -> "re.Pattern[str]":
        if isinstance(regex, re.Pattern):
            compiled = regex
            if not isinstance(compiled.pattern, str):
                raise PatternRegistrationError(
                    "Pattern must operate on text, not bytes",
                    pattern_name=name,
                )
        elif isinstance(regex, str) and regex.strip():
            try:
                compiled = re.compile(regex, re.IGNORECASE)
            except re.error as e:
                raise PatternRegistrationError(
                    f"Invalid regular expression: {e}",
                    pattern_name=name,
                    regex=regex,
                ) from e
        else:
            raise PatternRegistrationError(
                "Pattern regex must be a non-empty string",
                pattern_name=name,
            )

        if len(compiled.pattern) > self._config.max_regex_length:
            raise PatternRegistrationError(
                f"Pattern regex exceeds {self._config.max_regex_length} characters",
                pattern_name=name,
                regex=compiled.pattern,
            )
        if _has_nested_quantifier(compiled.pattern):
            raise PatternRegistrationError(
                "Pattern nests unbounded quantifiers (catastrophic backtracking)",
                pattern_name=name,
                regex=compiled.pattern,
            )
        if compiled.search("") is not None:
            raise PatternRegistrationError(
                "Pattern must not match the empty string",
                pattern_name=name,
                regex=compiled.pattern,
            )
        return compiled

    @staticmethod
    def _parse_priority(
        name: str,
        priority: Union[str, Priority],
        raw: str,
    ) -> Priority:
        if isinstance(priority, Priority):
            return priority
        try:
            return Priority(str(priority).strip().lower())
        except ValueError as e:
            raise PatternRegistrationError(
                f"Unknown priority: {priority!r} (expected high, medium or low)",
                pattern_name=name,
                regex=raw,
            ) from e


__all__ = [
    "ActionPatternRegistry",
    "ActionPatternConfig",
    "DEFAULT_PATTERNS",
]

"""
Tests for the Action Pattern Registry.

============================================================
PURPOSE
============================================================
Verify action item detection, ranking and custom patterns.

TEST PRINCIPLES:
- Items are unique, cleaned and length-bounded
- Higher priority tiers always come first
- Rejected patterns never reach the registry

============================================================
"""

import re

import pytest

from offline_nlp.exceptions import PatternRegistrationError
from offline_nlp.labeling import ActionPatternConfig, ActionPatternRegistry
from offline_nlp.labeling.action_patterns import DEFAULT_PATTERNS, _has_nested_quantifier
from offline_nlp.models import Priority


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def registry():
    """Registry with the default pattern bank."""
    return ActionPatternRegistry()


DEADLINE_CALL = "I need to call John urgently about the deadline tomorrow"


# ============================================================
# PATTERN BANK
# ============================================================

class TestPatternBank:
    """Tests for the default pattern bank."""

    def test_pattern_count(self, registry):
        """Sixteen patterns ship by default."""
        assert registry.get_pattern_count() == 16

    def test_categories_in_order(self, registry):
        """Categories are unique and in registration order."""
        assert registry.get_categories() == [
            "urgent", "deadline", "obligation", "todo", "planning", "meeting",
            "communication", "research", "consideration", "aspiration",
            "someday", "action", "question", "scheduled", "work", "personal",
        ]

    def test_patterns_case_insensitive(self, registry):
        """Default patterns ignore case."""
        assert all(p.regex.flags & re.IGNORECASE for p in registry.get_patterns())


# ============================================================
# DETECTION
# ============================================================

class TestDetect:
    """Tests for detect()."""

    def test_deadline_call(self, registry):
        """The high-priority deadline fragment ranks before the call."""
        result = registry.detect(DEADLINE_CALL)

        assert result.items == [
            "deadline tomorrow",
            "call john urgently about the deadline tomorrow",
        ]
        assert result.total_count == 2
        assert result.has_items

    def test_pattern_groups(self, registry):
        """Each matching pattern reports its own cleaned matches."""
        result = registry.detect(DEADLINE_CALL)

        assert [g.pattern for g in result.patterns] == [
            "deadline_tasks", "communication_actions", "work_actions",
        ]
        assert result.patterns[0].priority == Priority.HIGH
        assert result.patterns[0].matches == ["deadline tomorrow"]

    def test_best_priority_wins(self, registry):
        """A fragment matched by several patterns keeps its best tier."""
        result = registry.detect(DEADLINE_CALL)
        candidates = {c.text: c for c in result.candidates}

        assert candidates["deadline tomorrow"].priority == Priority.HIGH
        assert candidates["deadline tomorrow"].pattern == "deadline_tasks"
        assert result.count_by_priority(Priority.HIGH) == 1

    def test_priority_ordering(self, registry):
        """High-priority items come before low-priority ones."""
        result = registry.detect(
            "What about trying yoga? Deadline tomorrow for the tax forms."
        )

        assert result.items == [
            "deadline tomorrow for the tax forms",
            "what about trying yoga",
        ]

    def test_short_fragments_dropped(self, registry):
        """Cleaned fragments under ten characters are discarded."""
        result = registry.detect("Call mom.")

        assert result.items == []
        assert result.total_count == 0

    def test_items_unique_and_bounded(self, registry):
        """Items are unique and every item is in [10, 200) characters."""
        text = (
            "I need to finish the report by Friday. Call the client about the budget. "
            "Call the client about the budget. Maybe trying a new gym routine. "
            "Schedule a meeting with the team tomorrow."
        )
        result = registry.detect(text)

        assert len(result.items) == len(set(result.items))
        assert all(10 <= len(item) < 200 for item in result.items)
        assert all(item == item.lower() for item in result.items)

    def test_leading_pronoun_removed(self, registry):
        """Subject pronouns are stripped from fragments."""
        result = registry.detect("We will call the landlord about the leak.")
        assert all(not item.startswith("we ") for item in result.items)

    def test_empty_text(self, registry):
        """Empty text yields an empty result."""
        result = registry.detect("")

        assert result.items == []
        assert result.patterns == []
        assert result.total_count == 0

    def test_max_items_caps_items_only(self):
        """The cap limits items but total_count reports every fragment."""
        registry = ActionPatternRegistry(ActionPatternConfig(max_items=1))
        result = registry.detect(DEADLINE_CALL)

        assert result.items == ["deadline tomorrow"]
        assert result.total_count == 2


# ============================================================
# PRESENCE CHECK
# ============================================================

class TestHasActionItems:
    """Tests for has_action_items()."""

    def test_counts_raw_matches(self, registry):
        """Raw matches are counted without cleaning."""
        presence = registry.has_action_items(DEADLINE_CALL)

        assert presence.has_actions is True
        assert presence.count == 3
        assert presence.confidence == 0.95

    def test_no_matches(self, registry):
        """Plain text has no actions."""
        presence = registry.has_action_items("sunny and quiet")

        assert presence.has_actions is False
        assert presence.count == 0
        assert presence.confidence == 0.0

    def test_wire_form(self, registry):
        """to_dict uses camelCase keys."""
        data = registry.has_action_items("Call mom.").to_dict()
        assert set(data) == {"hasActions", "confidence", "count"}


# ============================================================
# CUSTOM PATTERNS
# ============================================================

class TestCustomPatterns:
    """Tests for add_custom_pattern()."""

    def test_custom_pattern_detected(self, registry):
        """A registered pattern takes effect on the next detect call."""
        entry = registry.add_custom_pattern(
            "invoice", r"send invoice to \w+", "high", "billing",
        )
        result = registry.detect("Please send invoice to Acme today")

        assert entry.name == "custom_invoice"
        assert registry.get_pattern_count() == 17
        assert result.items[0] == "send invoice to acme"
        assert "billing" in result.categories

    def test_custom_pattern_ignores_case(self, registry):
        """String patterns are compiled case-insensitive."""
        registry.add_custom_pattern("refill", r"refill \w+ prescription", Priority.MEDIUM, "health")
        result = registry.detect("REFILL THE PRESCRIPTION")
        assert result.total_count >= 1

    def test_precompiled_pattern_accepted(self, registry):
        """A compiled pattern is stored as given."""
        compiled = re.compile(r"water the \w+")
        entry = registry.add_custom_pattern("water", compiled, "low", "home")
        assert entry.regex is compiled

    def test_entry_wire_form(self, registry):
        """to_dict exposes the regex source and priority value."""
        entry = registry.add_custom_pattern("invoice", r"send invoice to \w+", "HIGH", "billing")
        data = entry.to_dict()

        assert data["name"] == "custom_invoice"
        assert data["regex"] == r"send invoice to \w+"
        assert data["priority"] == "high"
        assert data["category"] == "billing"

    @pytest.mark.parametrize("name,regex,priority,category", [
        ("", r"send \w+", "high", "billing"),
        ("broken", r"send (invoice", "high", "billing"),
        ("empty", r"\w*", "high", "billing"),
        ("blank", "", "high", "billing"),
        ("urgency", r"send \w+", "critical", "billing"),
        ("nocat", r"send \w+", "high", ""),
        ("bytes", re.compile(rb"send"), "high", "billing"),
    ])
    def test_invalid_pattern_rejected(self, registry, name, regex, priority, category):
        """Invalid registrations raise and leave the registry unchanged."""
        with pytest.raises(PatternRegistrationError):
            registry.add_custom_pattern(name, regex, priority, category)

        assert registry.get_pattern_count() == 16

    def test_duplicate_name_rejected(self, registry):
        """Registering the same name twice fails."""
        registry.add_custom_pattern("invoice", r"send invoice to \w+", "high", "billing")

        with pytest.raises(PatternRegistrationError) as exc_info:
            registry.add_custom_pattern("invoice", r"bill \w+", "low", "billing")

        assert exc_info.value.pattern_name == "invoice"
        assert registry.get_pattern_count() == 17

    def test_compile_error_details(self, registry):
        """Compile failures carry the pattern and component."""
        with pytest.raises(PatternRegistrationError) as exc_info:
            registry.add_custom_pattern("broken", r"(", "high", "billing")

        data = exc_info.value.to_dict()
        assert data["component"] == "action_patterns"
        assert data["regex"] == "("

    @pytest.mark.parametrize("regex", [
        r"(a+)+$",
        r"(?:\w*\s)*done",
        r"((ab)+c)*",
        r"(x+){2,}",
        "a" * 501,
    ])
    def test_backtracking_pattern_rejected(self, registry, regex):
        """Nested unbounded quantifiers and overlong sources are refused."""
        with pytest.raises(PatternRegistrationError):
            registry.add_custom_pattern("slow", regex, "low", "misc")

        assert registry.get_pattern_count() == 16

    def test_backtracking_precompiled_rejected(self, registry):
        """The guard also applies to compiled patterns."""
        with pytest.raises(PatternRegistrationError) as exc_info:
            registry.add_custom_pattern("slow", re.compile(r"(a+)+$"), "low", "misc")

        assert "nests unbounded quantifiers" in exc_info.value.message

    @pytest.mark.parametrize("regex", [
        r"(?:call|email) \w+",
        r"(ab){1,3}\w+",
        r"[(+]+ \w+",
        r"\(a+\)+ done",
    ])
    def test_bounded_patterns_accepted(self, registry, regex):
        """Quantifiers that cannot backtrack exponentially are allowed."""
        registry.add_custom_pattern("safe", regex, "low", "misc")
        assert registry.get_pattern_count() == 17

    def test_default_patterns_pass_guard(self):
        """The built-in bank contains no nested unbounded quantifiers."""
        for name, regex, *_ in DEFAULT_PATTERNS:
            assert not _has_nested_quantifier(regex), name

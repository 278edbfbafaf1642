"""
Offline NLP - Text Preprocessor.

============================================================
RESPONSIBILITY
============================================================
Prepares raw transcript text for the analysis stages.

- Normalizes unicode, quotes and whitespace
- Removes characters that corrupt regex matching
- Splits text into sentences
- Tokenizes text into words

============================================================
DESIGN PRINCIPLES
============================================================
- Pure functions, no state between calls
- Never alter word content (letters, digits, apostrophes)
- Empty input yields empty output, never an error

============================================================
CLEANING PIPELINE
============================================================
1. Normalize unicode (NFKC)
2. Map typographic quotes and dashes to ASCII
3. Remove control and zero-width characters
4. Drop symbols and emoji
5. Collapse repeated punctuation
6. Fix spacing around punctuation
7. Normalize whitespace
8. Truncate to max length

============================================================
"""

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional


logger = logging.getLogger(__name__)


# ============================================================
# CONFIGURATION
# ============================================================


@dataclass
class TextPreprocessorConfig:
    """Configuration for text preprocessing."""

    unicode_form: str = "NFKC"

    # Input longer than this is truncated
    max_length: int = 100000

    version: str = "1.0.0"


# ============================================================
# TEXT PREPROCESSOR
# ============================================================


class TextPreprocessor:
    """
    Cleans, segments and tokenizes transcript text.

    ============================================================
    USAGE
    ============================================================
    ```python
    preprocessor = TextPreprocessor()

    cleaned = preprocessor.clean(raw_text)
    sentences = preprocessor.split_sentences(cleaned)
    tokens = preprocessor.tokenize(cleaned)
    ```

    ============================================================
    """

    # Typographic characters -> ASCII equivalents
    CHAR_MAP = str.maketrans({
        "\u2018": "'",
        "\u2019": "'",
        "\u201a": "'",
        "\u201b": "'",
        "\u2032": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u201e": '"',
        "\u2033": '"',
        "\u2013": "-",
        "\u2014": " - ",
        "\u2212": "-",
        "\u2026": "...",
    })

    # Control characters (except newlines and tabs)
    CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

    # Zero-width characters
    ZERO_WIDTH_PATTERN = re.compile(r"[\u200b-\u200f\u2060\ufeff]")

    # Runs of the same punctuation mark ("!!!", "...", ",,")
    REPEATED_PUNCT_PATTERN = re.compile(r"([.!?,;:])\1+")

    # Whitespace before punctuation ("word ," -> "word,")
    SPACE_BEFORE_PUNCT_PATTERN = re.compile(r"\s+([.,!?;:])")

    # Missing space after sentence punctuation ("done.Next" -> "done. Next");
    # abbreviations such as "U.S.A" are left alone
    MISSING_SPACE_PATTERN = re.compile(r"(?<=[a-z]{2})([.!?])([A-Z])")

    WHITESPACE_PATTERN = re.compile(r"\s+")

    # Sentence boundary: terminal punctuation followed by whitespace
    SENTENCE_SPLIT_PATTERN = re.compile(r"(?<=[.!?])\s+")

    # Punctuation stripped from token edges (apostrophes inside words survive)
    TOKEN_EDGE_PATTERN = re.compile(r"^[^\w']+|[^\w']+$")

    # Unicode categories dropped during cleaning (symbols, emoji, private use)
    DROPPED_CATEGORIES = frozenset({"So", "Sk", "Cs", "Co", "Cn"})

    def __init__(self, config: Optional[TextPreprocessorConfig] = None) -> None:
        """
        Initialize the text preprocessor.

        Args:
            config: Preprocessing configuration
        """
        self._config = config or TextPreprocessorConfig()

    @property
    def version(self) -> str:
        """Get preprocessor version."""
        return self._config.version

    # =========================================================
    # PUBLIC API
    # =========================================================

    def clean(self, text: str) -> str:
        """
        Normalize a raw transcript.

        Args:
            text: Raw text

        Returns:
            Cleaned text with single spaces and normalized punctuation
        """
        if not text:
            return ""

        text = unicodedata.normalize(self._config.unicode_form, text)
        text = text.translate(self.CHAR_MAP)
        text = self.CONTROL_CHAR_PATTERN.sub(" ", text)
        text = self.ZERO_WIDTH_PATTERN.sub("", text)
        text = self._drop_symbols(text)
        text = self.REPEATED_PUNCT_PATTERN.sub(r"\1", text)
        text = self.SPACE_BEFORE_PUNCT_PATTERN.sub(r"\1", text)
        text = self.MISSING_SPACE_PATTERN.sub(r"\1 \2", text)
        text = self.WHITESPACE_PATTERN.sub(" ", text).strip()

        if len(text) > self._config.max_length:
            logger.warning(
                f"Input truncated from {len(text)} to {self._config.max_length} characters"
            )
            text = text[:self._config.max_length].rstrip()

        return text

    def split_sentences(self, text: str) -> List[str]:
        """
        Split text into sentences.

        A trailing fragment without terminal punctuation is still
        returned as a sentence.
        """
        if not text or not text.strip():
            return []

        parts = self.SENTENCE_SPLIT_PATTERN.split(text.strip())
        return [
            part.strip() for part in parts
            if part.strip() and any(c.isalnum() for c in part)
        ]

    def tokenize(self, text: str) -> List[str]:
        """
        Split text into word tokens.

        Splits on whitespace and strips punctuation from token edges.
        Original casing is preserved; callers lowercase as needed.
        """
        if not text:
            return []

        tokens: List[str] = []
        for raw in text.split():
            token = self.TOKEN_EDGE_PATTERN.sub("", raw).strip("'")
            if token:
                tokens.append(token)
        return tokens

    # =========================================================
    # CLEANING OPERATIONS
    # =========================================================

    def _drop_symbols(self, text: str) -> str:
        """Replace symbol and emoji characters with spaces."""
        return "".join(
            " " if unicodedata.category(c) in self.DROPPED_CATEGORIES else c
            for c in text
        )

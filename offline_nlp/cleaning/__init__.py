"""
Offline NLP - Cleaning Package.

Modules:
- text_preprocessor: Normalization, sentence splitting, tokenization
"""

from .text_preprocessor import TextPreprocessor, TextPreprocessorConfig

__all__ = [
    "TextPreprocessor",
    "TextPreprocessorConfig",
]

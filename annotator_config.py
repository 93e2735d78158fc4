#!/usr/bin/env python3
"""
Configuration module for the multilingual POS/lemma annotator.

This module contains the configuration class, the supported languages and the
closed tag alphabets shared by the tagset mapper, the lemmatizer and the
annotator.

Classes:
    Language: Supported languages (one rule table + one anchor tag each)
    AnnotatorConfig: Main configuration holder
    TokenTagMismatchError: Raised when token and tag counts differ
"""

import os
from enum import Enum
from typing import Optional


# ============================================================================
# Global Constants
# ============================================================================

VERSION = "1.2.0"

# Coarse, language independent categories
COARSE_CATEGORIES = {
    "A": "adverb",
    "C": "conjunction",
    "D": "determiner",
    "G": "adjective",
    "N": "common noun",
    "R": "proper noun",
    "P": "preposition",
    "Q": "pronoun",
    "V": "verb",
    "O": "other",
}

OTHER_CATEGORY = "O"

# Term classes
OPEN_CLASS = "open"
CLOSED_CLASS = "closed"

OPEN_CLASS_CATEGORIES = frozenset({"N", "V", "G", "A"})

# Lemma resolution methods, in fallback order
LEMMA_METHODS = (
    "dictionary",
    "anchor_identity",
    "uppercase_identity",
    "lowercase_fallback",
)

DICTIONARY_FORMATS = ("tsv", "hfst")


class TokenTagMismatchError(ValueError):
    """Token and tag sequences of different lengths."""


class Language(Enum):
    """Languages with a tagset rule table and an anchor tag."""

    EN = "en"
    ES = "es"

    @classmethod
    def from_code(cls, code: str) -> "Language":
        """Resolve a language code such as 'en' or 'ES'.

        Raises:
            ValueError: If the language has no rule tables
        """
        if isinstance(code, cls):
            return code
        try:
            return cls(str(code).strip().lower())
        except ValueError:
            supported = ", ".join(lang.value for lang in cls)
            raise ValueError(
                f"Unsupported language: {code!r} (supported: {supported})"
            ) from None


# ============================================================================
# Configuration Classes
# ============================================================================

class AnnotatorConfig:
    """Configuration for the annotation pipeline.

    Holds the language, the dictionary resource location and the optional
    Stanza tagger settings used by the command line tools.
    """

    def __init__(
        self,
        lang: str = 'en',
        dictionary_path: Optional[str] = None,
        dictionary_format: Optional[str] = None,
        enable_stanza: bool = True,
        stanza_dir: Optional[str] = None,
        use_gpu: bool = False,
        output_format: str = 'tab'
    ) -> None:
        """Initialize annotator configuration.

        Args:
            lang: Language code, one of the Language values (default: 'en')
            dictionary_path: Path to the lemma dictionary (tsv or hfst)
            dictionary_format: 'tsv', 'hfst' or None to infer from the suffix
            enable_stanza: Allow tagging raw tokens with Stanza (default: True)
            stanza_dir: Stanza resources directory (default: ~/stanza_resources)
            use_gpu: Run the Stanza pipeline on GPU (default: False)
            output_format: 'tab' (word, lemma, tag columns) or 'json'
        """
        if dictionary_format is not None and dictionary_format not in DICTIONARY_FORMATS:
            raise ValueError(f"Unknown dictionary format: {dictionary_format!r}")
        if output_format not in ('tab', 'json'):
            raise ValueError(f"Unknown output format: {output_format!r}")

        self.lang = Language.from_code(lang).value
        self.dictionary_path = dictionary_path
        self.dictionary_format = dictionary_format

        # Stanza configuration
        self.enable_stanza = enable_stanza
        self.stanza_dir = stanza_dir or os.path.expanduser('~/stanza_resources')
        self.use_gpu = use_gpu

        self.output_format = output_format

    @property
    def language(self) -> Language:
        return Language(self.lang)

    def __repr__(self) -> str:
        return (
            f"AnnotatorConfig(lang={self.lang!r}, "
            f"dictionary={self.dictionary_path!r}, "
            f"output_format={self.output_format!r})"
        )

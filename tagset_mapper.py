#!/usr/bin/env python3
"""
Tagset mapping for fine-grained, language specific POS tags.

Maps Penn Treebank (English) and AnCora/EAGLES (Spanish) tags to a coarse,
language independent category alphabet, classifies categories as open or
closed class, and provides the per-language anchor tag that decides case
sensitivity during dictionary lookup.

Each rule table is evaluated top to bottom and the first matching rule wins.
Prefixes overlap on purpose (Spanish "SP" must be tested before "P").
"""

from typing import Dict, Tuple

from annotator_config import (
    Language,
    OTHER_CATEGORY,
    OPEN_CLASS,
    CLOSED_CLASS,
    OPEN_CLASS_CATEGORIES,
)


# (coarse category, exact tags, tag prefixes)
Rule = Tuple[str, Tuple[str, ...], Tuple[str, ...]]


# Penn Treebank → coarse category
ENGLISH_RULES: Tuple[Rule, ...] = (
    ("A", (), ("RB",)),                 # adverb
    ("C", ("CC",), ()),                 # conjunction
    ("D", ("PDT",), ("D",)),            # determiner and predeterminer
    ("G", (), ("J",)),                  # adjective
    ("N", ("NN", "NNS"), ()),           # common noun
    ("R", (), ("NNP",)),                # proper noun
    ("P", ("TO", "IN"), ()),            # preposition
    ("Q", (), ("PRP", "WP")),           # pronoun
    ("V", (), ("V",)),                  # verb
)

# AnCora (EAGLES) → coarse category
SPANISH_RULES: Tuple[Rule, ...] = (
    ("A", ("RB", "RN"), ()),
    ("C", ("CC", "CS"), ()),
    ("D", (), ("D",)),
    ("G", (), ("A",)),
    ("N", (), ("NC",)),
    ("R", (), ("NP",)),
    ("P", (), ("SP",)),
    ("Q", (), ("P",)),
    ("V", (), ("V",)),
)

# Tag prefix family looked up case-preserved (proper nouns)
ANCHOR_TAGS: Dict[Language, str] = {
    Language.EN: "NNP",
    Language.ES: "NP",
}


class TagsetMapper:
    """Maps (language, fine tag) to a coarse category code.

    Total function: tags no rule recognises map to "O".
    """

    RULES: Dict[Language, Tuple[Rule, ...]] = {
        Language.EN: ENGLISH_RULES,
        Language.ES: SPANISH_RULES,
    }

    def map_tag(self, language: Language, fine_tag: str) -> str:
        """Return the coarse category for a fine tag.

        Args:
            language: Language whose rule table applies
            fine_tag: Tag assigned by the tagger (case-insensitive)

        Returns:
            str: One of A, C, D, G, N, R, P, Q, V, O

        Example:
            >>> TagsetMapper().map_tag(Language.ES, 'sp000')
            'P'
        """
        tag = fine_tag.upper()
        for category, exact, prefixes in self.RULES[Language.from_code(language)]:
            if tag in exact or (prefixes and tag.startswith(prefixes)):
                return category
        return OTHER_CATEGORY


class TermClassifier:
    """Classifies a coarse category as an open or closed class term."""

    def classify(self, category: str) -> str:
        # Proper nouns (R) are deliberately closed class
        if category in OPEN_CLASS_CATEGORIES:
            return OPEN_CLASS
        return CLOSED_CLASS


class TagConstantResolver:
    """Per-language anchor tag deciding case-sensitive dictionary lookup."""

    def anchor_tag(self, language: Language, fine_tag: str) -> str:
        """Return the anchor tag prefix for the language.

        The fine tag is accepted for interface symmetry with the mapper; the
        anchor depends on the language alone for the supported tagsets.
        """
        return ANCHOR_TAGS[Language.from_code(language)]

    def is_anchored(self, language: Language, fine_tag: str) -> bool:
        """True if the fine tag belongs to the anchor family."""
        anchor = self.anchor_tag(language, fine_tag)
        return fine_tag.startswith(anchor)

#!/usr/bin/env python3
"""
Dictionary lemmatizer with a deterministic fallback chain.

Resolution order for a (word, fine tag) pair:

    1. Dictionary: entry for the lookup key whose tag equals the fine tag
    2. Anchor identity: anchor-family tags (proper nouns) keep the word as is
    3. Uppercase identity: all-caps words (acronyms) keep the word as is
    4. Lowercase fallback: word.lower()

The lookup key is the word itself for anchor-family tags and the lowercased
word otherwise. Every step always yields a non-empty lemma.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from annotator_config import Language, LEMMA_METHODS, TokenTagMismatchError
from dictionary_lookup import DictionaryLookup
from tagset_mapper import TagConstantResolver


class DictionaryLemmatizer:
    """
    Lemmatizer over a read-only dictionary resource.

    Holds no per-call state, so one instance can be shared by threads
    annotating independent sentences as long as the dictionary supports
    concurrent reads.

    Attributes:
        language: Language selecting the anchor tag
        dictionary: DictionaryLookup queried for (tag, lemma) candidates
        tag_resolver: TagConstantResolver providing the anchor tag
    """

    def __init__(self, dictionary: DictionaryLookup, language: Language) -> None:
        self.dictionary = dictionary
        self.language = Language.from_code(language)
        self.tag_resolver = TagConstantResolver()

    def lookup_lemma(self, key: str, fine_tag: str) -> Optional[str]:
        """Return the dictionary lemma for key with exactly this tag, else None.

        When several entries share the tag, the last one wins.
        """
        lemma = None
        for entry in self.dictionary.lookup(key):
            if entry.tag == fine_tag and entry.lemma:
                lemma = entry.lemma
        return lemma

    def lemmatize_with_method(self, word: str, fine_tag: str) -> Tuple[str, str]:
        """
        Lemmatize a word and report which step produced the lemma.

        Args:
            word: Surface form
            fine_tag: Tag assigned by the tagger

        Returns:
            (lemma, method) where method is one of LEMMA_METHODS
        """
        anchored = self.tag_resolver.is_anchored(self.language, fine_tag)
        key = word if anchored else word.lower()

        lemma = self.lookup_lemma(key, fine_tag)
        if lemma is not None:
            return lemma, 'dictionary'
        if anchored:
            return word, 'anchor_identity'
        if word.upper() == word:
            return word, 'uppercase_identity'
        return word.lower(), 'lowercase_fallback'

    def lemmatize(self, word: str, fine_tag: str) -> str:
        return self.lemmatize_with_method(word, fine_tag)[0]

    def lemmatize_tokens(self, tokens: Sequence[str], tags: Sequence[str]) -> List[str]:
        """Lemmatize parallel token and tag lists."""
        if len(tokens) != len(tags):
            raise TokenTagMismatchError(
                f"Got {len(tokens)} tokens but {len(tags)} tags"
            )
        return [self.lemmatize(token, tag) for token, tag in zip(tokens, tags)]

    def lemmatize_batch(self, tokens: Sequence[str], tags: Sequence[str]) -> Dict[str, Any]:
        """
        Lemmatize parallel lists and return statistics

        Returns:
            Dictionary with keys:
                - results: List of {'word', 'tag', 'lemma', 'method'} dicts
                - statistics: Counts per method, total and dictionary coverage
        """
        if len(tokens) != len(tags):
            raise TokenTagMismatchError(
                f"Got {len(tokens)} tokens but {len(tags)} tags"
            )

        results = []
        stats = {method: 0 for method in LEMMA_METHODS}
        stats['total'] = len(tokens)

        for token, tag in zip(tokens, tags):
            lemma, method = self.lemmatize_with_method(token, tag)
            stats[method] += 1
            results.append({
                'word': token,
                'tag': tag,
                'lemma': lemma,
                'method': method
            })

        stats['coverage'] = stats['dictionary'] / stats['total'] * 100 if stats['total'] > 0 else 0

        return {
            'results': results,
            'statistics': stats
        }

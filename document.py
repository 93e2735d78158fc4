#!/usr/bin/env python3
"""
Structured document holding word forms and the terms annotated over them.

Word forms are grouped by sentence in input order. Each term covers a span of
word form ids and records its term type (open/closed), lemma, coarse POS and
the fine tag (morphofeat) it was derived from.
"""

import json
from typing import Any, Dict, List, Optional, Sequence


class WordForm:
    """A token of the document."""

    def __init__(self, wf_id: str, form: str, sentence: int) -> None:
        self.id = wf_id
        self.form = form
        self.sentence = sentence

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'form': self.form, 'sent': self.sentence}

    def __repr__(self) -> str:
        return f"WordForm({self.id!r}, {self.form!r}, sentence={self.sentence})"


class Term:
    """An annotation group over one or more word forms."""

    def __init__(self, term_id: str, term_type: str, lemma: str, pos: str,
                 morphofeat: str, span: Sequence[WordForm]) -> None:
        self.id = term_id
        self.type = term_type
        self.lemma = lemma
        self.pos = pos
        self.morphofeat = morphofeat
        self.span = list(span)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'lemma': self.lemma,
            'pos': self.pos,
            'morphofeat': self.morphofeat,
            'span': [wf.id for wf in self.span]
        }


class AnnotatedDocument:
    """
    In-memory document: sentences of word forms plus a term layer.

    Attributes:
        lang: Language code of the text
        word_forms: All word forms in document order
        terms: Terms in creation order
    """

    def __init__(self, lang: Optional[str] = None) -> None:
        self.lang = lang
        self.word_forms: List[WordForm] = []
        self.terms: List[Term] = []
        self._sentences: List[List[WordForm]] = []

    @classmethod
    def from_sentences(cls, sentences: Sequence[Sequence[str]],
                       lang: Optional[str] = None) -> "AnnotatedDocument":
        """Build a document from already tokenized sentences."""
        document = cls(lang)
        for tokens in sentences:
            document.add_sentence(tokens)
        return document

    def add_sentence(self, tokens: Sequence[str]) -> List[WordForm]:
        sentence_index = len(self._sentences) + 1
        sentence = []
        for token in tokens:
            wf = WordForm(f"w{len(self.word_forms) + 1}", token, sentence_index)
            self.word_forms.append(wf)
            sentence.append(wf)
        self._sentences.append(sentence)
        return sentence

    def get_sentences(self) -> List[List[WordForm]]:
        return [list(sentence) for sentence in self._sentences]

    def create_term(self, term_type: str, lemma: str, pos: str, morphofeat: str,
                    span: Sequence[WordForm]) -> Term:
        """Add a term over span and return it."""
        term = Term(f"t{len(self.terms) + 1}", term_type, lemma, pos, morphofeat, span)
        self.terms.append(term)
        return term

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lang': self.lang,
            'text': [wf.to_dict() for wf in self.word_forms],
            'terms': [term.to_dict() for term in self.terms]
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    def save_json(self, path: str) -> None:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
            f.write('\n')

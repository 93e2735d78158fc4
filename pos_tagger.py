#!/usr/bin/env python3
"""
Sources of fine-grained POS tags for the annotator.

- StanzaTagger: tags pre-tokenized sentences with Stanza, returning the
  language specific XPOS column (Penn Treebank for English, AnCora for
  Spanish).
- parse_tagged_text / read_tagged_file: read ``word<TAB>tag`` lines produced
  by an external tagger, one token per line, blank line between sentences.
"""

import os
import sys
from typing import List, Optional, Sequence, Tuple

from annotator_config import Language, TokenTagMismatchError

# Optional imports
try:
    import stanza
    STANZA_AVAILABLE = True
except ImportError:
    STANZA_AVAILABLE = False


TaggedSentence = List[Tuple[str, str]]


class StanzaTagger:
    """
    Stanza POS tagger over pre-tokenized input.

    Attributes:
        language: Language of the loaded model
        nlp: Stanza pipeline (tokenize + pos, pretokenized)
    """

    def __init__(self, language: Language, model_dir: Optional[str] = None,
                 use_gpu: bool = False, nlp=None) -> None:
        """
        Args:
            language: Language of the text
            model_dir: Stanza resources directory (default: Stanza's own)
            use_gpu: Run the pipeline on GPU
            nlp: Already built pipeline to reuse instead of loading one

        Raises:
            ImportError: If stanza is not installed and no pipeline is given
        """
        self.language = Language.from_code(language)
        if nlp is not None:
            self.nlp = nlp
            return

        if not STANZA_AVAILABLE:
            raise ImportError("stanza not installed. Install with: pip install stanza")

        print(f"Loading Stanza {self.language.value} model...", file=sys.stderr)
        kwargs = {'dir': model_dir} if model_dir else {}
        self.nlp = stanza.Pipeline(
            lang=self.language.value,
            processors="tokenize,pos",
            use_gpu=use_gpu,
            tokenize_pretokenized=True,
            **kwargs
        )
        print("✓ Stanza loaded", file=sys.stderr)

    def tag(self, tokens: Sequence[str]) -> List[str]:
        """Return one fine tag per token (XPOS, UPOS where no XPOS exists)."""
        if not tokens:
            return []

        doc = self.nlp([list(tokens)])  # Pre-tokenized
        words = [w for sent in doc.sentences for w in sent.words]
        if len(words) != len(tokens):
            raise TokenTagMismatchError(
                f"Stanza returned {len(words)} words for {len(tokens)} tokens"
            )
        return [w.xpos or w.upos for w in words]


def parse_tagged_text(text: str) -> List[TaggedSentence]:
    """
    Parse ``word<TAB>tag`` lines into sentences.

    Blank lines end a sentence; lines starting with '#' are comments.

    Raises:
        ValueError: If a token line does not hold exactly two fields
    """
    sentences = []
    current: TaggedSentence = []

    for line_no, line in enumerate(text.splitlines(), 1):
        line = line.rstrip('\r\n')
        if not line.strip():
            if current:
                sentences.append(current)
                current = []
            continue
        if line.startswith('#'):
            continue

        fields = line.split('\t')
        if len(fields) != 2 or not fields[0] or not fields[1].strip():
            raise ValueError(f"Line {line_no}: expected word<TAB>tag, got {line!r}")
        current.append((fields[0], fields[1].strip()))

    if current:
        sentences.append(current)

    return sentences


def read_tagged_file(path: str) -> List[TaggedSentence]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return parse_tagged_text(f.read())


def parse_tokenized_text(text: str) -> List[List[str]]:
    """One sentence per line, tokens separated by whitespace."""
    return [line.split() for line in text.splitlines() if line.strip()]

#!/usr/bin/env python3
"""
Read-only lemma dictionaries queried by the lemmatizer.

A dictionary maps a surface form to the (tag, lemma) pairs it can realise.
Two resources are supported:

- TabularDictionary: in-memory index built from the tab-separated
  ``word<TAB>lemma<TAB>tag`` source format that compiled lemma dictionaries
  are built from.
- HfstDictionary: a compiled hfst transducer whose output strings have the
  form ``lemma+TAG``.

Lookup is case-sensitive exactly as supplied; the caller decides case folding.
An empty result is the normal "unknown word" signal, not an error.
"""

import abc
import csv
import os
import re
import sys
from collections import defaultdict
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

import pandas as pd


HFST_SUFFIXES = ('.hfst', '.hfstol')

# Epsilon and flag diacritic symbols left in transducer output
SPECIAL_SYMBOL = re.compile(r'@[^@\s]+@')


class DictionaryEntry(NamedTuple):
    tag: str
    lemma: str


class DictionaryLookup(metaclass=abc.ABCMeta):
    """Abstract base class for lemma dictionaries."""

    @abc.abstractmethod
    def lookup(self, word: str) -> Tuple[DictionaryEntry, ...]:
        """Return the (tag, lemma) entries for a surface form, or () if unknown."""

    def __contains__(self, word: str) -> bool:
        return bool(self.lookup(word))


class TabularDictionary(DictionaryLookup):
    """
    In-memory dictionary indexed by surface form.

    Entries keep the order they were read in; the lemmatizer takes the last
    entry whose tag matches.
    """

    def __init__(self, entries: Iterable[Tuple[str, str, str]] = ()) -> None:
        """
        Args:
            entries: (word, lemma, tag) triples
        """
        index: Dict[str, List[DictionaryEntry]] = defaultdict(list)
        for word, lemma, tag in entries:
            index[word].append(DictionaryEntry(tag, lemma))
        self._index = {word: tuple(found) for word, found in index.items()}

    @classmethod
    def from_tsv(cls, path: str) -> "TabularDictionary":
        """
        Load a ``word<TAB>lemma<TAB>tag`` dictionary file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a line does not hold three non-empty fields
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Dictionary not found: {path}")

        print(f"Loading tabular dictionary from: {path}", file=sys.stderr)
        try:
            # Blank lines are kept as rows so the index is the line number - 1
            frame = pd.read_csv(
                path,
                sep='\t',
                header=None,
                dtype=str,
                quoting=csv.QUOTE_NONE,
                keep_default_na=False,
                skip_blank_lines=False,
                encoding='utf-8',
            )
        except pd.errors.ParserError as e:
            raise ValueError(f"Malformed dictionary {path}: {e}") from e

        if len(frame.columns) != 3:
            raise ValueError(
                f"Malformed dictionary {path}: expected word<TAB>lemma<TAB>tag, "
                f"found {len(frame.columns)} fields"
            )
        frame.columns = ['word', 'lemma', 'tag']
        frame = frame.fillna('')

        empty = frame == ''
        blank = empty.all(axis=1)
        malformed = frame[empty.any(axis=1) & ~blank]
        if not malformed.empty:
            line_no = malformed.index[0] + 1
            raise ValueError(
                f"Malformed dictionary line {line_no} in {path}: "
                f"expected word<TAB>lemma<TAB>tag"
            )
        frame = frame[~blank]

        dictionary = cls(frame[['word', 'lemma', 'tag']].itertuples(index=False, name=None))
        print(f"✓ Loaded {len(frame):,} entries for {len(dictionary):,} word forms",
              file=sys.stderr)
        return dictionary

    def lookup(self, word: str) -> Tuple[DictionaryEntry, ...]:
        return self._index.get(word, ())

    def __len__(self) -> int:
        return len(self._index)


class HfstDictionary(DictionaryLookup):
    """
    Dictionary backed by a compiled hfst transducer.

    The transducer maps surface forms to ``lemma+TAG`` strings. Non optimized
    transducers are converted to weighted optimized-lookup format once, so
    every lookup afterwards is read-only.
    """

    def __init__(self, transducer, separator: str = '+') -> None:
        import hfst

        if transducer.get_type() not in (hfst.ImplementationType.HFST_OL_TYPE,
                                         hfst.ImplementationType.HFST_OLW_TYPE):
            transducer = hfst.HfstTransducer(transducer)
            transducer.convert(hfst.ImplementationType.HFST_OLW_TYPE)
        self.transducer = transducer
        self.separator = separator

    @classmethod
    def from_file(cls, path: str, separator: str = '+') -> "HfstDictionary":
        """
        Read the first transducer of an hfst file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        import hfst

        if not os.path.exists(path):
            raise FileNotFoundError(f"Dictionary transducer not found: {path}")

        print(f"Loading hfst dictionary from: {path}", file=sys.stderr)
        input_stream = hfst.HfstInputStream(path)
        transducer = input_stream.read()
        input_stream.close()
        print("✓ hfst dictionary loaded", file=sys.stderr)
        return cls(transducer, separator)

    def parse_analysis(self, analysis: str) -> Optional[DictionaryEntry]:
        """
        Split a transducer output into an entry.

        Example:
            >>> parse_analysis('correr+VMIP3S0')
            DictionaryEntry(tag='VMIP3S0', lemma='correr')
        """
        lemma, sep, tag = SPECIAL_SYMBOL.sub('', analysis).rpartition(self.separator)
        if not (sep and lemma and tag):
            return None
        return DictionaryEntry(tag, lemma)

    def lookup(self, word: str) -> Tuple[DictionaryEntry, ...]:
        entries = []
        for analysis, _weight in self.transducer.lookup(word):
            entry = self.parse_analysis(analysis)
            if entry is not None:
                entries.append(entry)
        return tuple(entries)


def infer_dictionary_format(path: str) -> str:
    return 'hfst' if path.lower().endswith(HFST_SUFFIXES) else 'tsv'


def load_dictionary(path: str, fmt: Optional[str] = None) -> DictionaryLookup:
    """
    Open a dictionary resource.

    Args:
        path: Dictionary file
        fmt: 'tsv', 'hfst' or None to infer from the file suffix

    Returns:
        DictionaryLookup ready to be shared read-only
    """
    fmt = fmt or infer_dictionary_format(path)
    if fmt == 'hfst':
        return HfstDictionary.from_file(path)
    if fmt == 'tsv':
        return TabularDictionary.from_tsv(path)
    raise ValueError(f"Unknown dictionary format: {fmt!r}")

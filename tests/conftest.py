"""Shared pytest fixtures for the annotator tests."""

import pytest

from annotate import Annotator
from annotator_config import Language
from dictionary_lookup import TabularDictionary
from lemmatizer import DictionaryLemmatizer


SPANISH_ENTRIES = [
    ("corre", "correr", "VMIP3S0"),
    ("casas", "casa", "NCFP000"),
    ("la", "el", "DA0FS0"),
    ("la", "él", "PP3FSA00"),
    ("en", "en", "SP000"),
    ("Madrid", "Madrid", "NP00000"),
    ("rápido", "rápido", "AQ0MS0"),
    ("rápido", "rápido", "RG"),
]

ENGLISH_ENTRIES = [
    ("dogs", "dog", "NNS"),
    ("ran", "run", "VBD"),
    ("the", "the", "DT"),
    ("better", "well", "RBR"),
    ("better", "good", "JJR"),
    ("Paris", "Paris", "NNP"),
]


@pytest.fixture
def spanish_dictionary():
    return TabularDictionary(SPANISH_ENTRIES)


@pytest.fixture
def english_dictionary():
    return TabularDictionary(ENGLISH_ENTRIES)


@pytest.fixture
def spanish_lemmatizer(spanish_dictionary):
    return DictionaryLemmatizer(spanish_dictionary, Language.ES)


@pytest.fixture
def english_lemmatizer(english_dictionary):
    return DictionaryLemmatizer(english_dictionary, Language.EN)


@pytest.fixture
def english_annotator(english_lemmatizer):
    return Annotator(Language.EN, english_lemmatizer)


@pytest.fixture
def spanish_annotator(spanish_lemmatizer):
    return Annotator(Language.ES, spanish_lemmatizer)


@pytest.fixture
def english_tsv(tmp_path):
    """Write the English entries as a word<TAB>lemma<TAB>tag file."""
    path = tmp_path / "en-lemmas.tsv"
    path.write_text(
        "".join(f"{word}\t{lemma}\t{tag}\n" for word, lemma, tag in ENGLISH_ENTRIES),
        encoding="utf-8",
    )
    return path

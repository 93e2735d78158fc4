"""Tests for the tabular and hfst lemma dictionaries."""

import pytest

from dictionary_lookup import (
    DictionaryEntry,
    TabularDictionary,
    infer_dictionary_format,
    load_dictionary,
)


class TestTabularDictionary:

    def test_lookup_returns_entries(self, spanish_dictionary):
        assert spanish_dictionary.lookup("corre") == (DictionaryEntry("VMIP3S0", "correr"),)

    def test_lookup_keeps_resource_order(self, spanish_dictionary):
        assert [entry.tag for entry in spanish_dictionary.lookup("la")] == ["DA0FS0", "PP3FSA00"]

    def test_unknown_word_returns_empty(self, spanish_dictionary):
        assert spanish_dictionary.lookup("xyzzy") == ()
        assert "xyzzy" not in spanish_dictionary

    def test_lookup_is_case_sensitive(self, spanish_dictionary):
        assert spanish_dictionary.lookup("Corre") == ()
        assert spanish_dictionary.lookup("madrid") == ()
        assert "Madrid" in spanish_dictionary

    def test_len_counts_word_forms(self, spanish_dictionary):
        assert len(spanish_dictionary) == 6


class TestTabularDictionaryLoading:

    def test_from_tsv(self, english_tsv):
        dictionary = TabularDictionary.from_tsv(str(english_tsv))
        assert dictionary.lookup("better") == (
            DictionaryEntry("RBR", "well"),
            DictionaryEntry("JJR", "good"),
        )

    def test_values_are_not_parsed(self, tmp_path):
        """Strings pandas would read as missing or numeric stay as written."""
        path = tmp_path / "lemmas.tsv"
        path.write_text("NA\tNA\tNNP\nnull\tnull\tNN\n1,000\t1000\tCD\n", encoding="utf-8")
        dictionary = TabularDictionary.from_tsv(str(path))
        assert dictionary.lookup("NA") == (DictionaryEntry("NNP", "NA"),)
        assert dictionary.lookup("null") == (DictionaryEntry("NN", "null"),)
        assert dictionary.lookup("1,000") == (DictionaryEntry("CD", "1000"),)

    def test_quotes_are_literal(self, tmp_path):
        path = tmp_path / "lemmas.tsv"
        path.write_text('"\t"\t``\n', encoding="utf-8")
        dictionary = TabularDictionary.from_tsv(str(path))
        assert dictionary.lookup('"') == (DictionaryEntry("``", '"'),)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TabularDictionary.from_tsv(str(tmp_path / "missing.tsv"))

    def test_missing_field(self, tmp_path):
        path = tmp_path / "lemmas.tsv"
        path.write_text("dogs\tdog\tNNS\ncats\tcat\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Malformed"):
            TabularDictionary.from_tsv(str(path))

    @pytest.mark.parametrize("text", [
        "dogs\tdog\tNNS\textra\n",
        "dogs\tdog\tNNS\ncats\tcat\tNNS\textra\n",
        "dogs\tdog\tNNS\textra\ncats\tcat\tNNS\n",
    ])
    def test_extra_field(self, tmp_path, text):
        path = tmp_path / "lemmas.tsv"
        path.write_text(text, encoding="utf-8")
        with pytest.raises(ValueError, match="Malformed"):
            TabularDictionary.from_tsv(str(path))

    def test_error_reports_file_line(self, tmp_path):
        """Blank lines count towards the reported line number."""
        path = tmp_path / "lemmas.tsv"
        path.write_text("dogs\tdog\tNNS\n\ncats\tcat\n", encoding="utf-8")
        with pytest.raises(ValueError, match="line 3"):
            TabularDictionary.from_tsv(str(path))

    def test_blank_lines_are_skipped(self, tmp_path):
        path = tmp_path / "lemmas.tsv"
        path.write_text("dogs\tdog\tNNS\n\ncats\tcat\tNNS\n", encoding="utf-8")
        dictionary = TabularDictionary.from_tsv(str(path))
        assert len(dictionary) == 2
        assert dictionary.lookup("cats") == (DictionaryEntry("NNS", "cat"),)

    def test_load_dictionary_infers_tsv(self, english_tsv):
        dictionary = load_dictionary(str(english_tsv))
        assert isinstance(dictionary, TabularDictionary)

    def test_unknown_format(self, english_tsv):
        with pytest.raises(ValueError):
            load_dictionary(str(english_tsv), "morfologik")


class TestInferFormat:

    @pytest.mark.parametrize("path,expected", [
        ("es-lemmas.hfst", "hfst"),
        ("EN.HFSTOL", "hfst"),
        ("es-lemmas.tsv", "tsv"),
        ("lemmas.txt", "tsv"),
    ])
    def test_infer(self, path, expected):
        assert infer_dictionary_format(path) == expected


class TestHfstDictionary:

    @pytest.fixture
    def hfst(self):
        return pytest.importorskip("hfst")

    @pytest.fixture
    def transducer(self, hfst):
        return hfst.fst({"corre": "correr+VMIP3S0", "casas": "casa+NCFP000"})

    def test_lookup(self, transducer):
        from dictionary_lookup import HfstDictionary

        dictionary = HfstDictionary(transducer)
        assert dictionary.lookup("corre") == (DictionaryEntry("VMIP3S0", "correr"),)
        assert dictionary.lookup("Corre") == ()

    def test_parse_analysis(self, transducer):
        from dictionary_lookup import HfstDictionary

        dictionary = HfstDictionary(transducer)
        assert dictionary.parse_analysis("c++@_EPSILON_SYMBOL_@+NCMS000") == DictionaryEntry("NCMS000", "c++")
        assert dictionary.parse_analysis("no-separator") is None

    def test_from_file(self, hfst, transducer, tmp_path):
        path = str(tmp_path / "es-lemmas.hfst")
        ostr = hfst.HfstOutputStream(filename=path)
        ostr.write(transducer)
        ostr.flush()
        ostr.close()

        dictionary = load_dictionary(path)
        assert dictionary.lookup("casas") == (DictionaryEntry("NCFP000", "casa"),)

    def test_missing_file(self, hfst, tmp_path):
        from dictionary_lookup import HfstDictionary

        with pytest.raises(FileNotFoundError):
            HfstDictionary.from_file(str(tmp_path / "missing.hfst"))

#!/usr/bin/env python3
"""
Sentence annotation: coarse POS, term type and lemma for every token.

The Annotator takes tokenized sentences with their fine tags (given
explicitly or obtained from a tagger), maps each tag to its coarse category
and term class, lemmatizes every token and writes the result either into an
AnnotatedDocument (one term per token) or as tab-separated text.

Usage:
    python3 annotate.py tagged.tsv --lang es --dictionary es-lemmas.tsv
    python3 annotate.py tokens.txt --input-format tokenized --lang en \\
        --dictionary en-lemmas.hfst --output-format json
"""

import sys
from collections import Counter
from typing import List, NamedTuple, Optional, Sequence

from annotator_config import AnnotatorConfig, Language, LEMMA_METHODS, TokenTagMismatchError, VERSION
from dictionary_lookup import load_dictionary
from document import AnnotatedDocument
from lemmatizer import DictionaryLemmatizer
from tagset_mapper import TagsetMapper, TermClassifier


class AnnotatedToken(NamedTuple):
    index: int
    form: str
    tag: str
    pos: str
    term_type: str
    lemma: str
    method: str


class Annotator:
    """
    Per-sentence annotation pipeline.

    Sentences are processed strictly in order and tokens within a sentence
    in order, so every output follows input order.

    Attributes:
        language: Language selecting the tagset rules
        lemmatizer: DictionaryLemmatizer for the same language
        tagger: Optional object with tag(tokens) -> List[str]
    """

    def __init__(self, language: Language, lemmatizer: DictionaryLemmatizer,
                 tagger=None) -> None:
        self.language = Language.from_code(language)
        self.lemmatizer = lemmatizer
        self.tagger = tagger
        self.tagset_mapper = TagsetMapper()
        self.term_classifier = TermClassifier()

    @classmethod
    def from_config(cls, config: AnnotatorConfig, tagger=None) -> "Annotator":
        """Open the configured dictionary and build an annotator around it."""
        if not config.dictionary_path:
            raise ValueError("No dictionary configured")
        dictionary = load_dictionary(config.dictionary_path, config.dictionary_format)
        lemmatizer = DictionaryLemmatizer(dictionary, config.language)
        return cls(config.language, lemmatizer, tagger)

    def tag_sentence(self, tokens: Sequence[str]) -> List[str]:
        if self.tagger is None:
            raise ValueError("No tagger configured: pass the fine tags explicitly")
        return self.tagger.tag(tokens)

    def annotate_token(self, index: int, form: str, tag: str) -> AnnotatedToken:
        if not form:
            raise ValueError(f"Empty token at position {index}")
        pos = self.tagset_mapper.map_tag(self.language, tag)
        lemma, method = self.lemmatizer.lemmatize_with_method(form, tag)
        return AnnotatedToken(
            index=index,
            form=form,
            tag=tag,
            pos=pos,
            term_type=self.term_classifier.classify(pos),
            lemma=lemma,
            method=method
        )

    def annotate_sentence(self, tokens: Sequence[str],
                          tags: Optional[Sequence[str]] = None) -> List[AnnotatedToken]:
        """
        Annotate one sentence.

        Args:
            tokens: Surface forms in sentence order
            tags: One fine tag per token, or None to ask the tagger

        Raises:
            TokenTagMismatchError: If tokens and tags differ in length
            ValueError: If a token is empty
        """
        if tags is None:
            tags = self.tag_sentence(tokens)
        if len(tags) != len(tokens):
            raise TokenTagMismatchError(
                f"Got {len(tokens)} tokens but {len(tags)} tags"
            )
        return [self.annotate_token(i, form, tag)
                for i, (form, tag) in enumerate(zip(tokens, tags))]

    def annotate_sentences(self, sentences: Sequence[Sequence[str]],
                           tags: Optional[Sequence[Sequence[str]]] = None) -> List[List[AnnotatedToken]]:
        if tags is None:
            return [self.annotate_sentence(tokens) for tokens in sentences]
        if len(tags) != len(sentences):
            raise TokenTagMismatchError(
                f"Got {len(sentences)} sentences but {len(tags)} tag lists"
            )
        return [self.annotate_sentence(tokens, sentence_tags)
                for tokens, sentence_tags in zip(sentences, tags)]

    def annotate_document(self, document: AnnotatedDocument,
                          tags: Optional[Sequence[Sequence[str]]] = None) -> List[List[AnnotatedToken]]:
        """
        Add one term per word form to the document.

        Returns:
            The annotated tokens, one list per sentence
        """
        sentences = document.get_sentences()
        annotated = self.annotate_sentences(
            [[wf.form for wf in sentence] for sentence in sentences], tags
        )
        for sentence, tokens in zip(sentences, annotated):
            for wf, token in zip(sentence, tokens):
                document.create_term(token.term_type, token.lemma, token.pos, token.tag, [wf])
        return annotated

    def annotate_to_tabular(self, sentences: Sequence[Sequence[str]],
                            tags: Optional[Sequence[Sequence[str]]] = None) -> str:
        return format_tabular(self.annotate_sentences(sentences, tags))


def format_tabular(annotated: Sequence[Sequence[AnnotatedToken]]) -> str:
    """
    Render ``form<TAB>lemma<TAB>tag`` lines with a blank line between sentences.

    Example:
        >>> format_tabular([[AnnotatedToken(0, 'Corre', 'VMIP3S0', 'V', 'open', 'correr', 'dictionary')]])
        'Corre\\tcorrer\\tVMIP3S0\\n'
    """
    blocks = []
    for tokens in annotated:
        blocks.append("".join(f"{t.form}\t{t.lemma}\t{t.tag}\n" for t in tokens))
    return "\n".join(blocks)


def method_statistics(annotated: Sequence[Sequence[AnnotatedToken]]) -> Counter:
    counts = Counter({method: 0 for method in LEMMA_METHODS})
    counts.update(token.method for tokens in annotated for token in tokens)
    return counts


def main() -> None:
    """CLI interface for the annotator"""
    import argparse

    from pos_tagger import StanzaTagger, parse_tagged_text, parse_tokenized_text, read_tagged_file

    parser = argparse.ArgumentParser(
        description=f"POS mapping and dictionary lemmatization (v{VERSION})"
    )
    parser.add_argument('input', nargs='?', help='Input file (or use stdin)')
    parser.add_argument('--lang', default='en', choices=[lang.value for lang in Language],
                        help='Language of the input (default: en)')
    parser.add_argument('--dictionary', required=True,
                        help='Lemma dictionary (.tsv word/lemma/tag or compiled .hfst)')
    parser.add_argument('--dictionary-format', choices=['tsv', 'hfst'], default=None,
                        help='Dictionary format (default: inferred from suffix)')
    parser.add_argument('--input-format', choices=['tagged', 'tokenized'], default='tagged',
                        help='tagged: word<TAB>tag lines; tokenized: one sentence per line, '
                             'tagged with Stanza (default: tagged)')
    parser.add_argument('--output-format', choices=['tab', 'json'], default='tab',
                        help='Output format (default: tab)')
    parser.add_argument('--output', help='Output file (default: stdout)')
    parser.add_argument('--stanza-dir', default=None, help='Stanza resources directory')
    parser.add_argument('--use-gpu', action='store_true', help='Run Stanza on GPU')
    parser.add_argument('--stats', action='store_true',
                        help='Print lemma resolution statistics to stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    args = parser.parse_args()

    try:
        config = AnnotatorConfig(
            lang=args.lang,
            dictionary_path=args.dictionary,
            dictionary_format=args.dictionary_format,
            enable_stanza=args.input_format == 'tokenized',
            stanza_dir=args.stanza_dir,
            use_gpu=args.use_gpu,
            output_format=args.output_format
        )

        if args.input_format == 'tagged':
            if args.input:
                tagged = read_tagged_file(args.input)
            else:
                tagged = parse_tagged_text(sys.stdin.read())
            sentences = [[word for word, _ in sentence] for sentence in tagged]
            tags = [[tag for _, tag in sentence] for sentence in tagged]
            tagger = None
        else:
            if args.input:
                with open(args.input, 'r', encoding='utf-8') as f:
                    text = f.read()
            else:
                text = sys.stdin.read()
            sentences = parse_tokenized_text(text)
            tags = None
            tagger = StanzaTagger(config.language, config.stanza_dir, config.use_gpu)

        annotator = Annotator.from_config(config, tagger)
        document = AnnotatedDocument.from_sentences(sentences, config.lang)
        annotated = annotator.annotate_document(document, tags)
    except (FileNotFoundError, ValueError, ImportError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    output = format_tabular(annotated) if config.output_format == 'tab' else document.to_json() + "\n"
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        print(f"✓ Output saved to: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)

    if args.stats:
        stats = method_statistics(annotated)
        total = sum(stats.values())
        print(f"Total tokens:        {total}", file=sys.stderr)
        for method in LEMMA_METHODS:
            share = stats[method] / total * 100 if total else 0.0
            print(f"{method + ':':<20} {stats[method]} ({share:.1f}%)", file=sys.stderr)


if __name__ == "__main__":
    main()

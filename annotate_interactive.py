#!/usr/bin/env python3
"""
Interactive annotator demo

Tokens are separated by whitespace. Type ``word/TAG`` pairs to supply the
tags yourself; plain words are tagged with Stanza when it is available.

Usage:
    python3 annotate_interactive.py --lang es --dictionary es-lemmas.tsv
"""

import argparse
import sys

from annotate import Annotator
from annotator_config import AnnotatorConfig, Language
from pos_tagger import STANZA_AVAILABLE, StanzaTagger


def split_tagged_tokens(text):
    """Split 'Juan/NP00000 corre/VMIP3S0' into tokens and tags, or tags=None."""
    tokens = text.split()
    if tokens and all('/' in token.strip('/') for token in tokens):
        pairs = [token.rsplit('/', 1) for token in tokens]
        return [word for word, _ in pairs], [tag for _, tag in pairs]
    return tokens, None


def main():
    parser = argparse.ArgumentParser(description='Interactive POS/lemma annotator')
    parser.add_argument('--lang', default='en', choices=[lang.value for lang in Language])
    parser.add_argument('--dictionary', required=True, help='Lemma dictionary (.tsv or .hfst)')
    parser.add_argument('--no-stanza', action='store_true', help='Never load the Stanza tagger')
    args = parser.parse_args()

    print("=" * 80)
    print(f"POS/Lemma Annotator ({args.lang})")
    print("=" * 80)
    print()

    config = AnnotatorConfig(lang=args.lang, dictionary_path=args.dictionary,
                             enable_stanza=not args.no_stanza)

    print("Loading annotator...")
    tagger = None
    if config.enable_stanza and STANZA_AVAILABLE:
        try:
            tagger = StanzaTagger(config.language, config.stanza_dir, config.use_gpu)
        except Exception as e:
            print(f"⚠ Could not load Stanza: {e}", file=sys.stderr)
    try:
        annotator = Annotator.from_config(config, tagger)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    print("✓ Ready!")
    print()

    print("Commands:")
    print("  - Type word/TAG pairs: annotate with your tags")
    if tagger:
        print("  - Type a sentence: tag with Stanza and annotate")
    print("  - 'quit' or 'exit': exit program")
    print()

    while True:
        try:
            text = input("text > ").strip()

            if not text:
                continue

            if text.lower() in ['quit', 'exit', 'q']:
                print("Goodbye!")
                break

            tokens, tags = split_tagged_tokens(text)
            annotated = annotator.annotate_sentence(tokens, tags)

            print(f"\n  {'Word':<18} {'Lemma':<18} {'Tag':<10} {'POS':<4} {'Type':<7} Method")
            print("  " + "-" * 75)
            for token in annotated:
                print(f"  {token.form:<18} {token.lemma:<18} {token.tag:<10} "
                      f"{token.pos:<4} {token.term_type:<7} {token.method}")
            print()

        except KeyboardInterrupt:
            print("\n\nGoodbye!")
            break
        except ValueError as e:
            print(f"\n  ⚠ Error: {e}\n")


if __name__ == '__main__':
    main()

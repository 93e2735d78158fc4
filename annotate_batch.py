#!/usr/bin/env python3
"""
========================================================
BATCH CSV ANNOTATOR - Lemmas and coarse POS for tagged tokens
========================================================

Annotates a long-format CSV with one tagged token per row. Rows keep their
order and all input columns; four columns are appended:

    lemma, pos, term_type, method

Input CSV must contain 'word' and 'tag' columns, typically together with
document and sentence identifiers:

    doc_id,sentence_id,word,tag
    d1,1,Juan,NP00000
    d1,1,corre,VMIP3S0

USAGE:
python3 annotate_batch.py \\
  --input tagged_tokens.csv \\
  --output annotated_tokens.csv \\
  --lang es \\
  --dictionary es-lemmas.tsv \\
  --chunk-size 50000
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Dict

from tqdm import tqdm

import pandas as pd

from annotate import Annotator
from annotator_config import AnnotatorConfig, Language, LEMMA_METHODS

REQUIRED_COLUMNS = ('word', 'tag')
OUTPUT_COLUMNS = ('lemma', 'pos', 'term_type', 'method')


def annotate_frame(annotator: Annotator, frame: pd.DataFrame) -> pd.DataFrame:
    """
    Append annotation columns to a chunk of tagged tokens.

    Raises:
        ValueError: If 'word' or 'tag' columns are missing
    """
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise ValueError(f"Input is missing required columns: {', '.join(missing)}")

    annotated = [
        annotator.annotate_token(i, str(word), str(tag))
        for i, (word, tag) in enumerate(zip(frame['word'], frame['tag']))
    ]

    result = frame.copy()
    for column in OUTPUT_COLUMNS:
        result[column] = [getattr(token, column) for token in annotated]
    return result


def process_batch(args) -> Dict[str, int]:
    """
    Main batch processing function

    Reads the CSV in chunks, annotates each chunk and appends it to the output.

    Returns:
        Counts per lemma method plus 'total'
    """
    input_csv = Path(args.input)
    output_csv = Path(args.output)

    if not input_csv.exists():
        raise FileNotFoundError(f"Input file not found: {input_csv}")

    config = AnnotatorConfig(
        lang=args.lang,
        dictionary_path=args.dictionary,
        dictionary_format=args.dictionary_format,
        enable_stanza=False
    )

    load_start = time.time()
    annotator = Annotator.from_config(config)
    print(f"✓ Annotator loaded in {time.time() - load_start:.1f} seconds", file=sys.stderr)

    # Quick row count for the progress bar
    with open(input_csv, 'r', encoding='utf-8') as f:
        total_rows = max(sum(1 for _ in f) - 1, 0)
    print(f"✓ Found {total_rows:,} tokens", file=sys.stderr)

    stats = {method: 0 for method in LEMMA_METHODS}
    stats['total'] = 0
    write_header = True

    csv_reader = pd.read_csv(input_csv, chunksize=args.chunk_size, dtype=str,
                             keep_default_na=False)
    with tqdm(total=total_rows, desc="Annotating", unit="tokens", disable=args.quiet) as pbar:
        for chunk_df in csv_reader:
            result = annotate_frame(annotator, chunk_df)
            result.to_csv(output_csv, mode='w' if write_header else 'a',
                          header=write_header, index=False)
            write_header = False

            for method, count in result['method'].value_counts().items():
                stats[method] += int(count)
            stats['total'] += len(result)
            pbar.update(len(result))

    if write_header:
        # Empty input: still produce a header-only file
        pd.DataFrame(columns=list(REQUIRED_COLUMNS + OUTPUT_COLUMNS)).to_csv(output_csv, index=False)

    print(f"✓ Total tokens annotated: {stats['total']:,}", file=sys.stderr)
    print(f"✓ Output saved to: {output_csv}", file=sys.stderr)
    return stats


def main():
    parser = argparse.ArgumentParser(
        description='Batch annotate a CSV of tagged tokens with lemmas and coarse POS',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('--input', required=True, help='Input CSV with word and tag columns')
    parser.add_argument('--output', required=True, help='Output CSV file')
    parser.add_argument('--lang', default='en', choices=[lang.value for lang in Language],
                        help='Language of the tags (default: en)')
    parser.add_argument('--dictionary', required=True, help='Lemma dictionary (.tsv or .hfst)')
    parser.add_argument('--dictionary-format', choices=['tsv', 'hfst'], default=None,
                        help='Dictionary format (default: inferred from suffix)')
    parser.add_argument('--chunk-size', type=int, default=50000,
                        help='Number of rows per chunk (default: 50000)')
    parser.add_argument('--quiet', action='store_true', help='Hide the progress bar')

    args = parser.parse_args()

    try:
        process_batch(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()

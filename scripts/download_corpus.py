#!/usr/bin/env python3
"""Download a training text for triegen from HuggingFace datasets."""
import sys
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter

from triegen.corpus import download_corpus

# name -> (dataset, config, split, text field)
SOURCES = {
    'wikitext': ("Salesforce/wikitext", "wikitext-103-raw-v1", "train", "text"),
    'tinystories': ("roneneldan/TinyStories", None, "train", "text"),
    'gutenberg': ("manu/project_gutenberg", None, "en", "text"),
}


def main():
    parser = ArgumentParser(formatter_class=ArgumentDefaultsHelpFormatter)
    parser.add_argument("source", choices=sorted(SOURCES), help="corpus to fetch")
    parser.add_argument("--output", default="data/corpus.txt", help="where to write the text")
    parser.add_argument("--max_lines", type=int, default=5000, help="lines to keep")
    args = parser.parse_args()

    dataset, name, split, field = SOURCES[args.source]
    print(f"Downloading {dataset} ({name or 'default'}, {split})...")
    try:
        written = download_corpus(args.output, dataset, name=name, split=split,
                                  text_field=field, max_lines=args.max_lines)
    except Exception as e:
        print(f"  {args.source} failed: {e}")
        return 1
    print(f"  Wrote {written} lines to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Training text helpers: file loading, line splitting and corpus download."""

import os


def load_text(path, encoding="utf-8", errors="ignore"):
    """Read the whole file at ``path`` into one string."""
    with open(path, "r", encoding=encoding, errors=errors) as f:
        return f.read()


def split_lines(text):
    """Split ``text`` on newlines, dropping empty lines."""
    return [line for line in text.split("\n") if line]


def _load_dataset():
    # Heavy import, only needed when downloading
    from datasets import load_dataset
    return load_dataset


def download_corpus(output_path, dataset, name=None, split="train",
                    text_field="text", max_lines=5000, max_records=50000,
                    min_length=10, max_length=300, loader=None):
    """
    Stream a Hugging Face dataset into a plain training text file.

    Each record's ``text_field`` is flattened to one line and cut into
    sentences on ". ". Sentences outside ``min_length``..``max_length``
    characters are dropped, duplicates are removed and at most
    ``max_lines`` are written, one per line.

    Returns the number of lines written.
    """
    if loader is None:
        loader = _load_dataset()
    ds = loader(dataset, name, split=split, streaming=True)

    lines = []
    for i, ex in enumerate(ds):
        if i >= max_records or len(lines) >= max_lines:
            break
        text = (ex.get(text_field) or "").strip()
        for sent in " ".join(split_lines(text)).split(". "):
            sent = sent.strip()
            if min_length < len(sent) < max_length:
                lines.append(sent)
                if len(lines) >= max_lines:
                    break

    lines = list(dict.fromkeys(lines))
    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    return len(lines)

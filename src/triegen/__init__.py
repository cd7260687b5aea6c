"""Character-level Markov text generation over a prefix tree."""

from .errors import TrieError
from .generator import Generator, ReplayRandom
from .model import ContextModel
from .trie import NIL, TrieStore

__all__ = [
    "ContextModel",
    "Generator",
    "NIL",
    "ReplayRandom",
    "TrieError",
    "TrieStore",
]

__version__ = "0.1.0"

"""Exceptions raised by the trie store, the context model and the CLI."""


class TrieError(RuntimeError):
    """Base class for every recoverable trie failure."""


class OrphanNodeError(TrieError):
    """Raised when an operation is given an absent node or parent."""


class EmptySequenceError(TrieError):
    """Raised when a sequence to insert, find or remove is empty."""


class DuplicateChildError(TrieError):
    """Raised by a strict spawn when the parent already has that symbol."""


class NoSuchSequenceError(TrieError):
    """Raised when a sequence is not stored as a terminal path."""


class NoSuchNodeError(TrieError):
    """Raised when a parent has no child with the requested symbol."""


class CorruptTrieError(TrieError):
    """Raised when a consistency check fails ahead of a destructive operation."""


class StaleNodeError(TrieError):
    """Raised when a released node handle is used or released again."""


class ArenaExhaustedError(TrieError):
    """Raised when a store cannot allocate another node."""


class ConfigError(ValueError):
    """Raised when run settings are missing or out of range."""

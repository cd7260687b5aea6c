from .errors import ConfigError
from .trie import NIL, TrieStore


# ---------------------------------------------------------------------- #
#  Context Model                                                          #
# ---------------------------------------------------------------------- #

class ContextModel:
    """
    A character-level Markov model keyed by fixed-length contexts.

    Every run of ``context_length`` characters seen in training is stored
    as a terminal path in a TrieStore. The children of that terminal node
    are the characters that followed the context, each carrying a float
    weight: the integer part is the running count and the fractional part
    is the child's share of the context total at the last update.

    Weights are re-derived after every observed transition, from the
    current (already adjusted) weights rather than from separate raw
    counts. The first observation of a transition therefore ends up
    counted twice, and the fractional shares drift from the true relative
    frequencies. The generator samples from those fractional shares.
    """

    def __init__(self, context_length, store=None):
        if context_length < 1:
            raise ConfigError(
                "Context length must be positive, got {}".format(context_length))
        self.context_length = context_length
        self.store = store if store is not None else TrieStore()
        self.contexts = 0
        self.transitions = 0

    # ------------------------------------------------------------------ #
    #  Training                                                           #
    # ------------------------------------------------------------------ #

    def train(self, chars):
        """
        Scan ``chars`` once, left to right, and record every transition.

        A transition is a context of ``context_length`` characters plus the
        character right after it. Returns the number of transitions seen.
        """
        store = self.store
        root = store.root
        n = self.context_length
        observed = 0
        for i in range(len(chars) - n):
            context = chars[i:i + n]
            node = store.find_sequence(root, context)
            if node is None:
                node = store.insert_sequence(root, context)
                self.contexts += 1
            self._observe(node, chars[i + n])
            observed += 1

        self.transitions += observed
        return observed

    def _observe(self, node, next_char):
        store = self.store
        child = store.child_of(node, next_char)
        if child is None:
            store.spawn_child(node, next_char, weight=1.0, strict=True)
        else:
            store.set_weight(child, store.weight(child) + 1.0)
        self._normalize(node)

    def _normalize(self, node):
        store = self.store
        total = sum(int(store.weight(child)) for child in store.children(node))
        for child in store.children(node):
            count = int(store.weight(child))
            store.set_weight(child, count + count / total)

    # ------------------------------------------------------------------ #
    #  Queries                                                            #
    # ------------------------------------------------------------------ #

    def lookup(self, window):
        """Return the context node for ``window``, or None if it was never seen."""
        if len(window) != self.context_length:
            return None
        return self.store.find_sequence(self.store.root, window)

    def distribution(self, window):
        """List ``(next_char, weight)`` pairs for ``window`` in chain order."""
        node = self.lookup(window)
        if node is None:
            return []
        store = self.store
        return [(store.symbol(child), store.weight(child))
                for child in store.children(node)]

    def dump(self):
        return self.store.dump(self.store.root)

    def close(self):
        """Release every node of the model. Safe to call more than once."""
        if self.store.root != NIL:
            self.store.purge(self.store.root)

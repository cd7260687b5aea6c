"""
Prefix tree over single characters, stored in a flat node arena.

Nodes are addressed by integer handles into parallel lists instead of
object references. Each node links to its first child and to its next
sibling, so the children of one parent form a singly linked chain headed
by the parent's first child. There are no parent links.
"""

from .errors import (
    ArenaExhaustedError,
    CorruptTrieError,
    DuplicateChildError,
    EmptySequenceError,
    NoSuchNodeError,
    NoSuchSequenceError,
    OrphanNodeError,
    StaleNodeError,
)

NIL = -1
# Written into the links of a released slot so stale handles fail fast.
POISON = 0xC3C3C3C3
ROOT_SYMBOL = "\0"


class TrieStore:
    """
    Arena of trie nodes.

    A node is a slot holding a symbol, a terminal flag, a first-child
    handle, a next-sibling handle and an optional float weight. New
    children are prepended to their parent's chain, so sibling order is
    the reverse of insertion order.

    Released slots are poisoned and recycled through a free list. The
    store counts allocations and releases so callers can check that every
    node was released exactly once.
    """

    def __init__(self, capacity=None):
        self.capacity = capacity
        self._symbol = []
        self._terminal = []
        self._child = []
        self._sibling = []
        self._weight = []
        self._alive = []
        self._free = []
        self.allocations = 0
        self.releases = 0
        self.root = self._allocate(ROOT_SYMBOL, False, None)

    @property
    def live_nodes(self):
        return self.allocations - self.releases

    # ------------------------------------------------------------------ #
    #  Slot management                                                    #
    # ------------------------------------------------------------------ #

    def _allocate(self, symbol, terminal, weight):
        if self.capacity is not None and self.live_nodes >= self.capacity:
            raise ArenaExhaustedError(
                "Node capacity of {} exhausted".format(self.capacity))
        if self._free:
            node = self._free.pop()
            self._symbol[node] = symbol
            self._terminal[node] = terminal
            self._child[node] = NIL
            self._sibling[node] = NIL
            self._weight[node] = weight
            self._alive[node] = True
        else:
            node = len(self._symbol)
            self._symbol.append(symbol)
            self._terminal.append(terminal)
            self._child.append(NIL)
            self._sibling.append(NIL)
            self._weight.append(weight)
            self._alive.append(True)
        self.allocations += 1
        return node

    def _release(self, node):
        if not self._alive[node]:
            raise StaleNodeError("Node {} released twice".format(node))
        self._symbol[node] = None
        self._terminal[node] = False
        self._child[node] = POISON
        self._sibling[node] = POISON
        self._weight[node] = None
        self._alive[node] = False
        self._free.append(node)
        self.releases += 1
        if node == self.root:
            self.root = NIL

    def _is_live(self, node):
        return (isinstance(node, int) and 0 <= node < len(self._alive)
                and self._alive[node])

    def _check(self, node):
        if node is None or node == NIL:
            raise OrphanNodeError("Operation requires a node, got none")
        if not self._is_live(node):
            raise StaleNodeError("Node {} is not allocated".format(node))
        return node

    # ------------------------------------------------------------------ #
    #  Node accessors                                                     #
    # ------------------------------------------------------------------ #

    def symbol(self, node):
        return self._symbol[self._check(node)]

    def is_terminal(self, node):
        return self._terminal[self._check(node)]

    def weight(self, node):
        return self._weight[self._check(node)]

    def set_weight(self, node, value):
        self._weight[self._check(node)] = value

    def first_child(self, node):
        return self._child[self._check(node)]

    def children(self, node):
        """Yield the children of ``node`` in chain order."""
        child = self._child[self._check(node)]
        while child != NIL:
            yield child
            child = self._sibling[child]

    # ------------------------------------------------------------------ #
    #  Children                                                           #
    # ------------------------------------------------------------------ #

    def _find_child(self, parent, symbol):
        """Return ``(child, previous_sibling)``, NIL where absent."""
        previous = NIL
        child = self._child[self._check(parent)]
        while child != NIL:
            if self._symbol[child] == symbol:
                return child, previous
            previous = child
            child = self._sibling[child]
        return NIL, NIL

    def child_of(self, parent, symbol):
        """Return the child of ``parent`` holding ``symbol``, or None."""
        if parent is None or parent == NIL:
            return None
        child, _ = self._find_child(parent, symbol)
        return None if child == NIL else child

    def spawn_child(self, parent, symbol, terminal=False, weight=None,
                    strict=False):
        """
        Create a child of ``parent`` for ``symbol`` and return its handle.

        The new child becomes the head of the parent's chain. When a child
        with that symbol already exists, a strict spawn raises
        DuplicateChildError; otherwise the existing child keeps its place
        and gets the new terminal flag and weight.
        """
        if parent is None or parent == NIL:
            raise OrphanNodeError("Cannot spawn {!r} without a parent".format(symbol))
        child, _ = self._find_child(parent, symbol)
        if child != NIL:
            if strict:
                raise DuplicateChildError(
                    "Node {} already has a child {!r}".format(parent, symbol))
            self._terminal[child] = terminal
            self._weight[child] = weight
            return child

        newborn = self._allocate(symbol, terminal, weight)
        self._sibling[newborn] = self._child[parent]
        self._child[parent] = newborn
        return newborn

    def has_multiple_children(self, node):
        child = self._child[self._check(node)]
        return child != NIL and self._sibling[child] != NIL

    # ------------------------------------------------------------------ #
    #  Sequences                                                          #
    # ------------------------------------------------------------------ #

    def insert_sequence(self, root, chars):
        """
        Store ``chars`` under ``root`` and return its terminal node.

        Missing nodes are created along the way. Nodes that already exist
        keep their flags and weights; only the last one is marked terminal.
        """
        self._check(root)
        if not chars:
            raise EmptySequenceError("Cannot insert an empty sequence")
        node = root
        for symbol in chars:
            child = self.child_of(node, symbol)
            if child is None:
                child = self.spawn_child(node, symbol)
            node = child
        self._terminal[node] = True
        return node

    def insert_prefix(self, root, chars, n):
        """Same as insert_sequence, but stores only the first ``n`` symbols."""
        if n < 1:
            raise EmptySequenceError("Prefix length must be positive, got {}".format(n))
        return self.insert_sequence(root, chars[:n])

    def find_sequence(self, root, chars):
        """Return the terminal node spelling ``chars``, or None."""
        self._check(root)
        if not chars:
            raise EmptySequenceError("Cannot look up an empty sequence")
        node = root
        for symbol in chars:
            node = self.child_of(node, symbol)
            if node is None:
                return None
        return node if self._terminal[node] else None

    def find_sequence_relatives(self, root, chars):
        """
        Find ``chars`` and return ``(node, parent, previous_sibling)``.

        ``previous_sibling`` is NIL when the node heads its parent's chain.
        Raises NoSuchSequenceError when ``chars`` is not stored.
        """
        self._check(root)
        if not chars:
            raise EmptySequenceError("Cannot look up an empty sequence")
        node = root
        parent = previous = NIL
        for symbol in chars:
            parent = node
            node, previous = self._find_child(parent, symbol)
            if node == NIL:
                break
        if node == NIL or not self._terminal[node]:
            raise NoSuchSequenceError("Sequence {!r} is not stored".format(chars))
        return node, parent, previous

    def find_leaf_chain(self, root, chars):
        """
        Locate the part of the ``chars`` path that no other sequence uses.

        The leaf chain starts just below the deepest branch point on the
        path and runs down to the terminal node. A branch point is a node
        with several children, or a terminal node other than the end of
        ``chars``. Returns ``(leaf_start, leaf_parent)``, or None when the
        terminal node itself has children.
        """
        end = self.find_sequence(root, chars)
        if end is None:
            raise NoSuchSequenceError("Sequence {!r} is not stored".format(chars))
        if self._child[end] != NIL:
            return None

        leaf = parent = None
        node = root
        for symbol in chars:
            child = self.child_of(node, symbol)
            if child != end and (self.has_multiple_children(child)
                                 or self._terminal[child]):
                leaf = parent = None
            elif leaf is None:
                leaf, parent = child, node
            node = child
        if leaf is None:
            return None
        return leaf, parent

    def remove_sequence(self, root, chars):
        """
        Remove ``chars`` from the tree.

        A sequence ending in a childless node loses its whole leaf chain.
        A sequence that prefixes longer ones only loses its terminal flag.
        """
        end, _, _ = self.find_sequence_relatives(root, chars)
        if self._child[end] == NIL:
            leaf, parent = self.find_leaf_chain(root, chars)
            self.collapse_child(parent, self._symbol[leaf])
        else:
            self._terminal[end] = False

    # ------------------------------------------------------------------ #
    #  Teardown                                                           #
    # ------------------------------------------------------------------ #

    def collapse_child(self, parent, symbol):
        """Unlink the ``symbol`` child of ``parent`` and purge its subtree."""
        if parent is None or parent == NIL:
            raise OrphanNodeError("Cannot collapse {!r} without a parent".format(symbol))
        child, previous = self._find_child(parent, symbol)
        if child == NIL:
            raise NoSuchNodeError("Node {} has no child {!r}".format(parent, symbol))
        if not self._subtree_ok(child, include_siblings=False):
            raise CorruptTrieError("Subtree at node {} is corrupt".format(child))

        if previous == NIL:
            self._child[parent] = self._sibling[child]
        else:
            self._sibling[previous] = self._sibling[child]
        self._sibling[child] = NIL
        self.purge(child)

    def purge(self, node):
        """Release ``node``, its sibling chain and all of their descendants."""
        self._check(node)
        if not self.check_consistency(node):
            raise CorruptTrieError("Refusing to purge corrupt subtree at node {}".format(node))
        stack = [node]
        while stack:
            current = stack.pop()
            while current != NIL:
                following = self._sibling[current]
                if self._child[current] != NIL:
                    stack.append(self._child[current])
                self._release(current)
                current = following

    def check_consistency(self, node):
        """
        Check that everything reachable from ``node`` is well formed.

        Walks ``node``, its sibling chain and all descendants. Fails on a
        dangling or released handle, on a node reached twice and on two
        siblings sharing a symbol.
        """
        return self._subtree_ok(node, include_siblings=True)

    def _subtree_ok(self, node, include_siblings):
        if not self._is_live(node):
            return False
        seen = set()
        if include_siblings:
            stack = [node]
        else:
            seen.add(node)
            stack = [self._child[node]] if self._child[node] != NIL else []
        while stack:
            current = stack.pop()
            symbols = set()
            while current != NIL:
                if not self._is_live(current) or current in seen:
                    return False
                if self._symbol[current] in symbols:
                    return False
                seen.add(current)
                symbols.add(self._symbol[current])
                if self._child[current] != NIL:
                    stack.append(self._child[current])
                current = self._sibling[current]
        return True

    # ------------------------------------------------------------------ #
    #  Debugging                                                          #
    # ------------------------------------------------------------------ #

    def dump(self, node=None):
        """
        Render the subtree under ``node`` (the root by default) as text.

        One line per node, children indented below their parent. Terminal
        nodes are marked with '.', weighted nodes with '*'. NUL and newline
        symbols are shown as {0} and {n}.
        """
        if node is None:
            node = self.root
        self._check(node)
        if not self._subtree_ok(node, include_siblings=False):
            raise CorruptTrieError("Refusing to dump corrupt subtree at node {}".format(node))
        lines = []
        stack = [(node, 0)]
        while stack:
            current, level = stack.pop()
            prefix = "    " * max(level - 1, 0) + (" `--" if level > 0 else "")
            lines.append(prefix + self._label(current))
            for child in reversed(list(self.children(current))):
                stack.append((child, level + 1))
        return "\n".join(lines)

    def _label(self, node):
        symbol = self._symbol[node]
        if symbol == "\0":
            return "{0}"
        if symbol == "\n":
            return "{n}"
        return "[{}]{}{}".format(
            symbol,
            "." if self._terminal[node] else " ",
            "*" if self._weight[node] is not None else " ",
        )

import random


class ReplayRandom:
    """
    Random source that replays a fixed list of values in a loop.

    Stands in for ``random.Random`` wherever a run has to be reproducible
    draw by draw.
    """

    def __init__(self, values):
        if not values:
            raise ValueError("ReplayRandom needs at least one value")
        self.values = list(values)
        self._pos = 0

    def random(self):
        value = self.values[self._pos % len(self.values)]
        self._pos += 1
        return value


# ---------------------------------------------------------------------- #
#  Generator                                                              #
# ---------------------------------------------------------------------- #

class Generator:
    """
    Emits characters by walking a trained ContextModel.

    The window holds the last ``context_length`` characters. Each step
    looks the window up, samples a next character from the fractional
    parts of the transition weights, emits it and slides the window. An
    unknown window is replaced by the first ``context_length`` characters
    of ``seed_text`` and that step emits nothing.

    ``random_source`` is anything with a ``random()`` method returning a
    float in [0, 1). By default, ``random.Random`` is seeded from the wall clock.
    """

    def __init__(self, model, seed_text, random_source=None, window=None):
        self.model = model
        self.seed = seed_text[:model.context_length]
        self.window = self.seed if window is None else window
        self.random_source = random_source if random_source is not None else random.Random()
        self.emitted = 0
        self.resets = 0

    def sample_next(self, window):
        """Draw one next character for ``window``; None if the window is unknown."""
        node = self.model.lookup(window)
        if node is None:
            return None
        store = self.model.store
        r = self.random_source.random()
        acc = 0.0
        chosen = None
        for child in store.children(node):
            acc += store.weight(child) % 1.0
            chosen = child
            # A zero accumulator matches immediately.
            if acc == 0 or acc >= r:
                break
        return store.symbol(chosen)

    def step(self):
        """Advance one step. Returns the emitted character, or None after a reset."""
        symbol = self.sample_next(self.window)
        if symbol is None:
            self.window = self.seed
            self.resets += 1
            return None
        self.window = self.window[1:] + symbol
        self.emitted += 1
        return symbol

    def generate(self, steps):
        """Run ``steps`` steps and yield each emitted character."""
        for _ in range(steps):
            symbol = self.step()
            if symbol is not None:
                yield symbol

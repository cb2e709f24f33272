"""Variable-binding environments. An Environment is an immutable mapping of name: value. Extending one never changes
it: bind returns a new Environment that shares every existing binding with the old one, so a Closure holding on to an
Environment will never observe bindings made after it was created.

Environments are stored as a chain of frames, each frame holding a single binding and its parent frame. Lookups walk
the chain from the newest frame, which is what lets a newer binding shadow an older one.
"""

from collections.abc import Mapping


class Environment(Mapping):
    """Persistent name: value mapping. Supports everything collections.abc.Mapping does, plus bind."""

    def __init__(self, bindings=None):
        self._frame = None  # (name, value, parent frame), or None for the empty environment
        if bindings is not None:
            for name, value in dict(bindings).items():
                self._frame = (name, value, self._frame)

    @classmethod
    def _from_frame(cls, frame):
        env = cls()
        env._frame = frame
        return env

    def bind(self, name, value):
        """Returns a new Environment with name bound to value. self is left unmodified."""
        return Environment._from_frame((name, value, self._frame))

    def update(self, bindings):
        """Returns a new Environment with every binding in bindings added. self is left unmodified."""
        env = self
        for name, value in dict(bindings).items():
            env = env.bind(name, value)
        return env

    def __getitem__(self, name):
        frame = self._frame
        while frame is not None:
            bound, value, frame = frame
            if bound == name:
                return value
        raise KeyError(name)

    def __contains__(self, name):
        frame = self._frame
        while frame is not None:
            bound, __, frame = frame
            if bound == name:
                return True
        return False

    def __iter__(self):
        seen = set()
        frame = self._frame
        while frame is not None:
            name, __, frame = frame
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self):
        return sum(1 for __ in self)

    def __repr__(self):
        return f"Environment({{{', '.join(f'{name!r}: {self[name]!r}' for name in self)}}})"

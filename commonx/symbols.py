"""Interned symbols.

A :class:`Symbol` is a named identifier with process-wide uniqueness: two
lookups of the same name always return the same instance, so symbols compare
by identity and hash by name. Symbols are created explicitly through
:meth:`Symbol.of`; :meth:`Symbol.existing` only returns names that were
interned before.
"""

from __future__ import annotations

import threading


class Symbol:
    __slots__ = ("name",)

    _registry: dict[str, "Symbol"] = {}
    _lock = threading.Lock()

    def __init__(self, name: str):
        # Use Symbol.of(); direct construction bypasses the registry.
        self.name = name

    @classmethod
    def of(cls, name: str) -> "Symbol":
        """Return the symbol for *name*, interning it on first use."""
        if not isinstance(name, str):
            raise TypeError(f"symbol name must be a str, got: {name!r}")
        sym = cls._registry.get(name)
        if sym is not None:
            return sym
        with cls._lock:
            sym = cls._registry.get(name)
            if sym is None:
                sym = cls(name)
                cls._registry[name] = sym
            return sym

    @classmethod
    def existing(cls, name: str) -> "Symbol":
        """Return the already-interned symbol for *name*.

        Raises:
            ValueError: if *name* was never interned.
        """
        try:
            return cls._registry[name]
        except KeyError:
            raise ValueError(f"no existing symbol named {name!r}") from None

    @classmethod
    def is_interned(cls, name: str) -> bool:
        return name in cls._registry

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return hash(("Symbol", self.name))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f":{self.name}"

    def __reduce__(self):
        return (Symbol.of, (self.name,))


def sym(name: str) -> Symbol:
    """Shorthand for :meth:`Symbol.of`."""
    return Symbol.of(name)

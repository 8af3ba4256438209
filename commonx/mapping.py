"""Mapping helpers that treat symbol keys and their string names alike.

Lookups by a :class:`~commonx.symbols.Symbol` fall back to the symbol's
string name, so ``get({"a": 1}, sym("a"))`` finds ``1``. None of these
functions mutate their arguments.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Hashable, Iterable, Union

from commonx.enumerable import reduce_while
from commonx.result import SKIP, Err, Ok
from commonx.symbols import Symbol

Outcome = Union[Ok, Err]

_MISSING = object()


def merge(
    map1: Mapping,
    map2: Mapping,
    fun: Callable[[Hashable, Any, Any], Outcome],
) -> Outcome:
    """Merge *map2* into *map1*, resolving duplicate keys through *fun*.

    *fun* is called as ``fun(key, value1, value2)`` and returns ``Ok(value)``
    for the merged value or ``Err(reason)`` to abort the merge.

    >>> merge({"a": 1, "b": 2}, {"a": 3, "d": 4}, lambda k, v1, v2: Ok(v1 + v2))
    Ok(value={'a': 4, 'b': 2, 'd': 4})
    """
    # Fold the smaller mapping into a copy of the larger one.
    if len(map1) > len(map2):
        def fold_into_map1(item, acc):
            key, val2 = item
            if key in acc:
                outcome = fun(key, acc[key], val2)
                if isinstance(outcome, Err):
                    return outcome
                if not isinstance(outcome, Ok):
                    raise TypeError(f"expected Ok or Err, got: {outcome!r}")
                acc[key] = outcome.value
            else:
                acc[key] = val2
            return Ok(acc)

        return reduce_while(map2.items(), dict(map1), fold_into_map1)

    def fold_into_map2(item, acc):
        key, val1 = item
        if key in acc:
            outcome = fun(key, val1, acc[key])
            if isinstance(outcome, Err):
                return outcome
            if not isinstance(outcome, Ok):
                raise TypeError(f"expected Ok or Err, got: {outcome!r}")
            acc[key] = outcome.value
        else:
            acc[key] = val1
        return Ok(acc)

    result = reduce_while(map1.items(), dict(map2), fold_into_map2)
    if isinstance(result, Ok):
        # Keep map1's keys first, as a plain merge would.
        merged = result.value
        ordered = {key: merged[key] for key in map1}
        ordered.update((key, merged[key]) for key in map2 if key not in ordered)
        return Ok(ordered)
    return result


def delete(mapping: Mapping, key: Hashable) -> dict:
    """Return a copy of *mapping* without *key* and without ``str(key)``."""
    names = {key, str(key)}
    return {k: v for k, v in mapping.items() if k not in names}


def get(mapping: Mapping, key: Hashable, default: Any = None) -> Any:
    if key in mapping:
        return mapping[key]
    return mapping.get(str(key), default)


def fetch(mapping: Mapping, key: Hashable) -> Outcome:
    """``Ok(value)`` for *key* (or its string name), ``Err(key)`` if absent."""
    value = mapping.get(key, _MISSING)
    if value is _MISSING:
        value = mapping.get(str(key), _MISSING)
    if value is _MISSING:
        return Err(key)
    return Ok(value)


def new(iterable: Iterable[Any], transform: Callable[[Any], Any]) -> Outcome:
    """Build a dict from *iterable* via *transform*.

    *transform* returns ``Ok((key, value))`` to add an entry, ``SKIP`` to drop
    the element, or ``Err(reason)`` to abort. Later duplicate keys win.
    """
    result: dict = {}
    for element in iterable:
        outcome = transform(element)
        if outcome is SKIP:
            continue
        if not isinstance(outcome, Ok):
            return outcome
        key, value = outcome.value
        result[key] = value
    return Ok(result)


def update_if_exists(mapping: Mapping, key: Hashable, fun: Callable[[Any], Any]) -> dict:
    """Apply *fun* to the value under *key*, if present.

    Raises:
        TypeError: if *mapping* is not a mapping.
    """
    if not isinstance(mapping, Mapping):
        raise TypeError(f"expected a mapping, got: {mapping!r}")
    updated = dict(mapping)
    if key in updated:
        updated[key] = fun(updated[key])
    return updated


def atomize(mapping: Any) -> Any:
    """Recursively turn string keys into interned symbols."""
    return _transform_keys(mapping, lambda k: Symbol.of(k) if isinstance(k, str) else k)


def atomize_strict(mapping: Any) -> Any:
    """Like :func:`atomize`, but only for names that are already symbols.

    Raises:
        ValueError: if a key names a symbol that was never interned.
    """
    return _transform_keys(
        mapping, lambda k: Symbol.existing(k) if isinstance(k, str) else k
    )


def stringify(mapping: Any) -> Any:
    """Recursively turn keys into strings."""
    return _transform_keys(mapping, lambda k: k if isinstance(k, str) else str(k))


def _transform_keys(value: Any, transformer: Callable[[Hashable], Hashable]) -> Any:
    if isinstance(value, Mapping):
        return {
            transformer(k): _transform_keys(v, transformer) for k, v in value.items()
        }
    if isinstance(value, list):
        return [_transform_keys(item, transformer) for item in value]
    return value

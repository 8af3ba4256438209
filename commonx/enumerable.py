"""Reductions over iterables that can halt early on an error."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Union

from commonx.result import Err, Ok

Outcome = Union[Ok, Err]


def reduce_while(
    iterable: Iterable[Any],
    acc: Any,
    fun: Callable[[Any, Any], Outcome],
) -> Outcome:
    """Reduce *iterable* until *fun* returns an :class:`Err`.

    *fun* is called as ``fun(element, acc)`` and must return ``Ok(new_acc)``
    to continue or ``Err(value)`` to stop. The iterable is consumed lazily,
    so nothing past the halting element is pulled.

    >>> reduce_while(range(1, 101), 0, lambda x, acc: Ok(acc + x) if x < 3 else Err(acc))
    Err(reason=3)
    """
    for element in iterable:
        outcome = fun(element, acc)
        if isinstance(outcome, Err):
            return outcome
        if not isinstance(outcome, Ok):
            raise TypeError(f"expected Ok or Err, got: {outcome!r}")
        acc = outcome.value
    return Ok(acc)


def try_map(iterable: Iterable[Any], fun: Callable[[Any], Outcome]) -> Outcome:
    """Map *fun* over *iterable*, stopping at the first :class:`Err`.

    For mappings, pass ``m.items()`` so *fun* receives key-value pairs.
    """
    collected: list[Any] = []

    def step(element: Any, acc: list[Any]) -> Outcome:
        outcome = fun(element)
        if isinstance(outcome, Ok):
            acc.append(outcome.value)
            return Ok(acc)
        return outcome

    result = reduce_while(iterable, collected, step)
    if isinstance(result, Err):
        return result
    return Ok(result.value)

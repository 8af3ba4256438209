"""Identifier case conversion: snake_case, PascalCase and camelCase.

These functions are meant for language identifiers and tokens. Only ASCII
letters are case-mapped; other characters pass through unchanged. Each
function accepts a ``str`` or a :class:`~commonx.symbols.Symbol` and returns
the same kind it was given.
"""

from __future__ import annotations

import re
from typing import Callable, Union

from commonx.symbols import Symbol

Identifier = Union[str, Symbol]

_IP_WORD = re.compile(r"(^|_)ip(_|$)")


def _is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def _lower(ch: str) -> str:
    return chr(ord(ch) + 32) if _is_upper(ch) else ch


def _upper(ch: str) -> str:
    return chr(ord(ch) - 32) if _is_lower(ch) else ch


def _keep_kind(value: Identifier, convert: Callable[[str], str]) -> Identifier:
    if isinstance(value, Symbol):
        return Symbol.of(convert(value.name))
    if not isinstance(value, str):
        raise TypeError(f"expected a str or Symbol, got: {value!r}")
    return convert(value)


# ── snake_case ───────────────────────────────────────────────


def _snakize(text: str) -> str:
    if not text:
        return ""
    out = [_lower(text[0])]
    prev = text[0]
    i = 1
    n = len(text)
    while i < n:
        h = text[i]
        if (
            _is_upper(h)
            and i + 1 < n
            and not _is_upper(text[i + 1])
            and text[i + 1] not in "._"
        ):
            # Start of a capitalised word: "Bar" in "FooBar".
            t = text[i + 1]
            out.append("_" + _lower(h) + t)
            prev = t
            i += 2
        elif _is_upper(h) and not _is_upper(prev) and prev != "_":
            out.append("_" + _lower(h))
            prev = h
            i += 1
        elif h == ".":
            out.append("/" + _snakize(text[i + 1:]))
            break
        else:
            out.append(_lower(h))
            prev = h
            i += 1
    return "".join(out)


def snakize(value: Identifier) -> Identifier:
    """Convert *value* to snake_case; dots become path separators.

    >>> snakize("FooBar")
    'foo_bar'
    >>> snakize("Foo.Bar")
    'foo/bar'
    >>> snakize("SAPExample")
    'sap_example'

    Acronym boundaries are not recoverable, so ``pascalize(snakize(x))`` is
    not always ``x``.
    """
    return _keep_kind(value, _snakize)


def underscore(value: Identifier) -> Identifier:
    """Alias for :func:`snakize`."""
    return snakize(value)


# ── PascalCase ───────────────────────────────────────────────


def _pascalize(text: str) -> str:
    text = text.lstrip("_")
    if not text:
        return ""
    out = [_upper(text[0])]
    i = 1
    n = len(text)
    while i < n:
        h = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if h == "_" and nxt == "_":
            i += 1
        elif h == "_" and _is_lower(nxt):
            out.append(_upper(nxt))
            i += 2
        elif h == "_" and nxt.isdigit() and nxt.isascii():
            out.append(nxt)
            i += 2
        elif h == "_" and not nxt:
            i += 1
        elif h == "/":
            out.append("." + _pascalize(text[i + 1:]))
            break
        else:
            out.append(h)
            i += 1
    return "".join(out)


def pascalize(value: Identifier) -> Identifier:
    """Convert *value* to PascalCase.

    Existing uppercase characters are left alone so acronyms survive:

    >>> pascalize("foo_bar")
    'FooBar'
    >>> pascalize("API_SPEC")
    'API_SPEC'
    >>> pascalize("foo/bar")
    'Foo.Bar'
    """
    return _keep_kind(value, _pascalize)


# ── camelCase ────────────────────────────────────────────────


def _camelize(text: str) -> str:
    text = _IP_WORD.sub(r"\1IP\2", text)
    if not text:
        return ""
    out = [text[0]]
    i = 1
    n = len(text)
    while i < n:
        h = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if h == "_" and nxt == "_":
            i += 1
        elif h == "_" and _is_lower(nxt):
            out.append(_upper(nxt))
            i += 2
        elif h == "_":
            i += 1
        else:
            out.append(h)
            i += 1
    return "".join(out)


def camelize(value: Identifier) -> Identifier:
    """Convert *value* to camelCase, spelling the word ``ip`` as ``IP``.

    >>> camelize("my_string")
    'myString'
    >>> camelize("my_ip_address")
    'myIPAddress'
    """
    return _keep_kind(value, _camelize)

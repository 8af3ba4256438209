"""Module loading checks."""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys

logger = logging.getLogger(__name__)


def ensure_loaded(name: str) -> bool:
    """Return True if module *name* is loaded or could be imported now."""
    if name in sys.modules:
        return True
    try:
        importlib.import_module(name)
    except ImportError as e:
        logger.debug("cannot load %s: %s", name, e)
        return False
    return True


def ensure_compiled(name: str) -> bool:
    """Return True if module *name* compiles, without executing it.

    The module's loader is asked for its code object; already-imported
    modules count as compiled.
    """
    if name in sys.modules:
        return True
    try:
        spec = importlib.util.find_spec(name)
    except (ImportError, ValueError) as e:
        logger.debug("cannot locate %s: %s", name, e)
        return False
    if spec is None or spec.loader is None:
        return False
    get_code = getattr(spec.loader, "get_code", None)
    if get_code is None:
        # Builtin and frozen modules have no separate compile step.
        return spec.origin in ("built-in", "frozen")
    try:
        return get_code(name) is not None
    except (ImportError, SyntaxError) as e:
        logger.debug("cannot compile %s: %s", name, e)
        return False

"""commonx: extensions to common Python building blocks."""

from commonx.result import SKIP, Err, Ok
from commonx.symbols import Symbol, sym

__version__ = "0.1.0"

__all__ = ["Err", "Ok", "SKIP", "Symbol", "sym", "__version__"]

"""Text helpers."""

from commonx.text.case import camelize, pascalize, snakize, underscore

__all__ = ["camelize", "pascalize", "snakize", "underscore"]

from __future__ import annotations


class ParseError(ValueError):
    """A decimal string could not be turned into a BigCounter."""


class StorageError(Exception):
    """The durable store could not be read or written, or held a bad blob."""

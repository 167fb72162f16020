"""
Exceptions for multiset hashing.
"""


class MultisetHashError(Exception):
    """Base class for errors raised by msethash."""


class ValidationError(MultisetHashError, ValueError):
    """An externally supplied value is not a valid member of the group."""

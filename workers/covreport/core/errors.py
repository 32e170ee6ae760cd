"""
Errors raised while decoding an instrumentation mapping.

All of them are ``ValueError`` subclasses so callers that only care about
"bad input" can catch the builtin.
"""
from __future__ import annotations


class MappingFormatError(ValueError):
    """The mapping text does not follow the mapping-file format."""


class VlqDecodeError(MappingFormatError):
    """A base64 VLQ field is truncated or contains a foreign character."""


class MappingIndexError(MappingFormatError, IndexError):
    """A decoded index does not address an entry of its header list."""

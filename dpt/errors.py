"""Exception types raised by the DPT codec layer.

  DPTNotFoundError  unknown main number, sub-type or property data type
  DPTFormatError    unparsable text or a value outside the declared domain
  DPTRangeError     value outside the DPT bounds (a kind of format error)
  DPTUsageError     caller bug: bad offset, bad argument to a typed setter

Non-fatal conditions (reserved bits set on decode) are logged as warnings,
they never raise.
"""

from typing import Any, Optional


class DPTError(Exception):
    """Base class for all codec errors."""


class DPTNotFoundError(DPTError, LookupError):
    """No translator or DPT registered for the requested identifier."""


class DPTFormatError(DPTError, ValueError):
    """Malformed value text or value not representable by the DPT."""

    def __init__(self, message: str, item: Optional[str] = None):
        super().__init__(message)
        self.item = "" if item is None else item

    def __str__(self) -> str:
        msg = super().__str__()
        if self.item and self.item not in msg:
            return f"{msg}: {self.item}"
        return msg


class DPTRangeError(DPTFormatError):
    """Value outside the lower/upper bound of a DPT."""

    def __init__(self, message: str, value: Any, lower: str, upper: str):
        super().__init__(message, str(value))
        self.value = value
        self.lower = lower
        self.upper = upper


class DPTUsageError(DPTError, ValueError):
    """Programming error, e.g. an illegal offset or step code argument."""

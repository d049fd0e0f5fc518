"""Exception classes for internable.

Provides standardized exceptions for precondition failures. Each specific
error also derives from the matching builtin exception, so callers that
catch ``IndexError`` or ``ValueError`` keep working.
"""

from __future__ import annotations


class InternableError(Exception):
    """Base exception for all internable errors.
    
    Subclass this for specific error categories.
    """

    pass


class InvalidArgumentError(InternableError, ValueError):
    """A required string argument was None or not a string.
    
    Raised by wrap(), append(), startswith() and friends.
    """

    def __init__(self, argument: str, message: str | None = None) -> None:
        """Initialize invalid argument error.
        
        Args:
            argument: Name of the offending parameter (e.g., "value")
            message: Optional description (defaults to "must be a str")
        """
        self.argument = argument
        super().__init__(f"Argument '{argument}': {message or 'must be a str'}")


class IndexOutOfRangeError(InternableError, IndexError):
    """An index or range fell outside the bounds of a string.
    
    Raised by indexed access and by ranged append.
    """

    def __init__(self, index: int, length: int, message: str | None = None) -> None:
        """Initialize index error.
        
        Args:
            index: The offending index (or range start)
            length: Length of the string being addressed
            message: Optional description overriding the default
        """
        self.index = index
        self.length = length
        super().__init__(message or f"Index {index} out of range for length {length}")


class InvalidStateError(InternableError, RuntimeError):
    """An operation was invoked in a state that does not support it.
    
    Raised by clear() on a value that still wraps a single string.
    """

    pass

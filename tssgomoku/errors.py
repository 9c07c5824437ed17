"""Exception hierarchy for tssgomoku.

Every error raised here signals a programming mistake: a malformed pattern
definition, an illegal board mutation or an invalid argument. Search results
never use exceptions; "nothing found" is an empty collection.
"""

__all__ = [
    "TSSError",
    "PatternDefinitionError",
    "IllegalMoveError",
    "InvalidArgumentError",
]


class TSSError(Exception):
    """Base exception for all tssgomoku errors."""


class PatternDefinitionError(TSSError, ValueError):
    """A threat pattern violates one of its construction invariants."""


class IllegalMoveError(TSSError, ValueError):
    """Placing onto a non-empty point, or clearing a point of the wrong color."""

    def __init__(self, message: str, point=None, found=None):
        super().__init__(message)
        self.point = point
        self.found = found


class InvalidArgumentError(TSSError, ValueError):
    """Invalid color, direction or increment passed to a board function."""

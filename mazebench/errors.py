"""Exception types raised by mazebench.

Every error subclasses ``ValueError`` as well so callers that only guard on
the builtin keep working.
"""


class MazebenchError(Exception):
    """Base class for mazebench errors."""


class InvalidDimensionsError(MazebenchError, ValueError):
    """Raised when a maze is requested with a width or height below 1."""


class InvalidDirectionError(MazebenchError, ValueError):
    """Raised when a move is requested with an unknown direction string."""


class InvalidGridError(MazebenchError, ValueError):
    """Raised when a serialized grid is ragged or uses unknown glyphs."""

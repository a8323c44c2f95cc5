"""Exceptions raised by the autotile synthesis core."""

from typing import Optional


class AutotileError(Exception):
    """Base class for autotile synthesis failures."""


class GeometryInvariantViolation(AutotileError):
    """
    A static tile recipe produced impossible geometry.

    Raised when a recipe's endpoints collapse to fewer than two distinct
    points or a probe point sits exactly on its boundary. This points at a
    defect in the recipe table, not at bad user input.
    """

    def __init__(self, message: str, code: Optional[int] = None):
        self.code = code
        if code is not None:
            message = f"recipe {code}: {message}"
        super().__init__(message)

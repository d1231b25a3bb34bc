"""
Exceptions raised by the duplication engine.
"""


class DuplicationError(Exception):
    """Base class for duplication analysis failures."""


class EmptyInputError(DuplicationError, ValueError):
    """Raised when detection is requested without any parse results."""

    def __init__(self, message: str = "no parse results provided for duplication analysis"):
        super().__init__(message)

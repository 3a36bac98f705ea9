"""Exceptions raised by the revsurf tessellation pipeline."""


class RevsurfError(Exception):
    """Base class for revsurf errors."""


class InvalidParameterError(RevsurfError, ValueError):
    """Exception raised when a parameter set violates its invariants.

    Raised before any sampling begins, so no partial mesh is produced.
    """

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class DegenerateNormalError(RevsurfError, ArithmeticError):
    """Exception raised when a vertex accumulates a zero-length normal.

    Recoverable: the caller may substitute a default normal.
    """

    def __init__(self, message, index=None):
        super().__init__(message)
        self.index = index

"""
Error kinds raised by the property and process engine.

Domain and infeasibility errors subclass ValueError so the API layer can keep
treating them as bad input (HTTP 422). Solver failures subclass ArithmeticError
so numerical trouble is never mistaken for bad input.
"""


class PsychrometricError(Exception):
    """Base class for every error raised by psychrocalc."""


class ArgumentDomainError(PsychrometricError, ValueError):
    """Input lies outside the physical validity range of a correlation."""


class PhysicallyInfeasibleProcessError(PsychrometricError, ValueError):
    """Requested process target contradicts the direction of the process."""


class SolverNotConvergedError(PsychrometricError, ArithmeticError):
    """Root solver exhausted its iteration budget or met a non-finite value."""


class InvalidBracketError(SolverNotConvergedError):
    """Supplied or expanded bracket does not contain a sign change."""


def require(condition: bool, message: str) -> None:
    """Raise ArgumentDomainError with ``message`` unless ``condition`` holds."""
    if not condition:
        raise ArgumentDomainError(message)

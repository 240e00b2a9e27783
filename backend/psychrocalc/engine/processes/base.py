"""
Abstract base class for process solvers used by the API dispatch table.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from psychrocalc.models.process import ProcessResult


class ProcessSolver(ABC):
    """Base class for all process solvers."""

    @abstractmethod
    def solve(self, process_input: BaseModel) -> ProcessResult:
        """Solve the process and return the result."""
        ...

"""
Bracketed one-dimensional root finder (Brent's method via scipy.optimize.brentq).

A solver instance keeps the state of the solve it is running: the current
bracket, the function values at its ends and the iteration/evaluation
counters. The state is reset at the start of every call and an instance
refuses to be entered again while a solve is in progress, so one instance
can never serve two solves at the same time. Property functions build a
fresh instance per call unless one is passed in explicitly.
"""

import logging
import math
from contextlib import contextmanager
from typing import Callable, Iterator

from scipy.optimize import brentq

from psychrocalc.config import (
    SOLVER_TOLERANCE,
    SOLVER_MAX_ITERATIONS,
    SOLVER_EXPANSION_FACTOR,
    SOLVER_MAX_EXPANSIONS,
)
from psychrocalc.exceptions import InvalidBracketError, SolverNotConvergedError

logger = logging.getLogger(__name__)

Objective = Callable[[float], float]


class BrentSolver:
    """Brent root finder with optional multiplier-based bracket expansion."""

    def __init__(
        self,
        name: str = "BrentSolver",
        tolerance: float = SOLVER_TOLERANCE,
        max_iterations: int = SOLVER_MAX_ITERATIONS,
        expansion_factor: float = SOLVER_EXPANSION_FACTOR,
        max_expansions: int = SOLVER_MAX_EXPANSIONS,
    ):
        if tolerance <= 0.0:
            raise ValueError("tolerance must be positive")
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if expansion_factor <= 0.0:
            raise ValueError("expansion_factor must be positive")

        self.name = name
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.expansion_factor = expansion_factor
        self.max_expansions = max_expansions
        self._active = False
        self.reset()

    def reset(self) -> None:
        """Clear the per-call state."""
        self.a = math.nan
        self.b = math.nan
        self.fa = math.nan
        self.fb = math.nan
        self.iterations = 0
        self.evaluations = 0

    def find_root(self, func: Objective, a: float, b: float) -> float:
        """
        Find a root of ``func`` inside the bracket ``[a, b]``.

        Raises InvalidBracketError if f(a) and f(b) share a sign and
        SolverNotConvergedError if the iteration budget runs out.
        """
        with self._session():
            fa = self._evaluate(func, a)
            fb = self._evaluate(func, b)
            return self._brent(func, a, b, fa, fb)

    def find_root_from_estimate(
        self,
        func: Objective,
        x1: float,
        x2: float,
        lower_bound: float = -math.inf,
        upper_bound: float = math.inf,
    ) -> float:
        """
        Find a root starting from two estimated points.

        The pair is widened by ``expansion_factor`` times its width, one end
        at a time and never past the bounds, until it brackets a sign change.
        """
        with self._session():
            a, b, fa, fb = self._expand_bracket(func, x1, x2, lower_bound, upper_bound)
            return self._brent(func, a, b, fa, fb)

    @contextmanager
    def _session(self) -> Iterator[None]:
        if self._active:
            raise RuntimeError(f"{self.name} is already running a solve")
        self._active = True
        self.reset()
        try:
            yield
        finally:
            self._active = False

    def _evaluate(self, func: Objective, x: float) -> float:
        value = float(func(x))
        self.evaluations += 1
        if not math.isfinite(value):
            raise SolverNotConvergedError(
                f"{self.name}: objective returned {value} at x={x}"
            )
        return value

    def _expand_bracket(self, func, x1, x2, lower, upper):
        lo, hi = min(x1, x2), max(x1, x2)
        lo = min(max(lo, lower), upper)
        hi = min(max(hi, lower), upper)
        if lo == hi:
            raise InvalidBracketError(
                f"{self.name}: degenerate starting bracket at {lo}"
            )

        f_lo = self._evaluate(func, lo)
        f_hi = self._evaluate(func, hi)
        expansions = 0
        while f_lo * f_hi > 0.0:
            can_lower = lo > lower
            can_raise = hi < upper
            if expansions >= self.max_expansions or not (can_lower or can_raise):
                self.a, self.b, self.fa, self.fb = lo, hi, f_lo, f_hi
                raise InvalidBracketError(
                    f"{self.name}: no sign change found in [{lo}, {hi}] "
                    f"after {expansions} expansions"
                )
            width = hi - lo
            if can_lower and (abs(f_lo) < abs(f_hi) or not can_raise):
                lo = max(lower, lo - self.expansion_factor * width)
                f_lo = self._evaluate(func, lo)
            else:
                hi = min(upper, hi + self.expansion_factor * width)
                f_hi = self._evaluate(func, hi)
            expansions += 1

        return lo, hi, f_lo, f_hi

    def _brent(self, func, a, b, fa, fb) -> float:
        if b < a:
            a, b, fa, fb = b, a, fb, fa
        self.a, self.b, self.fa, self.fb = a, b, fa, fb
        if fa == 0.0:
            return a
        if fb == 0.0:
            return b
        if fa * fb > 0.0:
            raise InvalidBracketError(
                f"{self.name}: f({a})={fa} and f({b})={fb} do not bracket a root"
            )

        values = {a: fa, b: fb}

        def objective(x):
            if x not in values:
                values[x] = self._evaluate(func, x)
            return values[x]

        root, result = brentq(
            objective, a, b,
            xtol=self.tolerance,
            maxiter=self.max_iterations,
            full_output=True,
            disp=False,
        )
        self.iterations = result.iterations
        self.b, self.fb = root, objective(root)

        # Nearest evaluated point on the other side of the root closes the bracket
        opposite = [(x, f) for x, f in values.items() if f * self.fb < 0.0]
        if opposite:
            self.a, self.fa = min(opposite, key=lambda item: abs(item[0] - root))
        else:
            self.a, self.fa = root, self.fb

        if not result.converged:
            raise SolverNotConvergedError(
                f"{self.name}: no convergence within {self.max_iterations} iterations, "
                f"last bracket [{self.a}, {self.b}]"
            )
        logger.debug(
            "%s converged to %.12g after %d iterations (%d evaluations)",
            self.name, root, self.iterations, self.evaluations,
        )
        return root

"""
Newton-Raphson root finding shared by every inverse psychrometric conversion.

Iterates x_{n+1} = x_n - f(x_n) / f'(x_n) until |x_{n+1} - x_n| <= tolerance.
Running out of iterations, a zero derivative or a non-finite intermediate
value is reported as ConvergenceFailure; a non-converged iterate is never
returned.
"""

import logging
import math
from typing import Callable

from scipy.optimize import newton

from psychro.config import MAX_ITER_COUNT
from psychro.errors import ConvergenceFailure

logger = logging.getLogger(__name__)


class _NonFiniteValue(Exception):
    def __init__(self, x: float, what: str):
        self.x = x
        self.what = what


def _finite(fn: Callable[[float], float], what: str) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        value = fn(x)
        if not math.isfinite(value):
            raise _NonFiniteValue(float(x), what)
        return value

    return wrapped


def find_root(
    func: Callable[[float], float],
    fprime: Callable[[float], float],
    x0: float,
    tolerance: float,
    quantity: str,
    max_iter: int = MAX_ITER_COUNT,
) -> float:
    """
    Solve func(x) = 0 by Newton-Raphson iteration.

    Args:
        func: Objective function
        fprime: Analytic derivative of func
        x0: Initial guess
        tolerance: Absolute step tolerance
        quantity: Name of the solved quantity, used in error messages
        max_iter: Iteration budget

    Returns:
        The root

    Raises:
        ConvergenceFailure: If the iteration does not converge
    """
    try:
        root, info = newton(
            _finite(func, "objective"),
            x0,
            fprime=_finite(fprime, "derivative"),
            tol=tolerance,
            rtol=0.0,
            maxiter=max_iter,
            full_output=True,
            disp=True,
        )
    except _NonFiniteValue as e:
        logger.warning("Non-finite %s while solving %s at %s", e.what, quantity, e.x)
        raise ConvergenceFailure(quantity, e.x, f"non-finite {e.what}") from None
    except RuntimeError as e:
        logger.warning("Newton-Raphson failed for %s from x0=%s: %s", quantity, x0, e)
        raise ConvergenceFailure(quantity, x0, str(e)) from e

    root = float(root)
    if not math.isfinite(root):
        raise ConvergenceFailure(quantity, root, "non-finite root")

    logger.debug(
        "Solved %s = %.8g in %d iterations (x0=%.8g)",
        quantity, root, info.iterations, x0,
    )
    return root

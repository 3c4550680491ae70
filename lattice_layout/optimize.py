"""Thin wrapper around :func:`scipy.optimize.minimize`."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np
from scipy.optimize import minimize as _scipy_minimize

from .model import MinimizeOptions, MinimizeResult

logger = logging.getLogger(__name__)

Objective = Callable[[np.ndarray], float]
PartialDerivative = Callable[[int, np.ndarray], float]

# methods of scipy.optimize.minimize that make use of ``jac``
GRADIENT_METHODS = frozenset(
    {
        "cg",
        "bfgs",
        "newton-cg",
        "l-bfgs-b",
        "tnc",
        "slsqp",
        "dogleg",
        "trust-ncg",
        "trust-krylov",
        "trust-exact",
        "trust-constr",
    }
)


def accepts_gradient(method: str) -> bool:
    return method.lower() in GRADIENT_METHODS


def minimize(
    objective: Objective,
    initial: Sequence[float],
    *,
    partial_derivative: Optional[PartialDerivative] = None,
    options: Optional[MinimizeOptions] = None,
) -> MinimizeResult:
    """Minimise ``objective`` starting at ``initial``.

    ``partial_derivative(index, x)`` is turned into a gradient for methods
    that accept one and ignored otherwise.  Non-convergence is reported in
    the result but not raised; the best point found is always returned.
    """

    options = options or MinimizeOptions()
    x0 = np.asarray(initial, dtype=float)
    if x0.size == 0:
        value = float(objective(x0))
        logger.debug("minimize: empty initial vector, nothing to optimise")
        return MinimizeResult(x=[], value=value, success=True, iterations=0, message="no variables")

    jac = None
    if partial_derivative is not None and options.use_forces and accepts_gradient(options.method):

        def jac(vec: np.ndarray) -> np.ndarray:
            return np.array([partial_derivative(i, vec) for i in range(vec.size)], dtype=float)

    solver_options = {}
    if options.max_iterations is not None:
        solver_options["maxiter"] = int(options.max_iterations)

    logger.info(
        "Minimising %d variable(s) with method=%s gradient=%s",
        x0.size,
        options.method,
        jac is not None,
    )
    result = _scipy_minimize(
        objective,
        x0,
        method=options.method,
        jac=jac,
        tol=options.tol,
        options=solver_options,
    )
    value = float(result.fun)
    x = [float(c) for c in np.ravel(result.x)]
    iterations = int(getattr(result, "nit", 0) or 0)
    message = str(getattr(result, "message", ""))
    logger.info(
        "Minimiser finished success=%s value=%.6g iterations=%d",
        bool(result.success),
        value,
        iterations,
    )
    if not result.success:
        logger.warning("Minimiser did not converge: %s", message)
    return MinimizeResult(x=x, value=value, success=bool(result.success), iterations=iterations, message=message)


__all__ = ["GRADIENT_METHODS", "Objective", "PartialDerivative", "accepts_gradient", "minimize"]

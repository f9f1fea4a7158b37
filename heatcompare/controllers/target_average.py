"""
Target-average setpoint search.

Finds an internal comfort setpoint S such that a simulated day averages the
target temperature A. Off or setback periods drag the average down, so the
setpoint is only ever raised: S stays within [A, S_ceiling].

Two methods are provided.

fixed_point (default)
    Damped fixed-point iteration, tuned empirically for typical houses:

        S_0     = A
        S_{k+1} = clamp(S_k + gain * (A - avg(S_k)), A, S_ceiling)

    stopping once |A - avg| < tol or after ``max_iter`` adjustments. The last
    result is returned either way.

brentq
    Bracketed root search on avg(S) - A over [A, S_ceiling] using Brent's
    method, with the same tolerance and iteration cap. Falls back to the
    nearest bound when the target lies outside the bracket.

The search is decoupled from the engine: it takes ``run(setpoint)``
returning any object with an ``avg_temp`` attribute.
"""

import logging
from dataclasses import is_dataclass, replace

from scipy.optimize import brentq

from heatcompare.utils.parameters import (
    SETPOINT_CEILING, SOLVER_GAIN, SOLVER_MAX_ITER, SOLVER_TOLERANCE
)

logger = logging.getLogger(__name__)

METHODS = ('fixed_point', 'brentq')


def clamp_setpoint(setpoint, target, ceiling=SETPOINT_CEILING):
    """Keep the setpoint between the target average and the ceiling."""
    return max(min(setpoint, ceiling), target)


def _with_iterations(result, iterations):
    if is_dataclass(result) and hasattr(result, 'solver_iterations'):
        return replace(result, solver_iterations=iterations)
    return result


def solve_fixed_point(run, target, gain=SOLVER_GAIN, tol=SOLVER_TOLERANCE,
                      max_iter=SOLVER_MAX_ITER, ceiling=SETPOINT_CEILING):
    """
    Damped fixed-point search for the setpoint.

    Parameters
    ----------
    run : callable(setpoint) -> result
        Simulates a day at the given setpoint.
    target : float
        Desired daily average temperature.
    gain : float
        Setpoint change per deg C of average error.
    tol : float
        Accepted |target - avg| (deg C).
    max_iter : int
        Maximum number of setpoint adjustments.
    ceiling : float
        Upper bound of the setpoint.

    Returns
    -------
    result
        The last simulated result.
    """
    setpoint = target
    result = run(setpoint)
    iterations = 0

    while iterations < max_iter:
        diff = target - result.avg_temp
        if abs(diff) < tol:
            break
        setpoint = clamp_setpoint(setpoint + diff * gain, target, ceiling)
        result = run(setpoint)
        iterations += 1
        logger.debug("iteration %d: setpoint %.3f -> avg %.3f",
                     iterations, setpoint, result.avg_temp)

    if abs(target - result.avg_temp) >= tol:
        logger.debug("no convergence after %d iterations: avg %.3f, target %.3f",
                     iterations, result.avg_temp, target)
    return _with_iterations(result, iterations)


def solve_brentq(run, target, tol=SOLVER_TOLERANCE, max_iter=SOLVER_MAX_ITER,
                 ceiling=SETPOINT_CEILING):
    """
    Brent's method search for the setpoint, bracketed by [target, ceiling].

    Parameters are as for ``solve_fixed_point``. Simulations are cached per
    setpoint so the returned result is never recomputed.
    """
    cache = {}

    def evaluate(setpoint):
        if setpoint not in cache:
            cache[setpoint] = run(setpoint)
        return cache[setpoint]

    def residual(setpoint):
        return evaluate(setpoint).avg_temp - target

    low = residual(target)
    if abs(low) < tol or low > 0:
        return _with_iterations(evaluate(target), 0)

    high = residual(ceiling)
    if high <= 0:
        logger.debug("target %.2f unreachable: avg %.3f at ceiling %.1f",
                     target, high + target, ceiling)
        return _with_iterations(evaluate(ceiling), 1)

    root, info = brentq(residual, target, ceiling, xtol=tol / 10,
                        maxiter=max_iter, full_output=True, disp=False)
    if not info.converged:
        logger.debug("brentq stopped after %d iterations: %s",
                     info.iterations, info.flag)
    return _with_iterations(evaluate(root), info.iterations)


def solve_target_average(run, target, method='fixed_point', **kwargs):
    """
    Dispatch to a setpoint search method.

    Raises
    ------
    ValueError
        If ``method`` is not one of ``METHODS``.
    """
    if method == 'fixed_point':
        return solve_fixed_point(run, target, **kwargs)
    if method == 'brentq':
        return solve_brentq(run, target, **kwargs)
    raise ValueError(f"method must be one of {METHODS}, got {method!r}")

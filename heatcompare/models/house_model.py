"""
Single-zone heat balance of a dwelling.

    C * dT/dt = 1000 * P(t) - HLC * (T - T_out(t))

with C the thermal capacity (J/K), HLC the heat loss coefficient (W/K) and
P the delivered heating power (kW). The loss term is negative when it is
warmer outside, i.e. a passive gain.

The simulation engine advances this with explicit Euler steps of fixed
length (``thermal_step``). ``simulate_continuous`` solves the same balance
with an adaptive integrator and serves as a reference for the discrete
scheme.
"""

import numpy as np
from scipy.integrate import solve_ivp

from heatcompare.utils.parameters import STEP_MINUTES


def thermal_rhs(t, T, hlc, capacity, power_kw, T_out):
    """Right-hand side dT/dt (K/s) for constant power and outdoor temperature."""
    return [(power_kw * 1000.0 - hlc * (T[0] - T_out)) / capacity]


def thermal_step(T, T_out, power_kw, hlc, capacity, seconds):
    """
    Advance indoor temperature by one explicit step.

    Parameters
    ----------
    T : float
        Indoor temperature at the start of the step (deg C).
    T_out : float
        Outdoor temperature (deg C).
    power_kw : float
        Delivered heating power, held over the step (kW).
    hlc : float
        Heat loss coefficient (W/K).
    capacity : float
        Thermal capacity (J/K).
    seconds : float
        Step length.

    Returns
    -------
    T_next : float
    """
    energy_in = power_kw * 1000.0 * seconds
    energy_lost = hlc * (T - T_out) * seconds
    return T + (energy_in - energy_lost) / capacity


def steady_state_temperature(hlc, power_kw, T_out):
    """Indoor temperature at which constant ``power_kw`` balances the loss."""
    return T_out + power_kw * 1000.0 / hlc


def simulate_constant_power(physics, power_kw, T_out, T0, hours,
                            step_minutes=STEP_MINUTES):
    """
    Explicit-step trajectory under constant power and outdoor temperature.

    Returns
    -------
    t : ndarray
        Time (hours), including t = 0.
    T : ndarray
        Indoor temperature at each time.
    """
    n_steps = int(round(hours * 60 / step_minutes))
    seconds = step_minutes * 60
    T = np.empty(n_steps + 1)
    T[0] = T0
    for i in range(n_steps):
        T[i + 1] = thermal_step(T[i], T_out, power_kw, physics.hlc,
                                physics.capacity, seconds)
    t = np.arange(n_steps + 1) * step_minutes / 60.0
    return t, T


def simulate_continuous(physics, power_kw, T_out, T0, hours, t_eval=None):
    """
    Reference solution of the heat balance with an adaptive RK45 solver.

    Parameters
    ----------
    physics : BuildingPhysics
    power_kw : float
        Constant delivered power (kW).
    T_out : float
        Constant outdoor temperature (deg C).
    T0 : float
        Initial indoor temperature (deg C).
    hours : float
        Simulated duration.
    t_eval : array-like, optional
        Times (hours) at which to store the solution.

    Returns
    -------
    t : ndarray
        Time (hours).
    T : ndarray
        Indoor temperature.
    """
    t_end = hours * 3600.0
    if t_eval is None:
        t_eval_s = np.linspace(0.0, t_end, 101)
    else:
        t_eval_s = np.clip(np.asarray(t_eval) * 3600.0, 0.0, t_end)

    sol = solve_ivp(
        lambda t, T: thermal_rhs(t, T, physics.hlc, physics.capacity,
                                 power_kw, T_out),
        [0.0, t_end],
        [T0],
        t_eval=t_eval_s,
        rtol=1e-8,
        atol=1e-8,
        method='RK45'
    )
    return sol.t / 3600.0, sol.y[0]

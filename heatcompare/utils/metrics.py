"""
Evaluation metrics for comparing heating strategies.

Metric functions take sampled series as arrays and return scalars, so the
same definitions serve the engine's summary and any later analysis of
``SimulationResult.to_arrays()``.
"""

import numpy as np

from heatcompare.utils.parameters import (
    COMFORT_BAND, RECOVERY_WINDOW, STEP_MINUTES
)


def temperature_summary(T):
    """
    Mean, minimum and maximum of sampled indoor temperatures.

    Returns
    -------
    avg, T_min, T_max : float
    """
    T = np.asarray(T, dtype=float)
    return float(np.mean(T)), float(np.min(T)), float(np.max(T))


def hours_below_comfort(T, comfort_wanted, comfort_temp,
                        step_minutes=STEP_MINUTES, band=COMFORT_BAND):
    """
    Time spent more than ``band`` below comfort while comfort was wanted.

    Parameters
    ----------
    T : ndarray
        Indoor temperature at the end of each step.
    comfort_wanted : ndarray of bool
        Steps in which the strategy targets comfort.
    comfort_temp : float
        The user's comfort temperature (not any internal boosted setpoint).
    step_minutes : float
        Step length.
    band : float
        Tolerated shortfall (deg C).

    Returns
    -------
    hours : float
    """
    T = np.asarray(T, dtype=float)
    below = np.asarray(comfort_wanted, dtype=bool) & (T < comfort_temp - band)
    return int(np.count_nonzero(below)) * step_minutes / 60.0


def recovery_time_minutes(hours, T, comfort_wanted, comfort_temp,
                          step_minutes=STEP_MINUTES, window=RECOVERY_WINDOW,
                          band=COMFORT_BAND):
    """
    Approximate morning warm-up time.

    Counts the steps inside the morning ``window`` in which comfort is wanted
    but the house is still more than ``band`` below comfort. This is a
    windowed total, not the time to the first crossing: a house that reaches
    comfort, cools and falls short again in the same window is counted twice.

    Returns
    -------
    minutes : int
    """
    hours = np.asarray(hours, dtype=float)
    T = np.asarray(T, dtype=float)
    in_window = (hours >= window[0]) & (hours < window[1])
    short = (in_window & np.asarray(comfort_wanted, dtype=bool)
             & (T < comfort_temp - band))
    return int(np.count_nonzero(short)) * step_minutes


def energy_savings(baseline, other):
    """
    Energy saved by ``other`` relative to ``baseline``.

    Parameters
    ----------
    baseline, other : SimulationResult

    Returns
    -------
    saved_kwh : float
        Negative when ``other`` uses more energy.
    saved_pct : float
        Percentage of the baseline; 0 if the baseline used no energy.
    """
    saved = baseline.total_energy - other.total_energy
    if baseline.total_energy <= 0:
        return saved, 0.0
    return saved, saved / baseline.total_energy * 100.0


def heating_duty_cycle(is_heating):
    """Fraction of steps in which the system was delivering heat."""
    is_heating = np.asarray(is_heating, dtype=bool)
    if is_heating.size == 0:
        return 0.0
    return float(np.mean(is_heating))


def compute_all_metrics(result, baseline=None):
    """
    Flatten a result into a metrics dictionary.

    Parameters
    ----------
    result : SimulationResult
    baseline : SimulationResult, optional
        When given, energy savings relative to it are included.

    Returns
    -------
    metrics : dict
    """
    arrays = result.to_arrays()
    metrics = {
        'energy_kwh': result.total_energy,
        'avg_temp': result.avg_temp,
        'min_temp': result.min_temp,
        'max_temp': result.max_temp,
        'hours_below_comfort': result.hours_below_comfort,
        'recovery_minutes': result.recovery_time_minutes,
        'peak_power_kw': float(np.max(arrays['power_input'])),
        'duty_cycle': heating_duty_cycle(arrays['is_heating']),
        'setpoint': result.setpoint,
    }
    if baseline is not None:
        saved_kwh, saved_pct = energy_savings(baseline, result)
        metrics['saved_kwh'] = saved_kwh
        metrics['saved_pct'] = saved_pct
    return metrics

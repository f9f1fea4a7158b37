"""
Entry points for running heating strategy simulations.

``simulate`` runs one strategy, optionally searching for the setpoint that
makes the daily average meet the comfort temperature. ``compare_strategies``
runs the same house, system and weather under every strategy type.
"""

from functools import partial

from heatcompare.controllers.target_average import METHODS, solve_target_average
from heatcompare.models.categories import StrategyType
from heatcompare.models.simulation import run_single_simulation


def simulate(house, system, strategy, weather, target_average_mode=False,
             method='fixed_point'):
    """
    Simulate one day of ``strategy``.

    Parameters
    ----------
    house : HouseConfig
    system : SystemConfig
    strategy : StrategyConfig
    weather : WeatherPreset
    target_average_mode : bool
        If False, ``strategy.comfort_temp`` is the controller setpoint during
        comfort periods. If True, it is the desired 24-hour average and the
        setpoint is searched for.
    method : str
        Setpoint search method in target-average mode, 'fixed_point' or
        'brentq'.

    Returns
    -------
    result : SimulationResult

    Raises
    ------
    ValueError
        If ``method`` is unknown.
    """
    if method not in METHODS:
        raise ValueError(f"method must be one of {METHODS}, got {method!r}")
    if not target_average_mode:
        return run_single_simulation(house, system, strategy, weather)

    run = partial(_run_at_setpoint, house, system, strategy, weather)
    return solve_target_average(run, strategy.comfort_temp, method=method)


def _run_at_setpoint(house, system, strategy, weather, setpoint):
    return run_single_simulation(house, system, strategy, weather,
                                 override_comfort_temp=setpoint)


def compare_strategies(house, system, strategy, weather,
                       target_average_mode=False, method='fixed_point'):
    """
    Run every strategy type with the temperatures and schedule of
    ``strategy``.

    Returns
    -------
    results : dict
        {StrategyType: SimulationResult}, in StrategyType order.
    """
    return {
        strategy_type: simulate(house, system, strategy.with_type(strategy_type),
                                weather, target_average_mode, method)
        for strategy_type in StrategyType
    }

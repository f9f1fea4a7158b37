"""
Simulation engine: one day of a house under one heating strategy.

The day is split into 288 steps of 5 minutes starting at midnight. Each step:

    1. outdoor temperature from the weather preset
    2. target temperature from the strategy schedule
    3. proportional demand, clamped to the (derated) capacity
    4. delivered power moved toward the demand at the ramp rate
    5. explicit heat balance update of the indoor temperature
    6. cumulative energy and a recorded sample

The house starts at 18 deg C with the heating off. Summary metrics are
computed from the recorded samples once the day is complete.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from heatcompare.controllers.proportional import ProportionalController, RampLimiter
from heatcompare.controllers.schedule import HeatingSchedule
from heatcompare.models.categories import StrategyType
from heatcompare.models.environment import (
    BuildingPhysics, effective_max_power, outdoor_temperature
)
from heatcompare.models.house_model import thermal_step
from heatcompare.utils.metrics import (
    hours_below_comfort, recovery_time_minutes, temperature_summary
)
from heatcompare.utils.parameters import (
    HEATING_THRESHOLD, KP, STEP_MINUTES, STEPS_PER_DAY, T_INITIAL
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationStep:
    time: str                   # HH:MM
    minutes: int
    outdoor_temp: float
    indoor_temp: float
    target_temp: float          # as displayed
    power_input: float          # kW
    energy_consumed: float      # kWh, cumulative
    is_heating: bool
    max_power: float            # capacity available this step (kW)
    scheduled_on: bool          # strategy wants comfort this step


@dataclass(frozen=True)
class SimulationResult:
    steps: Tuple[SimulationStep, ...]
    total_energy: float         # kWh
    avg_temp: float
    min_temp: float
    max_temp: float
    hours_below_comfort: float
    recovery_time_minutes: int
    strategy_type: Optional[StrategyType] = None
    setpoint: Optional[float] = None
    solver_iterations: int = 0

    def to_arrays(self):
        """Sampled series as numpy arrays, keyed by step field name."""
        return {
            'minutes': np.array([s.minutes for s in self.steps]),
            'hours': np.array([s.minutes for s in self.steps]) / 60.0,
            'outdoor_temp': np.array([s.outdoor_temp for s in self.steps]),
            'indoor_temp': np.array([s.indoor_temp for s in self.steps]),
            'target_temp': np.array([s.target_temp for s in self.steps]),
            'power_input': np.array([s.power_input for s in self.steps]),
            'energy_consumed': np.array([s.energy_consumed for s in self.steps]),
            'is_heating': np.array([s.is_heating for s in self.steps]),
            'max_power': np.array([s.max_power for s in self.steps]),
            'scheduled_on': np.array([s.scheduled_on for s in self.steps]),
        }


def format_clock(minutes):
    """Minutes since midnight as HH:MM."""
    hh, mm = divmod(int(minutes), 60)
    return f"{hh:02d}:{mm:02d}"


def run_single_simulation(house, system, strategy, weather,
                          override_comfort_temp=None):
    """
    Simulate one day.

    Parameters
    ----------
    house : HouseConfig
    system : SystemConfig
    strategy : StrategyConfig
    weather : WeatherPreset
    override_comfort_temp : float, optional
        Internal comfort setpoint used by the controller instead of
        ``strategy.comfort_temp``. Comfort metrics still refer to the
        configured comfort temperature.

    Returns
    -------
    result : SimulationResult
    """
    physics = BuildingPhysics.from_configs(house, system)
    schedule = HeatingSchedule(strategy, comfort_override=override_comfort_temp)
    controller = ProportionalController(Kp=KP)
    limiter = RampLimiter(physics.ramp_rate, STEP_MINUTES)
    seconds = STEP_MINUTES * 60

    T = T_INITIAL
    energy = 0.0
    steps = []

    for i in range(STEPS_PER_DAY):
        minutes = i * STEP_MINUTES
        hour = minutes / 60.0
        T_out = outdoor_temperature(hour, weather)

        target, scheduled_on = schedule.get_target(hour)
        max_power = effective_max_power(system, T_out)
        desired = controller.get_u(T, target, max_power)
        power = limiter.update(desired)

        T = thermal_step(T, T_out, power, physics.hlc, physics.capacity,
                         seconds)
        energy += power * STEP_MINUTES / 60.0

        steps.append(SimulationStep(
            time=format_clock(minutes),
            minutes=minutes,
            outdoor_temp=T_out,
            indoor_temp=T,
            target_temp=HeatingSchedule.display_target(target),
            power_input=power,
            energy_consumed=energy,
            is_heating=power > HEATING_THRESHOLD,
            max_power=max_power,
            scheduled_on=scheduled_on,
        ))

    hours = np.array([s.minutes for s in steps]) / 60.0
    temps = np.array([s.indoor_temp for s in steps])
    wanted = np.array([s.scheduled_on for s in steps])

    avg_temp, min_temp, max_temp = temperature_summary(temps)
    below = hours_below_comfort(temps, wanted, strategy.comfort_temp,
                                STEP_MINUTES)
    if strategy.strategy_type is StrategyType.ALWAYS_ON:
        recovery = 0
    else:
        recovery = recovery_time_minutes(hours, temps, wanted,
                                         strategy.comfort_temp, STEP_MINUTES)

    logger.debug("%s at setpoint %.2f: %.2f kWh, avg %.2f deg C",
                 strategy.strategy_type.value, schedule.comfort_temp,
                 energy, avg_temp)

    return SimulationResult(
        steps=tuple(steps),
        total_energy=energy,
        avg_temp=avg_temp,
        min_temp=min_temp,
        max_temp=max_temp,
        hours_below_comfort=below,
        recovery_time_minutes=recovery,
        strategy_type=strategy.strategy_type,
        setpoint=schedule.comfort_temp,
    )

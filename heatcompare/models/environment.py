"""
Environment model: fixed building/plant coefficients and synthetic weather.

Coefficients are derived from categorical inputs through the lookup tables
in ``utils.parameters``:

    HLC   = U(era) * f(type) * size * (1 + 0.6 * draughtiness)      [W/K]
    C     = C_0 * size * (0.6 + 1.2 * thermal_mass)                   [J/K]

Outdoor temperature follows a cosine daily cycle between the preset's
minimum and maximum, peaking at 14:00:

    T_out(h) = avg + range * cos(2*pi*(h - 14)/24)
"""

from dataclasses import dataclass

import numpy as np

from heatcompare.models.categories import EmitterType, HeatingSource
from heatcompare.utils.parameters import (
    BASE_THERMAL_MASS, DEFAULT_RAMP_RATE, DRAUGHT_FACTOR, ERA_U_VALUES,
    HEAT_PUMP_DERATING, HOUSE_TYPE_FACTOR, MASS_FLOOR, MASS_SPAN, PEAK_HOUR,
    RAMP_RATES, STEP_MINUTES, UNDERFLOOR_RAMP_FACTOR, WEATHER_PROFILES
)


def heat_loss_coefficient(house):
    """Heat loss coefficient of the dwelling (W/K)."""
    hlc = (ERA_U_VALUES[house.era] * HOUSE_TYPE_FACTOR[house.house_type]
           * house.size_multiplier)
    return hlc * (1 + house.draughtiness * DRAUGHT_FACTOR)


def thermal_capacity(house):
    """Lumped heat capacity of the dwelling (J/K)."""
    mass_multiplier = MASS_FLOOR + house.thermal_mass * MASS_SPAN
    return BASE_THERMAL_MASS * house.size_multiplier * mass_multiplier


def ramp_rate(system):
    """Maximum change of delivered power (kW/min)."""
    rate = RAMP_RATES.get(system.source, DEFAULT_RAMP_RATE)
    if system.emitter is EmitterType.UNDERFLOOR:
        rate *= UNDERFLOOR_RAMP_FACTOR
    return rate


def outdoor_temperature(hour, weather):
    """
    Synthetic outdoor temperature at time of day ``hour``.

    Parameters
    ----------
    hour : float or ndarray
        Time of day in hours. Values beyond 24 wrap around.
    weather : WeatherPreset

    Returns
    -------
    T_out : float or ndarray
    """
    t_min, t_max = WEATHER_PROFILES[weather]
    avg = (t_max + t_min) / 2
    amplitude = (t_max - t_min) / 2
    phase = (np.asarray(hour) - PEAK_HOUR) / 24 * 2 * np.pi
    T_out = avg + amplitude * np.cos(phase)
    return float(T_out) if np.ndim(T_out) == 0 else T_out


def daily_outdoor_profile(weather, step_minutes=STEP_MINUTES):
    """Sample one day of outdoor temperature: returns (hours, T_out)."""
    hours = np.arange(0, 24 * 60, step_minutes) / 60.0
    return hours, outdoor_temperature(hours, weather)


def effective_max_power(system, T_out):
    """
    Deliverable capacity (kW) at outdoor temperature ``T_out``.

    Air source heat pumps lose capacity in cold air; the rating applies at
    7 deg C. Combustion and resistive sources are unaffected.
    """
    if system.source is not HeatingSource.HEAT_PUMP:
        return system.max_power
    for threshold, factor in HEAT_PUMP_DERATING:
        if T_out < threshold:
            return system.max_power * factor
    return system.max_power


@dataclass(frozen=True)
class BuildingPhysics:
    """Coefficients the engine integrates with, for one house/system pair."""
    hlc: float          # W/K
    capacity: float     # J/K
    ramp_rate: float    # kW/min

    @classmethod
    def from_configs(cls, house, system):
        return cls(hlc=heat_loss_coefficient(house),
                   capacity=thermal_capacity(house),
                   ramp_rate=ramp_rate(system))

    @property
    def time_constant_hours(self):
        """Unheated envelope time constant C / HLC, in hours."""
        return self.capacity / self.hlc / 3600.0

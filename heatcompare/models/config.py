"""
Immutable configuration records for a single simulation run.

Enumerated fields accept either the enum member or its display label.
Out-of-range values raise ValueError at construction, so the engine never
sees a house with no thermal mass or a system outside its rated range.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from heatcompare.models.categories import (
    BuildEra, EmitterType, HeatingSource, HouseType, StrategyType
)
from heatcompare.utils.parameters import (
    COMFORT_TEMP, DEFAULT_SCHEDULE, HEATING_SYSTEM_SPECS, SETBACK_TEMP
)


def _coerce(enum_cls, value, name):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ', '.join(repr(m.value) for m in enum_cls)
        raise ValueError(f"{name} must be one of {choices}, got {value!r}") from None


def _check_fraction(value, name):
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class HouseConfig:
    house_type: HouseType
    era: BuildEra
    size_multiplier: float = 1.0     # 0.8 (small) to 1.5 (large)
    draughtiness: float = 0.5        # 0 (airtight) to 1 (leaky)
    thermal_mass: float = 0.5        # 0 (light) to 1 (heavy)

    def __post_init__(self):
        object.__setattr__(self, 'house_type',
                           _coerce(HouseType, self.house_type, 'house_type'))
        object.__setattr__(self, 'era', _coerce(BuildEra, self.era, 'era'))
        if self.size_multiplier <= 0:
            raise ValueError(
                f"size_multiplier must be positive, got {self.size_multiplier}")
        _check_fraction(self.draughtiness, 'draughtiness')
        _check_fraction(self.thermal_mass, 'thermal_mass')


@dataclass(frozen=True)
class SystemConfig:
    """
    Heating plant. ``max_power`` is the rated output in kW and is
    independent of house size, so undersized systems can be modelled.
    Omitting it selects the default rating of the source.
    """
    source: HeatingSource
    emitter: EmitterType = EmitterType.RADIATORS
    max_power: Optional[float] = None

    def __post_init__(self):
        source = _coerce(HeatingSource, self.source, 'source')
        object.__setattr__(self, 'source', source)
        object.__setattr__(self, 'emitter',
                           _coerce(EmitterType, self.emitter, 'emitter'))

        rating = HEATING_SYSTEM_SPECS[source]
        if self.max_power is None:
            object.__setattr__(self, 'max_power', rating['default'])
        elif not rating['min'] <= self.max_power <= rating['max']:
            raise ValueError(
                f"max_power for {source.value} must be within "
                f"[{rating['min']}, {rating['max']}] kW, got {self.max_power}")


@dataclass(frozen=True)
class ActiveWindow:
    """Half-open interval [start, end) of the day, in hours."""
    start: float
    end: float

    def contains(self, hour):
        return self.start <= hour < self.end


def _to_window(window):
    if isinstance(window, ActiveWindow):
        return window
    if isinstance(window, dict):
        return ActiveWindow(float(window['start']), float(window['end']))
    start, end = window
    return ActiveWindow(float(start), float(end))


@dataclass(frozen=True)
class StrategyConfig:
    """
    Control strategy and its temperatures.

    ``active_hours`` holds the windows in which ``comfort_temp`` applies for
    the Setback and Timed strategies. Windows may overlap and need not be
    sorted; pairs and ``{'start', 'end'}`` dicts are converted on creation.
    """
    strategy_type: StrategyType = StrategyType.ALWAYS_ON
    comfort_temp: float = COMFORT_TEMP
    setback_temp: float = SETBACK_TEMP
    active_hours: Tuple[ActiveWindow, ...] = field(
        default_factory=lambda: tuple(ActiveWindow(*w) for w in DEFAULT_SCHEDULE))

    def __post_init__(self):
        object.__setattr__(self, 'strategy_type',
                           _coerce(StrategyType, self.strategy_type, 'strategy_type'))
        object.__setattr__(self, 'active_hours',
                           tuple(_to_window(w) for w in self.active_hours))

    def in_schedule(self, hour):
        """True if ``hour`` falls in at least one active window."""
        return any(window.contains(hour) for window in self.active_hours)

    def with_type(self, strategy_type):
        """Same temperatures and schedule under another strategy."""
        return replace(self, strategy_type=strategy_type)

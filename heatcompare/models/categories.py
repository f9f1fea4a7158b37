"""
Categorical inputs of the heating comparison.

Each enum value is the label shown to users, so a config can be built from
either the member or its label: ``HouseType("Flat") is HouseType.FLAT``.
"""

from enum import Enum


class HouseType(Enum):
    FLAT = 'Flat'
    TERRACED = 'Terraced'
    SEMI_DETACHED = 'Semi-Detached'
    DETACHED = 'Detached'


class BuildEra(Enum):
    """Construction period, oldest (leakiest) first."""
    PRE_1930 = 'Pre-1930'
    ERA_1930_1980 = '1930-1980'
    ERA_1980_2000 = '1980-2000'
    ERA_2000_2015 = '2000-2015'
    POST_2015 = '2015+'


class HeatingSource(Enum):
    GAS_BOILER = 'Gas Boiler'
    HEAT_PUMP = 'Air Source Heat Pump'
    OIL_BOILER = 'Oil Boiler'
    ELECTRIC = 'Electric Resistance'


class EmitterType(Enum):
    RADIATORS = 'Radiators'
    UNDERFLOOR = 'Underfloor Heating'


class StrategyType(Enum):
    ALWAYS_ON = 'Constant (24/7)'
    SETBACK = 'Setback Schedule'
    TIMED = 'Timed On/Off'


class WeatherPreset(Enum):
    MILD = 'Mild Winter (8°C)'
    COLD = 'Typical Winter (4°C)'
    FREEZING = 'Cold Snap (-2°C)'

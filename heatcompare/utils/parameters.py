"""
Shared physical parameters for the heating strategy comparison.

All units are SI unless otherwise noted. Power is in kW and time of day in
fractional hours, matching what users enter.
"""

from heatcompare.models.categories import (
    BuildEra, HouseType, HeatingSource, WeatherPreset
)

# --- Building envelope ---
# Base heat loss coefficient (W/K) of a nominal dwelling, by build era
ERA_U_VALUES = {
    BuildEra.PRE_1930: 420.0,       # solid walls, leaky
    BuildEra.ERA_1930_1980: 300.0,
    BuildEra.ERA_1980_2000: 200.0,
    BuildEra.ERA_2000_2015: 110.0,
    BuildEra.POST_2015: 60.0,       # very airtight
}

# Exposed surface area relative to a semi-detached house
HOUSE_TYPE_FACTOR = {
    HouseType.FLAT: 0.7,
    HouseType.TERRACED: 0.85,
    HouseType.SEMI_DETACHED: 1.0,
    HouseType.DETACHED: 1.3,
}

DRAUGHT_FACTOR = 0.6        # HLC multiplier at draughtiness = 1 is 1.6

# --- Thermal mass ---
BASE_THERMAL_MASS = 8.0e6   # Heat capacity of a nominal dwelling (J/K)
MASS_FLOOR = 0.6            # Capacity multiplier at thermal_mass = 0
MASS_SPAN = 1.2             # Added multiplier at thermal_mass = 1

# --- Heating systems ---
# Rated output (kW): slider default and allowed range per source
HEATING_SYSTEM_SPECS = {
    HeatingSource.GAS_BOILER: {'default': 24.0, 'min': 8.0, 'max': 40.0},
    HeatingSource.OIL_BOILER: {'default': 20.0, 'min': 10.0, 'max': 35.0},
    HeatingSource.HEAT_PUMP: {'default': 8.0, 'min': 3.0, 'max': 18.0},
    HeatingSource.ELECTRIC: {'default': 12.0, 'min': 3.0, 'max': 24.0},
}

# Maximum change of delivered power (kW/min)
RAMP_RATES = {
    HeatingSource.ELECTRIC: 2.0,
    HeatingSource.GAS_BOILER: 0.8,
    HeatingSource.OIL_BOILER: 0.8,
    HeatingSource.HEAT_PUMP: 0.25,
}
DEFAULT_RAMP_RATE = 0.5
UNDERFLOOR_RAMP_FACTOR = 0.2

# Air source heat pump capacity derating, rated at 7 deg C.
# First (threshold, factor) with T_out < threshold applies.
HEAT_PUMP_DERATING = (
    (-2.0, 0.65),
    (2.0, 0.75),
    (5.0, 0.85),
)

# --- Weather ---
# Daily (min, max) outdoor temperature (deg C)
WEATHER_PROFILES = {
    WeatherPreset.MILD: (7.0, 11.0),
    WeatherPreset.COLD: (1.0, 6.0),
    WeatherPreset.FREEZING: (-5.0, -1.0),
}
PEAK_HOUR = 14.0            # Warmest time of day; coldest is 12 h later

# --- Strategy defaults ---
COMFORT_TEMP = 21.0
SETBACK_TEMP = 16.0
DEFAULT_SCHEDULE = ((6.0, 9.0), (16.0, 22.5))
TIMED_OFF_TARGET = -10.0    # Target outside the schedule: no demand
DISPLAY_CUTOFF = -5.0       # Targets at or below this are shown as ...
DISPLAY_OFF_TARGET = 0.0    # ... this value

# --- Controller ---
KP = 5.0                    # Proportional gain (kW per deg C of error)
HEATING_THRESHOLD = 0.1     # Power above which the system counts as on (kW)

# --- Comfort metrics ---
COMFORT_BAND = 0.5          # Tolerated shortfall below comfort (deg C)
RECOVERY_WINDOW = (5.0, 11.0)

# --- Simulation ---
T_INITIAL = 18.0            # Indoor temperature at midnight (deg C)
STEP_MINUTES = 5
STEPS_PER_DAY = 24 * 60 // STEP_MINUTES

# --- Target-average solver ---
SOLVER_GAIN = 1.5
SOLVER_TOLERANCE = 0.1      # deg C
SOLVER_MAX_ITER = 12
SETPOINT_CEILING = 45.0     # deg C

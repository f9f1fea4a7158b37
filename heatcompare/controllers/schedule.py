"""
Target temperature rule of each heating strategy.

    Always On : comfort temperature all day
    Setback   : comfort inside the active windows, setback temperature outside
    Timed     : comfort inside the active windows, no demand outside
"""

from heatcompare.models.categories import StrategyType
from heatcompare.utils.parameters import (
    DISPLAY_CUTOFF, DISPLAY_OFF_TARGET, TIMED_OFF_TARGET
)


class HeatingSchedule:
    """
    Parameters
    ----------
    strategy : StrategyConfig
    comfort_override : float, optional
        Internal comfort setpoint replacing ``strategy.comfort_temp``.
        The target-average solver raises it to make up for off periods.
    """

    def __init__(self, strategy, comfort_override=None):
        self.strategy = strategy
        if comfort_override is None:
            self.comfort_temp = strategy.comfort_temp
        else:
            self.comfort_temp = comfort_override

    def get_target(self, hour):
        """
        Target temperature at time of day ``hour``.

        Returns
        -------
        target : float
        scheduled_on : bool
            Whether the strategy wants comfort at this time.
        """
        strategy_type = self.strategy.strategy_type
        if strategy_type is StrategyType.ALWAYS_ON:
            return self.comfort_temp, True
        if self.strategy.in_schedule(hour):
            return self.comfort_temp, True
        if strategy_type is StrategyType.SETBACK:
            return self.strategy.setback_temp, False
        return TIMED_OFF_TARGET, False

    @staticmethod
    def display_target(target):
        """Target as charted: the Timed 'off' sentinel is shown as 0 deg C."""
        return target if target > DISPLAY_CUTOFF else DISPLAY_OFF_TARGET

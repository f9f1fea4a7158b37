"""
Proportional heating demand with equipment limits.

    P_desired = min(Kp * (T_set - T), P_max)    if T < T_set
              = 0                               otherwise

There is no integral or derivative action, so the room settles below the
setpoint by roughly HLC * (T - T_out) / Kp.

The delivered power then follows the demand at a bounded rate
(``RampLimiter``), which stands in for boiler start-up, heat pump
modulation and the slow response of underfloor emitters.
"""

from heatcompare.utils.parameters import KP, STEP_MINUTES


class ProportionalController:
    """
    Proportional thermostat.

    Parameters
    ----------
    Kp : float
        Gain in kW per deg C of error.
    """

    def __init__(self, Kp=KP):
        self.Kp = Kp

    def get_u(self, T, T_set, U_max):
        """
        Desired heating power.

        Parameters
        ----------
        T : float
            Current indoor temperature.
        T_set : float
            Target temperature for this step.
        U_max : float
            Capacity available this step (kW).

        Returns
        -------
        u : float
            Demand in [0, U_max].
        """
        if T < T_set:
            u = self.Kp * (T_set - T)
        else:
            u = 0.0
        return min(u, U_max)

    def reset(self):
        """Proportional control is stateless, nothing to reset."""
        pass


class RampLimiter:
    """
    Moves delivered power toward the demand by at most
    ``rate * step_minutes`` per step, in either direction.

    Parameters
    ----------
    rate : float
        Maximum change of power (kW/min).
    step_minutes : float
        Step length.
    initial : float
        Delivered power before the first step (kW).
    """

    def __init__(self, rate, step_minutes=STEP_MINUTES, initial=0.0):
        self.max_change = rate * step_minutes
        self._initial = initial
        self.output = initial

    def update(self, desired):
        """Return the delivered power for this step."""
        if desired > self.output:
            self.output = min(self.output + self.max_change, desired)
        else:
            self.output = max(self.output - self.max_change, desired)
        return self.output

    def reset(self):
        self.output = self._initial

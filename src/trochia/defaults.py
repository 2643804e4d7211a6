"""
Default Orbits and Control Increments
=====================================

Initial states for the ship/target scenario, the maneuver increments an
input layer applies per key press, and a factory that wires the scenario to
a simulation clock.

All states are (x, y, vx, vy) in units where GM = 1.

Examples
--------
>>> from trochia.defaults import default_scenario
>>> clock, ship, target = default_scenario()
>>> ship.thrust(THRUST_STEP)
"""
from typing import Optional, Tuple

from .clock import SimulationClock
from .orbit import Orbit

"""
Predefined initial states
Both bodies start on the +x axis moving clockwise. With GM = 1 the speed
0.15 is below circular speed at either radius, so each starts at apoapsis.
"""
SHIP_INITIAL_STATE = (40.0, 0.0, 0.0, -0.15)
TARGET_INITIAL_STATE = (50.0, 0.0, 0.0, -0.15)

# Drawn radius of a body, used to pad the view extent
BODY_RADIUS = 2.0

"""
Control increments
"""
THRUST_STEP = 0.0025        # delta-v per burn
TURN_STEP_DEG = 10.0        # facing change per turn
FINE_CONTROL_FACTOR = 0.1   # multiplier for fine (shifted) controls
STRAFE_LEFT_DEG = 270.0     # extra burn angle for strafing left
STRAFE_RIGHT_DEG = 90.0     # extra burn angle for strafing right
SPEED_STEP_FACTOR = 1.1     # clock speed multiplier per speed-up/slow-down


def default_scenario(clock: Optional[SimulationClock] = None
                     ) -> Tuple[SimulationClock, Orbit, Orbit]:
    """
    Create the ship and target orbits and register them with a clock.

    Parameters
    ----------
    clock : SimulationClock, optional
        Clock to drive the bodies. A new, stopped clock is created if
        omitted.

    Returns
    -------
    (SimulationClock, Orbit, Orbit)
        The clock, the ship and the target
    """
    if clock is None:
        clock = SimulationClock()
    t = clock.get_time()

    target = Orbit(name='target')
    target.reset(t, *TARGET_INITIAL_STATE)
    ship = Orbit(name='ship')
    ship.reset(t, *SHIP_INITIAL_STATE)

    clock.add_listener(ship.advance)
    clock.add_listener(target.advance)
    return clock, ship, target

"""
Trochia Settings
================

One mutable settings object, `trochia.config`, shared by every module.
It holds the anomaly solver tolerances and iteration caps, the eccentricity
snapping thresholds, the strict/lenient validation switch, the clock
cadence and the ranges used for random orbits.

Examples
--------
Inspect:

>>> import trochia
>>> print(trochia.config)

Change for the rest of the session:

>>> trochia.config.SOLVER_TOL = 1e-12  # Tighter anomaly solve
>>> trochia.config.CLOCK_DELAY_MS = 10.0  # Faster tick cadence

Restore package defaults:

>>> trochia.config.reset()

Change inside a block only:

>>> with trochia.temp_config(STRICT_VALIDATION=False):
...     # Validation failures only warn inside this block
...     orbit.reset(0.0, float('nan'), 0.0, 0.0, 0.1)

Notes
-----
Settings are read at call time, so a change applies to every orbit and
clock in the process, including ones created earlier.
"""

from dataclasses import dataclass, field
from contextlib import contextmanager
from typing import Tuple
import math


@dataclass
class TrochiaConfig:
    """
    Global configuration for Trochia package.

    Attributes
    ----------
    SOLVER_TOL : float
        Tolerance on residual and bracket width for anomaly root solves.
        Default: 1e-10
    NEWTON_MAX_ITER : int
        Iteration budget for damped Newton-Raphson before falling back
        to bisection. Default: 30
    NEWTON_RELAXATION : float
        Weight of the Newton step in the over-relaxed update
        x_next = (1 - w) * x + w * (x - f/f'). Default: 0.8
    BRACKET_MAX_EXPANSIONS : int
        Number of bracket doublings allowed while searching for a sign change.
        Default: 64
    BISECTION_MAX_ITER : int
        Hard ceiling on bisection/secant iterations. Default: 200
    SNAP_TO_CIRCULAR : float
        Eccentricity below this threshold is treated as circular (e=0).
        Default: 1e-12
    SNAP_TO_PARABOLIC : float
        Eccentricity within this distance of 1 is treated as parabolic (e=1).
        Default: 1e-10
    EQUALITY_RTOL : float
        Relative tolerance used by OrbitalElements.__eq__. Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance used by OrbitalElements.__eq__; also sets
        HASH_DECIMALS. Default: 1e-14
    STRICT_VALIDATION : bool
        Invalid caller input raises when True and only warns when False.
        Default: True
    CLOCK_DELAY_MS : float
        Wall-clock cadence of simulation clock ticks [ms]. Default: 18.0
    DEFAULT_CLOCK_SPEED : float
        Simulated time units per wall-clock millisecond. Default: 0.3
    RANDOMIZE_MAX_ATTEMPTS : int
        Rejection-sampling budget for Orbit.randomize(). Default: 10000
    RANDOM_RADIUS_RANGE : tuple of float
        Sampling interval for the radius of random states. Default: (20, 60)
    RANDOM_RADIAL_SPEED : float
        Radial speed of random states is drawn from [-v, v]. Default: 0.1
    RANDOM_TANGENTIAL_SPEED : float
        Tangential speed of random states is drawn from [-v, v]. Default: 0.25
    """

    # Root solver
    SOLVER_TOL: float = 1e-10
    NEWTON_MAX_ITER: int = 30
    NEWTON_RELAXATION: float = 0.8
    BRACKET_MAX_EXPANSIONS: int = 64
    BISECTION_MAX_ITER: int = 200

    # Regime snapping in orbit determination
    SNAP_TO_CIRCULAR: float = 1e-12
    SNAP_TO_PARABOLIC: float = 1e-10

    # Element equality and hashing
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Strict or lenient input checks
    STRICT_VALIDATION: bool = True

    # Simulation clock
    CLOCK_DELAY_MS: float = 18.0
    DEFAULT_CLOCK_SPEED: float = 0.3

    # Random orbit generation
    RANDOMIZE_MAX_ATTEMPTS: int = 10000
    RANDOM_RADIUS_RANGE: Tuple[float, float] = field(default=(20.0, 60.0))
    RANDOM_RADIAL_SPEED: float = 0.1
    RANDOM_TANGENTIAL_SPEED: float = 0.25

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Decimal places kept when hashing OrbitalElements.

        Two decimals coarser than EQUALITY_ATOL so that element sets that
        compare equal also round to the same hash key.
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)

    def reset(self):
        """
        Restore every field to the value a fresh TrochiaConfig has.

        >>> trochia.config.SOLVER_TOL = 1e-6
        >>> trochia.config.reset()
        >>> trochia.config.SOLVER_TOL
        1e-10
        """
        defaults = TrochiaConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Grouped listing of every setting."""
        lines = ["TrochiaConfig:"]
        lines.append("  Root Solver:")
        lines.append(f"    SOLVER_TOL = {self.SOLVER_TOL}")
        lines.append(f"    NEWTON_MAX_ITER = {self.NEWTON_MAX_ITER}")
        lines.append(f"    NEWTON_RELAXATION = {self.NEWTON_RELAXATION}")
        lines.append(f"    BRACKET_MAX_EXPANSIONS = {self.BRACKET_MAX_EXPANSIONS}")
        lines.append(f"    BISECTION_MAX_ITER = {self.BISECTION_MAX_ITER}")
        lines.append("  Snapping Thresholds:")
        lines.append(f"    SNAP_TO_CIRCULAR = {self.SNAP_TO_CIRCULAR}")
        lines.append(f"    SNAP_TO_PARABOLIC = {self.SNAP_TO_PARABOLIC}")
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    HASH_DECIMALS = {self.HASH_DECIMALS}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Clock:")
        lines.append(f"    CLOCK_DELAY_MS = {self.CLOCK_DELAY_MS}")
        lines.append(f"    DEFAULT_CLOCK_SPEED = {self.DEFAULT_CLOCK_SPEED}")
        lines.append("  Random Orbits:")
        lines.append(f"    RANDOMIZE_MAX_ATTEMPTS = {self.RANDOMIZE_MAX_ATTEMPTS}")
        lines.append(f"    RANDOM_RADIUS_RANGE = {self.RANDOM_RADIUS_RANGE}")
        lines.append(f"    RANDOM_RADIAL_SPEED = {self.RANDOM_RADIAL_SPEED}")
        lines.append(f"    RANDOM_TANGENTIAL_SPEED = {self.RANDOM_TANGENTIAL_SPEED}")
        return "\n".join(lines)


# Shared settings instance
config = TrochiaConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Override settings for the duration of a with-block.

    Parameters
    ----------
    **kwargs
        Field names of TrochiaConfig and their temporary values

    Yields
    ------
    TrochiaConfig
        The global config, already modified

    Raises
    ------
    AttributeError
        For a name that is not a TrochiaConfig field. Nothing is changed
        in that case.

    Examples
    --------
    >>> with trochia.temp_config(SOLVER_TOL=1e-6, NEWTON_MAX_ITER=5):
    ...     orbit.advance(1000.0)
    >>> trochia.config.SOLVER_TOL  # previous value is back
    1e-10
    """
    fields = config.__dataclass_fields__
    unknown = [key for key in kwargs if key not in fields]
    if unknown:
        raise AttributeError(
            f"Unknown TrochiaConfig setting(s) {unknown}; "
            f"choose from {sorted(fields)}"
        )
    saved = {key: getattr(config, key) for key in kwargs}
    for key, value in kwargs.items():
        setattr(config, key, value)
    try:
        yield config
    finally:
        for key, value in saved.items():
            setattr(config, key, value)

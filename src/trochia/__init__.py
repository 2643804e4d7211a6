"""
Trochia: Interactive Two-Body Orbital Mechanics

A Python package for simulating a maneuverable body on Keplerian orbits
(elliptic, parabolic and hyperbolic) about a fixed center, driven by a
variable-rate simulation clock.
"""

# Configuration
from .config import config, temp_config

# Core classes
from .orbital_elements import (
    OrbitalElements, OrbitalElements as OE, ConicType,
    EllipseGeometry, ParabolaGeometry, HyperbolaGeometry,
)
from .orbit import Orbit, StateVector, OrbitStats, SimulationState
from .clock import SimulationClock

# Solvers and maneuvers
from .root_solver import (
    find_root, SolverError, RootNotBracketedError, SolverConvergenceError,
)
from .propagator import propagate, position
from .maneuver import determine_orbit, apply_thrust

# Scenario factory
from .defaults import default_scenario

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from trochia import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "OrbitalElements",
    "ConicType",
    "EllipseGeometry",
    "ParabolaGeometry",
    "HyperbolaGeometry",
    "Orbit",
    "StateVector",
    "OrbitStats",
    "SimulationState",
    "SimulationClock",
    # Abbreviations
    "OE",
    # Functions
    "find_root",
    "propagate",
    "position",
    "determine_orbit",
    "apply_thrust",
    "default_scenario",
    # Errors
    "SolverError",
    "RootNotBracketedError",
    "SolverConvergenceError",
]

# planeframe/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class SolverConfig:
    """Global solver configuration."""

    # Material / section defaults for members that leave properties unset
    default_e_modulus: float = 200e9     # Pa
    default_area: float = 0.01           # m^2
    default_moment_inertia: float = 1e-4  # m^4
    default_spring_constant: float = 100.0  # N/m

    # Numerical guards
    pivot_tolerance: float = 1e-12       # relative to largest |K_ff| entry
    zero_stiffness_tolerance: float = 1e-12  # relative, for inactive DOF rows
    min_length: float = 1e-4             # substituted for zero-length members (m)

    # Dense K is O(N^2) memory and the solve O(N^3) time
    max_nodes: int = 2000


# Global config instance
CONFIG = SolverConfig()

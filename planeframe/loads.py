# loads.py - Equivalent nodal loads for member loads
"""
Fixed-end actions for loads applied along a member.

A member load is replaced by the forces and moments a fully fixed-fixed
member would need at its ends to resist it. Those six values are used
directly as equivalent nodal loads, then subtracted again when member
end forces are recovered.

Vector format throughout: [Fx_i, Fy_i, M_i, Fx_j, Fy_j, M_j]
Moments are counter-clockwise positive.
"""

from enum import Enum
from typing import Optional

import numpy as np

from .errors import InvalidLoad


class MemberLoadKind(str, Enum):
    """Supported member load patterns."""
    UDL = "udl"                        # uniform over the full length
    TRIANGULAR_SYM = "triangular_sym"  # zero at the ends, peak at midspan
    POINT = "point"                    # concentrated, at distance a from node i


def frame2d_equiv_nodal_load_udl(L: float, w: float) -> np.ndarray:
    """
    Equivalent nodal loads for a uniform distributed load.

    A uniform load w over length L creates a total force w×L, split
    equally between the end nodes (wL/2 each), with end moments ±wL²/12.

    Parameters:
    -----------
    L : float
        Element length (m)
    w : float
        Load per unit length (N/m); w < 0 acts downward

    Examples:
    --------
    >>> frame2d_equiv_nodal_load_udl(5.0, -10.0).round(3).tolist()
    [0.0, -25.0, -20.833, 0.0, -25.0, 20.833]
    """
    force_per_node = w * L / 2.0
    moment_magnitude = w * L * L / 12.0
    return np.array([
        0.0,
        force_per_node,
        moment_magnitude,
        0.0,
        force_per_node,
        -moment_magnitude,
    ], dtype=float)


def frame2d_equiv_nodal_load_triangular(L: float, w: float) -> np.ndarray:
    """
    Equivalent nodal loads for a symmetric triangular load with peak w at
    midspan: total force wL/2, so wL/4 per node, end moments ±5wL²/96.
    """
    force_per_node = w * L / 4.0
    moment_magnitude = 5.0 * w * L * L / 96.0
    return np.array([
        0.0,
        force_per_node,
        moment_magnitude,
        0.0,
        force_per_node,
        -moment_magnitude,
    ], dtype=float)


def frame2d_equiv_nodal_load_point(L: float, P: float, a: Optional[float] = None) -> np.ndarray:
    """
    Equivalent nodal loads for a point load P at distance a from node i.

    With b = L - a:
        V_i = P·b²·(3a + b) / L³      M_i =  P·a·b² / L²
        V_j = P·a²·(a + 3b) / L³      M_j = -P·a²·b / L²

    a defaults to L/2 when not given.
    """
    if a is None:
        a = L / 2.0
    if not 0.0 <= a <= L:
        raise InvalidLoad(f"Point load location {a} outside member of length {L}")
    b = L - a
    L2 = L * L
    L3 = L2 * L
    return np.array([
        0.0,
        P * b**2 * (3 * a + b) / L3,
        P * a * b**2 / L2,
        0.0,
        P * a**2 * (a + 3 * b) / L3,
        -P * a**2 * b / L2,
    ], dtype=float)


def equivalent_nodal_load(
    kind: MemberLoadKind,
    L: float,
    magnitude: float,
    location: Optional[float] = None,
) -> np.ndarray:
    """Dispatch to the fixed-end-action formula for a load pattern."""
    kind = MemberLoadKind(kind)
    if kind is MemberLoadKind.UDL:
        return frame2d_equiv_nodal_load_udl(L, magnitude)
    if kind is MemberLoadKind.TRIANGULAR_SYM:
        return frame2d_equiv_nodal_load_triangular(L, magnitude)
    return frame2d_equiv_nodal_load_point(L, magnitude, location)

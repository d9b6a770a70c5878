# planeframe/kernel/solve.py
"""Linear system solver with boundary conditions and mechanism detection."""

import logging

import numpy as np
from typing import Sequence

from ..errors import SingularMatrix, UnstableStructure
from .linalg import extract_submatrix, solve

logger = logging.getLogger(__name__)


def partition_dofs(ndof: int, fixed_dofs: Sequence[int]) -> tuple[np.ndarray, np.ndarray]:
    """
    Split [0, ndof) into ascending free and fixed DOF index arrays.

    The two arrays are disjoint and together cover every DOF.
    """
    fixed_set = set(int(d) for d in fixed_dofs)
    out_of_range = [d for d in fixed_set if not 0 <= d < ndof]
    if out_of_range:
        raise IndexError(f"Fixed DOFs out of range [0, {ndof}): {sorted(out_of_range)}")
    fixed = np.array(sorted(fixed_set), dtype=int)
    free = np.array([i for i in range(ndof) if i not in fixed_set], dtype=int)
    return free, fixed


def find_inactive_dofs(Kff: np.ndarray, tol: float = 1e-12) -> np.ndarray:
    """
    Local indices of rows of Kff that carry no stiffness at all.

    These are DOFs no element connects to: rotations at joints where only
    trusses (EI = 0) or springs meet, or the transverse direction at the
    free end of a lone spring. The threshold is relative to max|Kff|.
    """
    if Kff.size == 0:
        return np.array([], dtype=int)
    scale = float(np.max(np.abs(Kff)))
    if scale == 0.0:
        return np.arange(Kff.shape[0], dtype=int)
    row_max = np.max(np.abs(Kff), axis=1)
    return np.flatnonzero(row_max <= tol * scale)


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: Sequence[int],
    pivot_tolerance: float = 1e-12,
    zero_stiffness_tolerance: float = 1e-12,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve K·d = F with fixed DOFs enforced by partitioning.

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global effective load vector (ndof,)
        fixed_dofs: Constrained DOF indices (displacement = 0)
        pivot_tolerance: Relative pivot threshold for the elimination
        zero_stiffness_tolerance: Relative threshold for inactive DOF rows

    Returns:
        d: Displacement vector (ndof,), zero at fixed DOFs
        free: Array of free DOF indices
        fixed: Array of fixed DOF indices

    Raises:
        UnstableStructure: If the reduced system is singular, or a DOF with
            no stiffness carries load
    """
    ndof = K.shape[0]
    free, fixed = partition_dofs(ndof, fixed_dofs)
    d = np.zeros(ndof, dtype=float)

    if len(free) == 0:
        # Fully restrained: nothing can move
        return d, free, fixed

    Kff = extract_submatrix(K, free, free)
    Ff = np.asarray(F, dtype=float)[free]

    # Unconnected DOFs: held at zero if unloaded, a mechanism if loaded
    inactive = find_inactive_dofs(Kff, zero_stiffness_tolerance)
    if len(inactive):
        load_scale = max(float(np.max(np.abs(Ff))), 1.0)
        for i in inactive:
            if abs(Ff[i]) > zero_stiffness_tolerance * load_scale:
                raise UnstableStructure(
                    f"Unstable system: DOF {free[i]} has no stiffness but carries "
                    f"load {Ff[i]:.6g}.",
                    dof=int(free[i]),
                )
        logger.debug("Holding %d unconnected DOF(s) at zero: %s",
                     len(inactive), free[inactive].tolist())

    active = np.setdiff1d(np.arange(len(free)), inactive)
    if len(active) == 0:
        return d, free, fixed

    try:
        d_active = solve(
            extract_submatrix(Kff, active, active),
            Ff[active],
            tol=pivot_tolerance,
        )
    except SingularMatrix as e:
        dof = int(free[active[e.column]])
        raise UnstableStructure(
            f"Unstable system: stiffness matrix is singular at DOF {dof}. "
            f"Check supports and member connectivity.",
            dof=dof,
        ) from e

    d[free[active]] = d_active
    logger.debug("Solved %d free DOFs (%d fixed)", len(active), len(fixed))
    return d, free, fixed

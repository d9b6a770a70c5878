# planeframe/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Assembly
================================

PURPOSE:
--------
The scatter-add operation that builds K and F from element-level data.

Assembly doesn't care about element TYPE. It just needs:
- Total number of DOFs
- For each element: its DOF map and its matrix (or load vector)
  already expressed in global coordinates

A frame contributes a 6×6 block and a spring contributes its 4×4 block
expanded to the same 6×6 layout, so both go through the same loop.

USAGE:
------
    contributions = []
    for element in elements:
        dof_map = dof.element_dof_map([ni, nj])   # [xi, yi, ri, xj, yj, rj]
        ke = element_global_stiffness(element)    # 6×6, global coords
        contributions.append((dof_map, ke))

    K = assemble_global_K(ndof, contributions)
"""

import numpy as np
from typing import List, Sequence, Tuple

from ..errors import ShapeMismatch
from .linalg import scatter_add


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix from element contributions.

    ALGORITHM:
    ----------
    K = zeros(ndof × ndof)
    for each element:
        K[dof_map, dof_map] += ke

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system (3 × n_nodes)

    contributions : List[Tuple[List[int], np.ndarray]]
        (dof_map, ke) per element, ke shaped (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        Global stiffness matrix K, shape (ndof, ndof). Symmetric when
        every ke is symmetric.
    """
    K = np.zeros((ndof, ndof), dtype=float)
    for dof_map, ke in contributions:
        scatter_add(K, ke, dof_map, dof_map)
    return K


def assemble_global_F(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble a global load vector from element contributions.

    Same scatter-add logic as assemble_global_K, for vectors. Used for
    equivalent nodal loads from member loads.
    """
    F = np.zeros(ndof, dtype=float)
    for dof_map, fe in contributions:
        if fe.shape != (len(dof_map),):
            raise ShapeMismatch(
                f"Element load shape {fe.shape} doesn't match dof_map length {len(dof_map)}"
            )
        for a, ia in enumerate(dof_map):
            F[ia] += fe[a]
    return F


def add_nodal_load(F: np.ndarray, node_dofs: Sequence[int], load_vector: Sequence[float]) -> None:
    """
    Add a nodal load [Fx, Fy, Mz] to the global load vector (in-place).

    >>> F = np.zeros(6)
    >>> add_nodal_load(F, [3, 4, 5], [1000.0, 0.0, 0.0])
    >>> float(F[3])
    1000.0
    """
    if len(node_dofs) != len(load_vector):
        raise ShapeMismatch(
            f"Load has {len(load_vector)} components for {len(node_dofs)} DOFs"
        )
    for dof, val in zip(node_dofs, load_vector):
        F[dof] += val

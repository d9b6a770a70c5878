# support reactions, element end forces, nodal displacements, summary

import numpy as np
from typing import Any, Dict, Sequence

from .elements import element_local_stiffness, frame2d_transform
from .kernel.dof import split_dof
from .kernel.linalg import extract_submatrix, multiply
from .model import Element, Structure


def compute_reactions(
    K: np.ndarray,
    d: np.ndarray,
    F: np.ndarray,
    fixed: Sequence[int],
) -> np.ndarray:
    """
    Support reactions at the fixed DOFs, in the order of `fixed`.

        R = K[fixed, :]·d − F[fixed]

    K[fixed, :]·d is the elastic force the members exert at the restrained
    DOF; F is the load already applied there (equivalent member loads and
    any nodal load placed directly on the support). The remainder is what
    the support itself must supply.

    Returns an empty array when nothing is fixed.
    """
    fixed = np.asarray(fixed, dtype=int)
    if len(fixed) == 0:
        return np.zeros(0, dtype=float)
    all_dofs = np.arange(K.shape[1], dtype=int)
    K_fix = extract_submatrix(K, fixed, all_dofs)
    return multiply(K_fix, d) - np.asarray(F, dtype=float)[fixed]


def reactions_by_node(
    structure: Structure,
    fixed: Sequence[int],
    R: np.ndarray,
) -> Dict[str, Dict[str, float]]:
    """
    Group reaction values per support node.

    Returns:
    --------
    Dict[str, Dict[str, float]]
        node_id → {'fx', 'fy', 'moment'}; components at free DOFs are 0.
        Only nodes with at least one fixed DOF appear.
    """
    by_index = {n.index: n.id for n in structure.nodes.values()}
    keys = ("fx", "fy", "moment")
    result: Dict[str, Dict[str, float]] = {}
    for dof, value in zip(fixed, R):
        node_index, slot = split_dof(int(dof))
        node_id = by_index[node_index]
        entry = result.setdefault(node_id, {k: 0.0 for k in keys})
        entry[keys[slot]] = float(value)
    return result


def element_end_forces_local(
    structure: Structure,
    element: Element,
    d_global: np.ndarray,
) -> np.ndarray:
    """
    Element end forces in LOCAL coordinates from global displacements.

    The process:
    1. Extract the element's 6 global displacements
    2. Transform to local coordinates
    3. Compute forces using f = k_local × d_local (springs expanded to 6×6)
    4. Subtract the equivalent nodal loads of any member load

    Equivalent loads are assembled in global axes, so they are rotated
    into the element frame before being subtracted. For horizontal
    members the rotation is the identity.

    Returns:
    --------
    np.ndarray
        Shape (6,): [N_i, V_i, M_i, N_j, V_j, M_j]
        Axial end forces act along the member; N_j > 0 (and N_i < 0)
        means tension.
    """
    dof_map = structure.element_dof_map(element)
    d_elem_global = np.asarray(d_global, dtype=float)[dof_map]

    T = frame2d_transform(element.geom.c, element.geom.s)
    d_local = multiply(T, d_elem_global)
    f_local = multiply(element_local_stiffness(element), d_local)

    if element.id in structure.member_loads:
        f_eq_local = multiply(T, structure.equivalent_load(element.id))
        f_local = f_local - f_eq_local

    return f_local


def compute_member_forces(
    structure: Structure,
    d_global: np.ndarray,
) -> Dict[str, np.ndarray]:
    """Local end forces for every element, keyed by element id."""
    return {
        eid: element_end_forces_local(structure, e, d_global)
        for eid, e in structure.elements.items()
    }


def compute_nodal_displacements(
    structure: Structure,
    d_global: np.ndarray,
) -> Dict[str, Dict[str, float]]:
    """
    Mapping of node_id to {'x', 'y', 'rotation'}.
    """
    result = {}
    for node_id, node in structure.nodes.items():
        ux, uy, rz = (d_global[dof] for dof in structure.dof.node_dofs(node.index))
        result[node_id] = {
            'x': float(ux),
            'y': float(uy),
            'rotation': float(rz),
        }
    return result


def summarize(
    displacements: Dict[str, Dict[str, float]],
    reactions: Dict[str, Dict[str, float]],
    member_forces: Dict[str, Dict[str, Dict[str, float]]],
) -> Dict[str, Any]:
    """
    Headline numbers for reports.

    Returns:
    --------
    Dict with:
        - max_displacement: largest translation magnitude (m)
        - max_displacement_node: node where it occurs ('' if none)
        - max_axial: largest |axial| end force (N)
        - max_moment: largest |moment| end force (N·m)
        - sum_rx, sum_ry: totals of reaction components (N)
    """
    max_disp, max_node = 0.0, ''
    for node_id, u in displacements.items():
        mag = float(np.hypot(u['x'], u['y']))
        if mag > max_disp:
            max_disp, max_node = mag, node_id

    max_axial = 0.0
    max_moment = 0.0
    for forces in member_forces.values():
        for end in ('start', 'end'):
            max_axial = max(max_axial, abs(forces[end]['fx']))
            max_moment = max(max_moment, abs(forces[end]['moment']))

    return {
        'max_displacement': max_disp,
        'max_displacement_node': max_node,
        'max_axial': max_axial,
        'max_moment': max_moment,
        'sum_rx': float(sum(r['fx'] for r in reactions.values())),
        'sum_ry': float(sum(r['fy'] for r in reactions.values())),
    }

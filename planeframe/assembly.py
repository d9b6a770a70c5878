#global K and load vector assembly

import logging

import numpy as np

from .elements import element_global_stiffness
from .kernel.assemble import add_nodal_load, assemble_global_F
from .kernel.assemble import assemble_global_K as _assemble_K
from .model import Structure

logger = logging.getLogger(__name__)


def assemble_global_K(structure: Structure) -> np.ndarray:
    """Scatter every element's global 6×6 block into K (3N × 3N)."""
    contributions = [
        (structure.element_dof_map(e), element_global_stiffness(e))
        for e in structure.elements.values()
    ]
    K = _assemble_K(structure.ndof, contributions)
    logger.debug("Assembled K: %d DOFs, %d elements", structure.ndof, len(contributions))
    return K


def assemble_load_vectors(structure: Structure) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Build the global load vectors.

    Returns:
    --------
    direct : np.ndarray
        Nodal loads applied directly to nodes
    equivalent : np.ndarray
        Equivalent nodal loads from member loads, scattered at each
        element's [xi, yi, ri, xj, yj, rj] indices
    effective : np.ndarray
        direct + equivalent, the right-hand side of the solve
    """
    ndof = structure.ndof
    direct = np.zeros(ndof, dtype=float)
    for node_id, load in structure.nodal_loads.items():
        add_nodal_load(direct, structure.node_dofs(node_id), load)

    contributions = [
        (structure.element_dof_map(structure.elements[eid]), ml.equivalent)
        for eid, ml in structure.member_loads.items()
    ]
    equivalent = assemble_global_F(ndof, contributions)
    return direct, equivalent, direct + equivalent

# planeframe/kernel/dof.py
"""
DOF MANAGER: Degree of Freedom Indexing
=======================================

PURPOSE:
--------
Every node owns three DOFs in a fixed order:

    slot 0: ux  (horizontal translation)
    slot 1: uy  (vertical translation)
    slot 2: rz  (rotation, counter-clockwise positive)

Nodes are numbered 1, 2, 3, ... in the order they were added to the
structure, so the global DOF index of node n, slot s is:

    (n - 1) * 3 + s

All index arithmetic in the package goes through `dof_index`, so assembly,
partitioning and recovery can never disagree about where a DOF lives.

USAGE:
------
    dof = DOFManager()
    dof.idx(2, 1)                # node 2, uy → 4
    dof.element_dof_map([1, 2])  # → [0, 1, 2, 3, 4, 5]
"""

from dataclasses import dataclass
from typing import List

DOF_PER_NODE = 3  # ux, uy, rz
DOF_NAMES = ("ux", "uy", "rz")


def dof_index(node_index: int, slot: int, dof_per_node: int = DOF_PER_NODE) -> int:
    """Global DOF index for a 1-based node index and a local slot."""
    if node_index < 1:
        raise ValueError(f"node index must be 1-based, got {node_index}")
    if not 0 <= slot < dof_per_node:
        raise ValueError(f"slot must be in [0, {dof_per_node}), got {slot}")
    return (node_index - 1) * dof_per_node + slot


def split_dof(dof: int, dof_per_node: int = DOF_PER_NODE) -> tuple[int, int]:
    """Inverse of `dof_index`: (1-based node index, slot)."""
    return dof // dof_per_node + 1, dof % dof_per_node


@dataclass(frozen=True)
class DOFManager:
    """
    Maps "node 5, y-displacement" to "global DOF index 13".

    Attributes:
    -----------
    dof_per_node : int
        Number of DOFs per node (3 for the 2D frame: ux, uy, rz)

    Examples:
    ---------
    >>> dof = DOFManager()
    >>> dof.idx(1, 0)
    0
    >>> dof.idx(2, 0)
    3
    >>> dof.ndof(4)
    12
    """
    dof_per_node: int = DOF_PER_NODE

    def idx(self, node_index: int, local_dof: int) -> int:
        return dof_index(node_index, local_dof, self.dof_per_node)

    def ndof(self, n_nodes: int) -> int:
        """Total DOFs (size of K) for a model with n_nodes."""
        return self.dof_per_node * n_nodes

    def node_dofs(self, node_index: int) -> List[int]:
        """
        All global DOF indices of one node.

        >>> DOFManager().node_dofs(3)
        [6, 7, 8]
        """
        return [self.idx(node_index, s) for s in range(self.dof_per_node)]

    def element_dof_map(self, node_indices: List[int]) -> List[int]:
        """
        Scatter/gather indices for an element connecting the given nodes,
        in node order then slot order: [xi, yi, ri, xj, yj, rj].

        >>> DOFManager().element_dof_map([2, 5])
        [3, 4, 5, 12, 13, 14]
        """
        result = []
        for node_index in node_indices:
            result.extend(self.node_dofs(node_index))
        return result


DOF_2D_FRAME = DOFManager(dof_per_node=DOF_PER_NODE)

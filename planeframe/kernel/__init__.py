# planeframe/kernel - Element-agnostic structural analysis core
"""
KERNEL: THE ELEMENT-AGNOSTIC FOUNDATION
=======================================

Assembly and solving don't care what kind of element produced a matrix.
They just need:
- A way to map (node_index, slot) → global_dof_index
- Element matrices already in global coordinates
- Fixed DOF lists
- Load vectors

The ELEMENT formulations (Frame2D, Spring2D) live one level up; the
plumbing here is shared by both.
"""

from .dof import DOFManager, dof_index
from .linalg import extract_submatrix, multiply, scatter_add, solve, transpose
from .solve import partition_dofs, solve_linear

__all__ = [
    'DOFManager', 'dof_index',
    'multiply', 'transpose', 'extract_submatrix', 'scatter_add', 'solve',
    'partition_dofs', 'solve_linear',
]

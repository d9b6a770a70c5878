# planeframe - 2D matrix-stiffness structural solver
"""
PLANEFRAME: Planar Frame, Truss and Spring Analysis
===================================================

This package provides:
- Linear static analysis of 2D frames, pin-ended trusses and axial springs
- Nodal loads plus member point, uniform and symmetric triangular loads
- Displacements, support reactions and member end forces
- A JSON-friendly input/output contract and an HTTP service (api/)

ARCHITECTURE:
-------------
    kernel/         DOF indexing, dense linear algebra, assembly, solve
    model.py        Node, Frame2D, Spring2D and the Structure that owns them
    elements.py     Element stiffness and transformation matrices
    loads.py        Equivalent nodal loads (fixed-end actions)
    assembly.py     Global K and load vectors for a Structure
    post.py         Reactions, member end forces, result summary
    schema.py       Structure definition / analysis result models
    analysis.py     analyze_structure(): the one-call entry point
    viz.py          Deformed-shape plots
"""

from .analysis import analyze_structure, build_structure, run_analysis
from .config import CONFIG, SolverConfig
from .errors import (
    DuplicateId,
    InvalidLoad,
    ModelTooLarge,
    ShapeMismatch,
    SingularMatrix,
    StructureError,
    UnknownElement,
    UnknownNode,
    UnstableStructure,
)
from .model import Structure
from .schema import AnalysisResults, StructureModel

__version__ = "0.1.0"

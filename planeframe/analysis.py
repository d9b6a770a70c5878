# planeframe/analysis.py
"""
ANALYSIS: From Structure Definition to Results
==============================================

One call, one structure, one result set:

    results = analyze_structure({
        "nodes": [{"id": "n1", "x": 0, "y": 0}, {"id": "n2", "x": 4, "y": 0}],
        "members": [{"id": "m1", "startNodeId": "n1", "endNodeId": "n2", "type": "beam"}],
        "supports": [{"nodeId": "n1", "type": "fixed"}],
        "loads": [{"type": "nodal_point", "nodeId": "n2", "magnitudeX": 0, "magnitudeY": -1000}],
    })
    results.is_stable          # True
    results.displacements["n2"].y

PIPELINE:
---------
    build_structure     StructureModel → Structure (nodes, elements, supports, loads)
    run_analysis        assemble K and loads → partition + solve → reactions,
                        member end forces
    analyze_structure   wraps both; any input or stability failure becomes
                        is_stable=False with a message, never partial numbers

Every call builds its own Structure, so calls share no state and can run
on independent threads or processes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np
from pydantic import ValidationError

from .assembly import assemble_global_K, assemble_load_vectors
from .config import CONFIG, SolverConfig
from .errors import StructureError, UnstableStructure
from .kernel.dof import DOF_NAMES, split_dof
from .kernel.linalg import extract_submatrix
from .kernel.solve import solve_linear
from .loads import MemberLoadKind
from .model import FIXED, PIN, ROLLER, Structure
from .post import (
    compute_member_forces,
    compute_nodal_displacements,
    compute_reactions,
    reactions_by_node,
)
from .schema import (
    AnalysisResults,
    Distribution,
    LoadType,
    MemberType,
    StructureModel,
    SupportType,
)

logger = logging.getLogger(__name__)

SUPPORT_FIXITY = {
    SupportType.PIN: PIN,
    SupportType.ROLLER: ROLLER,
    SupportType.FIXED: FIXED,
}

SUCCESS_MESSAGE = "Analysis completed successfully."


@dataclass
class Solution:
    """Everything one analysis pass derives from a Structure."""
    K: np.ndarray
    K_reduced: np.ndarray
    direct_load: np.ndarray
    equivalent_load: np.ndarray
    effective_load: np.ndarray
    free: np.ndarray
    fixed: np.ndarray
    displacements: np.ndarray
    reactions: np.ndarray                   # one value per fixed DOF
    member_forces: Dict[str, np.ndarray]    # local [N_i, V_i, M_i, N_j, V_j, M_j]


def build_structure(model: StructureModel, config: Optional[SolverConfig] = None) -> Structure:
    """
    Translate a validated structure definition into a Structure.

    Raises:
        DuplicateId, UnknownNode, UnknownElement, ModelTooLarge
    """
    config = config or CONFIG
    structure = Structure(config)

    for n in model.nodes:
        structure.add_node(n.id, n.x, n.y)

    for m in model.members:
        if m.type is MemberType.SPRING:
            k = m.spring_constant if m.spring_constant is not None else config.default_spring_constant
            structure.add_spring(m.id, m.start_node_id, m.end_node_id, k)
            continue
        E = m.e_modulus if m.e_modulus is not None else config.default_e_modulus
        A = m.area if m.area is not None else config.default_area
        if m.type is MemberType.TRUSS:
            # Pin-ended: no bending stiffness
            I = 0.0
        else:
            I = m.moment_inertia if m.moment_inertia is not None else config.default_moment_inertia
        structure.add_frame(m.id, m.start_node_id, m.end_node_id, E, A, I)

    for s in model.supports:
        structure.add_support(s.node_id, SUPPORT_FIXITY[s.type])

    for load in model.loads:
        if load.type is LoadType.NODAL_POINT:
            structure.add_nodal_load(
                load.node_id,
                [load.magnitude_x, load.magnitude_y, load.moment or 0.0],
            )
        elif load.type is LoadType.MEMBER_POINT:
            structure.add_member_load(
                load.member_id, MemberLoadKind.POINT, load.magnitude_y, load.location
            )
        else:
            kind = (MemberLoadKind.TRIANGULAR_SYM
                    if load.distribution is Distribution.TRIANGULAR
                    else MemberLoadKind.UDL)
            structure.add_member_load(load.member_id, kind, load.magnitude_y)

    return structure


def _describe_dof(structure: Structure, dof: int) -> str:
    node_index, slot = split_dof(dof)
    for node in structure.nodes.values():
        if node.index == node_index:
            return f"node '{node.id}', {DOF_NAMES[slot]}"
    return f"DOF {dof}"


def run_analysis(structure: Structure) -> Solution:
    """
    Assemble, solve and post-process one structure.

    Raises:
        UnstableStructure: If the structure is a mechanism
    """
    config = structure.config
    K = assemble_global_K(structure)
    direct, equivalent, effective = assemble_load_vectors(structure)

    try:
        d, free, fixed = solve_linear(
            K,
            effective,
            structure.fixed_dofs(),
            pivot_tolerance=config.pivot_tolerance,
            zero_stiffness_tolerance=config.zero_stiffness_tolerance,
        )
    except UnstableStructure as e:
        if e.dof is None:
            raise
        raise UnstableStructure(f"{e} ({_describe_dof(structure, e.dof)})", dof=e.dof) from e

    R = compute_reactions(K, d, effective, fixed)
    member_forces = compute_member_forces(structure, d)

    return Solution(
        K=K,
        K_reduced=extract_submatrix(K, free, free),
        direct_load=direct,
        equivalent_load=equivalent,
        effective_load=effective,
        free=free,
        fixed=fixed,
        displacements=d,
        reactions=R,
        member_forces=member_forces,
    )


def _failure(message: str) -> AnalysisResults:
    return AnalysisResults(is_stable=False, message=message)


def analyze_structure(
    model: Union[StructureModel, Mapping[str, Any]],
    include_matrices: bool = True,
    config: Optional[SolverConfig] = None,
) -> AnalysisResults:
    """
    Analyze a structure definition.

    Parameters:
    -----------
    model : StructureModel or mapping
        Structure definition; mappings are validated first
    include_matrices : bool
        Attach K and the reduced K for diagnostic/report consumers
    config : SolverConfig, optional
        Defaults and numerical guards (falls back to CONFIG)

    Returns:
    --------
    AnalysisResults
        is_stable=True with displacements, reactions and member forces,
        or is_stable=False with a message and empty result maps.
    """
    try:
        if not isinstance(model, StructureModel):
            model = StructureModel.model_validate(model)
        structure = build_structure(model, config)
        solution = run_analysis(structure)
    except ValidationError as e:
        logger.warning("Invalid structure definition: %s", e)
        return _failure(f"Invalid input: {e.error_count()} validation error(s). {e.errors()[0]['msg']}")
    except UnstableStructure as e:
        logger.warning("Unstable structure: %s", e)
        return _failure(f"Structure is unstable: {e}")
    except StructureError as e:
        logger.warning("Invalid structure definition: %s", e)
        return _failure(f"Invalid input: {e}")

    displacements = compute_nodal_displacements(structure, solution.displacements)
    reactions = reactions_by_node(structure, solution.fixed, solution.reactions)
    member_forces = {
        eid: {
            'start': {'fx': float(f[0]), 'fy': float(f[1]), 'moment': float(f[2])},
            'end': {'fx': float(f[3]), 'fy': float(f[4]), 'moment': float(f[5])},
        }
        for eid, f in solution.member_forces.items()
    }

    logger.info("Analyzed %d nodes, %d members (%d free DOFs)",
                len(structure.nodes), len(structure.elements), len(solution.free))

    return AnalysisResults(
        displacements=displacements,
        reactions=reactions,
        member_forces=member_forces,
        stiffness_matrix=solution.K.tolist() if include_matrices else None,
        reduced_stiffness_matrix=solution.K_reduced.tolist() if include_matrices else None,
        is_stable=True,
        message=SUCCESS_MESSAGE,
    )

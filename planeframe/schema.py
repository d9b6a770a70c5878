# planeframe/schema.py
"""
Input / output contract of the solver.

Field names are camelCase on the wire (startNodeId, magnitudeY, isStable,
...) and snake_case in Python; both spellings are accepted on input.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _InputModel(_CamelModel):
    # Every number in a structure definition must be finite
    model_config = ConfigDict(allow_inf_nan=False)


class MemberType(str, Enum):
    BEAM = "beam"
    TRUSS = "truss"    # frame formulation with I forced to 0
    SPRING = "spring"


class SupportType(str, Enum):
    PIN = "pin"        # fix x, y
    ROLLER = "roller"  # fix y
    FIXED = "fixed"    # fix x, y, rotation


class LoadType(str, Enum):
    NODAL_POINT = "nodal_point"
    MEMBER_POINT = "member_point"
    MEMBER_DISTRIBUTED = "member_distributed"


class Distribution(str, Enum):
    UNIFORM = "uniform"
    TRIANGULAR = "triangular"  # symmetric, peak at midspan


# =============================================================================
# Structure definition (input)
# =============================================================================

class NodeData(_InputModel):
    id: str
    x: float
    y: float
    label: Optional[str] = None


class MemberData(_InputModel):
    """Member definition. Unset properties fall back to the solver defaults."""
    id: str
    start_node_id: str
    end_node_id: str
    type: MemberType
    e_modulus: Optional[float] = Field(None, gt=0, description="Young's modulus (Pa)")
    area: Optional[float] = Field(None, gt=0, description="Section area (m²)")
    moment_inertia: Optional[float] = Field(None, ge=0, description="Second moment of area (m⁴)")
    spring_constant: Optional[float] = Field(None, gt=0, description="Spring stiffness (N/m)")


class SupportData(_InputModel):
    id: Optional[str] = None
    node_id: str
    type: SupportType


class LoadData(_InputModel):
    """
    A nodal or member load.

    Nodal loads use magnitudeX, magnitudeY and moment. Member loads use
    magnitudeY as the force (point) or intensity (distributed); location is
    the distance from the start node for member point loads.
    """
    id: Optional[str] = None
    type: LoadType
    node_id: Optional[str] = None
    member_id: Optional[str] = None
    magnitude_x: float = 0.0
    magnitude_y: float = 0.0
    moment: Optional[float] = None
    location: Optional[float] = Field(None, ge=0)
    distribution: Distribution = Distribution.UNIFORM

    @model_validator(mode="after")
    def _check_target(self):
        if self.type is LoadType.NODAL_POINT and self.node_id is None:
            raise ValueError("nodal_point load requires nodeId")
        if self.type is not LoadType.NODAL_POINT and self.member_id is None:
            raise ValueError(f"{self.type.value} load requires memberId")
        return self


class StructureModel(_InputModel):
    nodes: List[NodeData] = Field(default_factory=list)
    members: List[MemberData] = Field(default_factory=list)
    supports: List[SupportData] = Field(default_factory=list)
    loads: List[LoadData] = Field(default_factory=list)


# =============================================================================
# Analysis results (output)
# =============================================================================

class NodeDisplacement(_CamelModel):
    x: float
    y: float
    rotation: float


class Reaction(_CamelModel):
    fx: float = 0.0
    fy: float = 0.0
    moment: float = 0.0


class EndForces(_CamelModel):
    fx: float
    fy: float
    moment: float


class MemberForces(_CamelModel):
    """Local end forces: fx axial, fy shear, moment, at each member end."""
    start: EndForces
    end: EndForces


class AnalysisResults(_CamelModel):
    displacements: Dict[str, NodeDisplacement] = Field(default_factory=dict)
    reactions: Dict[str, Reaction] = Field(default_factory=dict)
    member_forces: Dict[str, MemberForces] = Field(default_factory=dict)
    stiffness_matrix: Optional[List[List[float]]] = None
    reduced_stiffness_matrix: Optional[List[List[float]]] = None
    is_stable: bool
    message: str

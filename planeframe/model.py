# Node, Frame2D, Spring2D, member loads and the Structure that owns them

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import CONFIG, SolverConfig
from .errors import DuplicateId, ModelTooLarge, UnknownElement, UnknownNode
from .kernel.dof import DOF_2D_FRAME
from .loads import MemberLoadKind, equivalent_nodal_load

logger = logging.getLogger(__name__)

Fixity = Tuple[bool, bool, bool]  # (fix ux, fix uy, fix rz)

FREE: Fixity = (False, False, False)
PIN: Fixity = (True, True, False)
ROLLER: Fixity = (False, True, False)
FIXED: Fixity = (True, True, True)


@dataclass(frozen=True)
class Node:
    id: str
    index: int  # 1-based, in creation order
    x: float
    y: float


@dataclass(frozen=True)
class ElementGeometry:
    L: float
    c: float  # cos θ
    s: float  # sin θ


@dataclass(frozen=True)
class Frame2D:
    """
    2D frame element (Euler–Bernoulli): 2 nodes, 3 DOF per node: (ux, uy, rz).
    A pin-ended truss is a Frame2D with I = 0.
    """
    id: str
    ni: str
    nj: str
    E: float
    A: float
    I: float
    geom: ElementGeometry

    @property
    def EA(self) -> float:
        return self.E * self.A

    @property
    def EI(self) -> float:
        return self.E * self.I


@dataclass(frozen=True)
class Spring2D:
    """Axial spring of stiffness k. No bending or rotational stiffness."""
    id: str
    ni: str
    nj: str
    k: float
    geom: ElementGeometry


Element = Union[Frame2D, Spring2D]


@dataclass(frozen=True)
class MemberLoad:
    kind: MemberLoadKind
    magnitude: float
    location: Optional[float] = None
    equivalent: np.ndarray = field(default=None, compare=False, repr=False)


class Structure:
    """
    A planar structure: nodes, elements, supports and loads.

    Nodes and elements are added once and referenced by their string ids.
    The id → index lookup lives here and is rebuilt with every Structure,
    so nothing leaks between analyses. Supports and loads are mutations on
    existing nodes and elements.

    Example:
    --------
    >>> s = Structure()
    >>> s.add_node("n1", 0.0, 0.0).index
    1
    >>> s.add_node("n2", 4.0, 0.0).index
    2
    >>> s.add_spring("s1", "n1", "n2", k=100.0).geom.L
    4.0
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or CONFIG
        self.dof = DOF_2D_FRAME
        self.nodes: Dict[str, Node] = {}
        self.elements: Dict[str, Element] = {}
        self.supports: Dict[str, Fixity] = {}
        self.nodal_loads: Dict[str, np.ndarray] = {}
        self.member_loads: Dict[str, MemberLoad] = {}

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(self, node_id: str, x: float, y: float) -> Node:
        if node_id in self.nodes:
            raise DuplicateId("node", node_id)
        if len(self.nodes) >= self.config.max_nodes:
            raise ModelTooLarge(
                f"Model exceeds the limit of {self.config.max_nodes} nodes."
            )
        node = Node(id=node_id, index=len(self.nodes) + 1, x=float(x), y=float(y))
        self.nodes[node_id] = node
        return node

    def node(self, node_id: str) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise UnknownNode(node_id) from None

    @property
    def ndof(self) -> int:
        return self.dof.ndof(len(self.nodes))

    def node_dofs(self, node_id: str) -> List[int]:
        return self.dof.node_dofs(self.node(node_id).index)

    # ------------------------------------------------------------------
    # Elements
    # ------------------------------------------------------------------

    def element(self, element_id: str) -> Element:
        try:
            return self.elements[element_id]
        except KeyError:
            raise UnknownElement(element_id) from None

    def element_geometry(self, ni: str, nj: str) -> ElementGeometry:
        """Length and direction cosines from the current node coordinates."""
        a = self.node(ni)
        b = self.node(nj)
        dx = b.x - a.x
        dy = b.y - a.y
        L = float(np.hypot(dx, dy))
        if L == 0.0:
            logger.warning("Zero-length member between '%s' and '%s'; using L=%g",
                           ni, nj, self.config.min_length)
            return ElementGeometry(L=self.config.min_length, c=1.0, s=0.0)
        return ElementGeometry(L=L, c=dx / L, s=dy / L)

    def _check_new_element(self, element_id: str, ni: str, nj: str) -> ElementGeometry:
        if element_id in self.elements:
            raise DuplicateId("member", element_id)
        return self.element_geometry(ni, nj)

    def add_frame(self, element_id: str, ni: str, nj: str,
                  E: float, A: float, I: float) -> Frame2D:
        geom = self._check_new_element(element_id, ni, nj)
        e = Frame2D(element_id, ni, nj, E=float(E), A=float(A), I=float(I), geom=geom)
        self.elements[element_id] = e
        return e

    def add_spring(self, element_id: str, ni: str, nj: str, k: float) -> Spring2D:
        geom = self._check_new_element(element_id, ni, nj)
        e = Spring2D(element_id, ni, nj, k=float(k), geom=geom)
        self.elements[element_id] = e
        return e

    def element_dof_map(self, e: Element) -> List[int]:
        """[xi, yi, ri, xj, yj, rj] for the element's two nodes."""
        return self.dof.element_dof_map([self.node(e.ni).index, self.node(e.nj).index])

    # ------------------------------------------------------------------
    # Supports and loads
    # ------------------------------------------------------------------

    def add_support(self, node_id: str, fixity: Sequence[bool] = FREE) -> None:
        """Set (fix ux, fix uy, fix rz) at a node, replacing any prior support."""
        self.node(node_id)
        if len(fixity) != 3:
            raise ValueError(f"Support fixity needs 3 flags, got {len(fixity)}")
        self.supports[node_id] = tuple(bool(f) for f in fixity)

    def add_nodal_load(self, node_id: str, load: Sequence[float]) -> None:
        """Accumulate [Fx, Fy, Mz] onto a node."""
        self.node(node_id)
        load = np.asarray(load, dtype=float)
        if load.shape != (3,):
            raise ValueError(f"Nodal load needs [Fx, Fy, Mz], got shape {load.shape}")
        existing = self.nodal_loads.get(node_id, np.zeros(3))
        self.nodal_loads[node_id] = existing + load

    def add_member_load(
        self,
        element_id: str,
        kind: Union[MemberLoadKind, str],
        magnitude: float,
        location: Optional[float] = None,
    ) -> np.ndarray:
        """
        Attach a member load and store its equivalent nodal load vector.

        One member load per element: a second call replaces the first.
        Returns the equivalent nodal load [Fx_i, Fy_i, M_i, Fx_j, Fy_j, M_j].
        """
        e = self.element(element_id)
        kind = MemberLoadKind(kind)
        eq = equivalent_nodal_load(kind, e.geom.L, float(magnitude), location)
        if element_id in self.member_loads:
            logger.debug("Replacing member load on '%s'", element_id)
        self.member_loads[element_id] = MemberLoad(kind, float(magnitude), location, eq)
        return eq

    def equivalent_load(self, element_id: str) -> np.ndarray:
        """Element equivalent nodal load, zeros if it carries no member load."""
        ml = self.member_loads.get(element_id)
        if ml is None:
            return np.zeros(6, dtype=float)
        return ml.equivalent.copy()

    def fixed_dofs(self) -> List[int]:
        """Global DOF indices restrained by supports, ascending."""
        fixed = []
        for node_id, fixity in self.supports.items():
            dofs = self.node_dofs(node_id)
            fixed.extend(d for d, f in zip(dofs, fixity) if f)
        return sorted(fixed)

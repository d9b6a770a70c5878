# planeframe/errors.py
"""Exception types raised by the model, the kernel and the solver."""


class StructureError(Exception):
    """Base class for every failure the analysis reports to its caller."""
    pass


class ShapeMismatch(StructureError, ValueError):
    """Matrix operands with incompatible dimensions (internal misuse)."""
    pass


class SingularMatrix(StructureError, ArithmeticError):
    """Raised by the linear solver when a pivot falls below tolerance."""

    def __init__(self, column: int, pivot: float):
        self.column = column
        self.pivot = pivot
        super().__init__(f"Singular matrix: pivot {pivot:.3e} in column {column}")


class UnknownNode(StructureError, KeyError):
    def __init__(self, node_id):
        self.node_id = node_id
        super().__init__(node_id)

    def __str__(self):
        return f"Unknown node '{self.node_id}'"


class UnknownElement(StructureError, KeyError):
    def __init__(self, element_id):
        self.element_id = element_id
        super().__init__(element_id)

    def __str__(self):
        return f"Unknown member '{self.element_id}'"


class DuplicateId(StructureError, ValueError):
    def __init__(self, kind: str, item_id):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Duplicate {kind} id '{item_id}'")


class InvalidLoad(StructureError, ValueError):
    """A member load that cannot act on its member, e.g. a point load past its end."""
    pass


class ModelTooLarge(StructureError, ValueError):
    """The model exceeds the configured node limit for dense analysis."""
    pass


class UnstableStructure(StructureError, RuntimeError):
    """Reduced stiffness matrix is singular: the structure is a mechanism.

    `dof` is the global DOF index at which the singularity was detected,
    when it is known.
    """

    def __init__(self, message: str, dof=None):
        self.dof = dof
        super().__init__(message)

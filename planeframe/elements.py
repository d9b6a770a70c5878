# Frame2D / Spring2D element stiffness + transformation

import numpy as np

from .kernel.linalg import multiply, transpose
from .model import Frame2D, Spring2D

# Spring local slots [xi, yi, xj, yj] inside the 6-DOF frame layout
SPRING_SLOTS = [0, 1, 3, 4]


def frame2d_local_stiffness(E: float, A: float, I: float, L: float) -> np.ndarray:
    """
    Local stiffness matrix in element local coords (x along member).
    DOF order: [axial_i, shear_i, moment_i, axial_j, shear_j, moment_j]
    """
    c1 = E * A / L
    c2 = E * I / L**3
    L2 = L * L

    k = np.array([
        [ c1,        0.0,         0.0,   -c1,        0.0,         0.0],
        [0.0,    12 * c2,  6 * c2 * L,   0.0,   -12 * c2,  6 * c2 * L],
        [0.0, 6 * c2 * L, 4 * c2 * L2,   0.0, -6 * c2 * L, 2 * c2 * L2],
        [-c1,        0.0,         0.0,    c1,        0.0,         0.0],
        [0.0,   -12 * c2, -6 * c2 * L,   0.0,    12 * c2, -6 * c2 * L],
        [0.0, 6 * c2 * L, 2 * c2 * L2,   0.0, -6 * c2 * L, 4 * c2 * L2],
    ], dtype=float)
    return k


def spring2d_local_stiffness(k: float) -> np.ndarray:
    """
    Local stiffness of an axial spring.
    DOF order: [xi, yi, xj, yj]. No transverse or rotational stiffness.
    """
    return np.array([
        [  k, 0.0,  -k, 0.0],
        [0.0, 0.0, 0.0, 0.0],
        [ -k, 0.0,   k, 0.0],
        [0.0, 0.0, 0.0, 0.0],
    ], dtype=float)


def frame2d_transform(c: float, s: float, dof: int = 6) -> np.ndarray:
    """
    Transform from global DOFs to local DOFs.

    dof=6 gives the full frame matrix; dof=4 drops the rotational rows and
    columns (2 and 5) for the translational-only spring.
    """
    T = np.array([
        [ c,  s, 0,  0, 0, 0],
        [-s,  c, 0,  0, 0, 0],
        [ 0,  0, 1,  0, 0, 0],
        [ 0,  0, 0,  c, s, 0],
        [ 0,  0, 0, -s, c, 0],
        [ 0,  0, 0,  0, 0, 1],
    ], dtype=float)
    if dof == 6:
        return T
    if dof == 4:
        return T[np.ix_(SPRING_SLOTS, SPRING_SLOTS)]
    raise ValueError(f"dof must be 4 or 6, got {dof}")


def expand_to_frame_layout(k4: np.ndarray) -> np.ndarray:
    """Place a 4×4 translational block into the 6×6 frame layout."""
    k6 = np.zeros((6, 6), dtype=float)
    k6[np.ix_(SPRING_SLOTS, SPRING_SLOTS)] = k4
    return k6


def element_local_stiffness(e) -> np.ndarray:
    """6×6 local stiffness of any element (springs expanded)."""
    if isinstance(e, Frame2D):
        return frame2d_local_stiffness(e.E, e.A, e.I, e.geom.L)
    if isinstance(e, Spring2D):
        return expand_to_frame_layout(spring2d_local_stiffness(e.k))
    raise TypeError(f"Unsupported element type: {type(e).__name__}")


def element_global_stiffness(e) -> np.ndarray:
    """
    6×6 element stiffness in global coords: Tᵀ·k_local·T.

    Springs are rotated with the 4×4 transform, then expanded so that
    rotational slots 2 and 5 stay zero.
    """
    c, s = e.geom.c, e.geom.s
    if isinstance(e, Frame2D):
        k_local = frame2d_local_stiffness(e.E, e.A, e.I, e.geom.L)
        T = frame2d_transform(c, s)
        return multiply(transpose(T), multiply(k_local, T))
    if isinstance(e, Spring2D):
        k_local = spring2d_local_stiffness(e.k)
        T = frame2d_transform(c, s, dof=4)
        return expand_to_frame_layout(multiply(transpose(T), multiply(k_local, T)))
    raise TypeError(f"Unsupported element type: {type(e).__name__}")

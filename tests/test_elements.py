import numpy as np

from planeframe.elements import (
    element_global_stiffness,
    element_local_stiffness,
    expand_to_frame_layout,
    frame2d_local_stiffness,
    frame2d_transform,
    spring2d_local_stiffness,
)
from planeframe.model import Structure


def test_frame_local_stiffness_entries():
    E, A, I, L = 200e9, 0.01, 1e-4, 4.0
    k = frame2d_local_stiffness(E, A, I, L)
    EI = E * I

    assert np.isclose(k[0, 0], E * A / L)
    assert np.isclose(k[0, 3], -E * A / L)
    assert np.isclose(k[1, 1], 12 * EI / L**3)
    assert np.isclose(k[1, 2], 6 * EI / L**2)
    assert np.isclose(k[2, 2], 4 * EI / L)
    assert np.isclose(k[2, 5], 2 * EI / L)
    assert np.isclose(k[4, 5], -6 * EI / L**2)
    np.testing.assert_allclose(k, k.T)


def test_truss_frame_has_no_bending_terms():
    k = frame2d_local_stiffness(200e9, 0.01, 0.0, 3.0)
    bending = [1, 2, 4, 5]
    assert np.all(k[np.ix_(bending, bending)] == 0.0)


def test_spring_local_stiffness():
    k = spring2d_local_stiffness(100.0)
    np.testing.assert_allclose(k, [
        [100, 0, -100, 0],
        [0, 0, 0, 0],
        [-100, 0, 100, 0],
        [0, 0, 0, 0],
    ])


def test_transform_is_orthogonal():
    theta = np.radians(30.0)
    T = frame2d_transform(np.cos(theta), np.sin(theta))
    np.testing.assert_allclose(T @ T.T, np.eye(6), atol=1e-14)

    T4 = frame2d_transform(np.cos(theta), np.sin(theta), dof=4)
    assert T4.shape == (4, 4)
    np.testing.assert_allclose(T4[:2, :2], T[:2, :2])


def test_spring_expansion_leaves_rotations_empty():
    k6 = expand_to_frame_layout(spring2d_local_stiffness(50.0))
    assert np.all(k6[2, :] == 0.0) and np.all(k6[:, 5] == 0.0)
    assert k6[0, 3] == -50.0
    assert k6[3, 3] == 50.0


def test_inclined_spring_global_stiffness():
    """A 45° spring stiffens x and y equally and couples them."""
    s = Structure()
    s.add_node("a", 0.0, 0.0)
    s.add_node("b", 1.0, 1.0)
    spring = s.add_spring("k1", "a", "b", k=100.0)

    kg = element_global_stiffness(spring)
    assert kg.shape == (6, 6)
    assert np.isclose(kg[0, 0], 50.0)
    assert np.isclose(kg[1, 1], 50.0)
    assert np.isclose(kg[0, 1], 50.0)
    assert np.isclose(kg[0, 3], -50.0)
    np.testing.assert_allclose(kg, kg.T, atol=1e-12)
    np.testing.assert_allclose(element_local_stiffness(spring)[[0, 3]][:, [0, 3]],
                               [[100.0, -100.0], [-100.0, 100.0]])


def test_frame_global_stiffness_vertical_member():
    """A vertical column: axial stiffness lands on the global y DOFs."""
    s = Structure()
    s.add_node("base", 0.0, 0.0)
    s.add_node("top", 0.0, 3.0)
    col = s.add_frame("c1", "base", "top", E=200e9, A=0.01, I=1e-4)

    kg = element_global_stiffness(col)
    assert np.isclose(kg[1, 1], 200e9 * 0.01 / 3.0)
    assert np.isclose(kg[0, 0], 12 * 200e9 * 1e-4 / 3.0**3)

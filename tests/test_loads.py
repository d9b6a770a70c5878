# File: tests/test_loads.py
"""
Equivalent nodal loads (fixed-end actions) for member loads.
"""

import numpy as np
import pytest

from planeframe.assembly import assemble_load_vectors
from planeframe.errors import InvalidLoad
from planeframe.loads import (
    MemberLoadKind,
    equivalent_nodal_load,
    frame2d_equiv_nodal_load_point,
    frame2d_equiv_nodal_load_triangular,
    frame2d_equiv_nodal_load_udl,
)
from planeframe.model import Structure


def test_udl_literal_values():
    """w = -10 N/m over L = 5 m: shears -25 N, moments ∓20.833 N·m."""
    f = frame2d_equiv_nodal_load_udl(5.0, -10.0)
    np.testing.assert_allclose(
        f, [0.0, -25.0, -20.833333333333332, 0.0, -25.0, 20.833333333333332],
        rtol=1e-12,
    )


def test_triangular_symmetric():
    L, w = 6.0, -12.0
    f = frame2d_equiv_nodal_load_triangular(L, w)
    # Total load of the triangle is wL/2, shared equally
    assert np.isclose(f[1] + f[4], w * L / 2)
    assert np.isclose(f[2], 5 * w * L**2 / 96)
    assert np.isclose(f[5], -5 * w * L**2 / 96)


def test_point_load_midspan():
    """Centered point load: P/2 each end and ±PL/8."""
    L, P = 4.0, -10000.0
    f = frame2d_equiv_nodal_load_point(L, P, 2.0)
    np.testing.assert_allclose(f, [0.0, P / 2, P * L / 8, 0.0, P / 2, -P * L / 8])


def test_point_load_default_location_is_midspan():
    np.testing.assert_allclose(
        frame2d_equiv_nodal_load_point(4.0, -100.0),
        frame2d_equiv_nodal_load_point(4.0, -100.0, 2.0),
    )


def test_point_load_off_center():
    L, P, a = 5.0, 1000.0, 1.0
    b = L - a
    f = frame2d_equiv_nodal_load_point(L, P, a)
    assert np.isclose(f[1] + f[4], P)
    assert np.isclose(f[2], P * a * b**2 / L**2)
    assert np.isclose(f[5], -P * a**2 * b / L**2)
    # Closer to node i, so node i takes more
    assert f[1] > f[4]


def test_point_load_at_node_i():
    f = frame2d_equiv_nodal_load_point(3.0, 500.0, 0.0)
    np.testing.assert_allclose(f, [0.0, 500.0, 0.0, 0.0, 0.0, 0.0], atol=1e-12)


def test_point_load_outside_member():
    with pytest.raises(InvalidLoad, match="outside member"):
        frame2d_equiv_nodal_load_point(3.0, 500.0, 3.5)
    # Still a ValueError for plain callers
    with pytest.raises(ValueError):
        frame2d_equiv_nodal_load_point(3.0, 500.0, 3.5)


def test_dispatch_by_kind_name():
    np.testing.assert_allclose(
        equivalent_nodal_load("udl", 5.0, -10.0),
        frame2d_equiv_nodal_load_udl(5.0, -10.0),
    )
    np.testing.assert_allclose(
        equivalent_nodal_load(MemberLoadKind.TRIANGULAR_SYM, 5.0, -10.0),
        frame2d_equiv_nodal_load_triangular(5.0, -10.0),
    )


def test_udl_assembly_simple_beam():
    """
    Two-element beam with a UDL on both elements: the middle node collects
    wL/2 from each side and the end moments cancel there.
    """
    L = 4.0
    s = Structure()
    s.add_node("n1", 0.0, 0.0)
    s.add_node("n2", L / 2, 0.0)
    s.add_node("n3", L, 0.0)
    s.add_frame("e1", "n1", "n2", E=210e9, A=0.01, I=8e-6)
    s.add_frame("e2", "n2", "n3", E=210e9, A=0.01, I=8e-6)
    s.add_member_load("e1", "udl", -1000.0)
    s.add_member_load("e2", "udl", -1000.0)
    s.add_nodal_load("n2", [0.0, -500.0, 0.0])

    direct, equivalent, effective = assemble_load_vectors(s)

    assert equivalent.shape == (9,)
    assert np.isclose(equivalent[1], -1000.0)     # n1, uy
    assert np.isclose(equivalent[4], -2000.0)     # n2, uy
    assert np.isclose(equivalent[5], 0.0)         # n2, rz: moments cancel
    assert np.isclose(direct[4], -500.0)
    np.testing.assert_allclose(effective, direct + equivalent)

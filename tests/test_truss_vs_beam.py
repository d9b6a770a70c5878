"""
TEST: Truss vs Beam Members
===========================

Same triangle, same supports, same apex load. Built from "truss" members
the joints transmit no moment; built from "beam" members the apex is a
rigid joint and the members pick up small bending moments. Axial forces
are carried almost entirely the same way in both.
"""

import numpy as np

from planeframe.analysis import analyze_structure

P = -1000.0


def _triangle(member_type):
    return {
        "nodes": [
            {"id": "A", "x": 0.0, "y": 0.0},
            {"id": "B", "x": 2.0, "y": 2.0},
            {"id": "C", "x": 4.0, "y": 0.0},
        ],
        "members": [
            {"id": "AB", "startNodeId": "A", "endNodeId": "B", "type": member_type},
            {"id": "BC", "startNodeId": "B", "endNodeId": "C", "type": member_type},
        ],
        "supports": [
            {"nodeId": "A", "type": "pin"},
            {"nodeId": "C", "type": "pin"},
        ],
        "loads": [
            {"type": "nodal_point", "nodeId": "B", "magnitudeX": 0.0, "magnitudeY": P},
        ],
    }


def test_truss_triangle_statics():
    """Statically determinate: N = P / (2 sin 45°), compression in both bars."""
    results = analyze_structure(_triangle("truss"))
    assert results.is_stable, results.message

    N = abs(P) / (2 * np.sin(np.radians(45.0)))
    for mid in ("AB", "BC"):
        f = results.member_forces[mid]
        assert np.isclose(abs(f.start.fx), N, rtol=1e-9)
        assert np.isclose(f.start.fx, -f.end.fx, rtol=1e-9)
        assert f.end.fx < 0.0  # compression
        assert abs(f.start.moment) < 1e-9
        assert abs(f.end.moment) < 1e-9
        assert abs(f.start.fy) < 1e-9

    # Truss joints don't rotate: those DOFs carry no stiffness and stay at zero
    assert results.displacements["B"].rotation == 0.0
    assert np.isclose(results.reactions["A"].fy, -P / 2, rtol=1e-9)


def test_truss_and_beam_differ_in_moments_not_axial():
    truss = analyze_structure(_triangle("truss"))
    beam = analyze_structure(_triangle("beam"))
    assert truss.is_stable and beam.is_stable

    for mid in ("AB", "BC"):
        ft = truss.member_forces[mid]
        fb = beam.member_forces[mid]

        # Rigid apex joint: nonzero bending moment in the beam version
        assert abs(fb.end.moment if mid == "AB" else fb.start.moment) > 1e-3
        assert abs(ft.end.moment) < 1e-9 and abs(ft.start.moment) < 1e-9

        # Axial forces agree to well under a percent
        assert np.isclose(fb.start.fx, ft.start.fx, rtol=1e-2)
        assert np.isclose(fb.end.fx, ft.end.fx, rtol=1e-2)

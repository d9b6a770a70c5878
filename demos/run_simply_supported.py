"""
DEMO: SIMPLY SUPPORTED BEAM WITH A MIDSPAN POINT LOAD
=====================================================

Pin at the left, roller at the right, one member, a point load at midspan.
Prints displacements, reactions and member end forces, compares them with
the textbook answers, and optionally saves a deformed-shape plot.

    python demos/run_simply_supported.py --load -10000 --plot artifacts/beam.png
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from planeframe.analysis import build_structure, run_analysis
from planeframe.post import compute_nodal_displacements, reactions_by_node
from planeframe.schema import StructureModel


def make_model(L: float, P: float, E: float, A: float, I: float) -> StructureModel:
    return StructureModel.model_validate({
        "nodes": [{"id": "A", "x": 0.0, "y": 0.0}, {"id": "B", "x": L, "y": 0.0}],
        "members": [{
            "id": "beam", "startNodeId": "A", "endNodeId": "B", "type": "beam",
            "eModulus": E, "area": A, "momentInertia": I,
        }],
        "supports": [{"nodeId": "A", "type": "pin"}, {"nodeId": "B", "type": "roller"}],
        "loads": [{
            "type": "member_point", "memberId": "beam",
            "magnitudeX": 0.0, "magnitudeY": P, "location": L / 2,
        }],
    })


def main():
    parser = argparse.ArgumentParser(description="Simply supported beam demo")
    parser.add_argument("--length", type=float, default=4.0, help="Span (m)")
    parser.add_argument("--load", type=float, default=-10000.0, help="Midspan load (N), negative = down")
    parser.add_argument("--E", type=float, default=200e9, help="Young's modulus (Pa)")
    parser.add_argument("--A", type=float, default=0.01, help="Area (m^2)")
    parser.add_argument("--I", type=float, default=1e-4, help="Second moment of area (m^4)")
    parser.add_argument("--plot", type=str, default=None, help="Save deformed shape to this file")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    L, P = args.length, args.load
    structure = build_structure(make_model(L, P, args.E, args.A, args.I))
    solution = run_analysis(structure)

    disp = compute_nodal_displacements(structure, solution.displacements)
    reactions = reactions_by_node(structure, solution.fixed, solution.reactions)
    f = solution.member_forces["beam"]

    print("Simply Supported Beam - Midspan Point Load")
    print("=" * 50)
    for node_id, u in disp.items():
        print(f"Node {node_id}: ux={u['x']:.3e} m  uy={u['y']:.3e} m  rz={u['rotation']:.3e} rad")
    for node_id, r in reactions.items():
        print(f"Reaction {node_id}: Rx={r['fx']:.2f} N  Ry={r['fy']:.2f} N  M={r['moment']:.2f} N·m")
    print(f"Member end forces (local): start V={f[1]:.2f} M={f[2]:.2f} | end V={f[4]:.2f} M={f[5]:.2f}")
    print()
    print("Expected (from textbook):")
    print(f"Reactions: {-P / 2:.2f} N each")
    print(f"End rotation: {P * L**2 / (16 * args.E * args.I):.3e} rad (magnitude)")

    if args.plot:
        from planeframe.viz import plot_deformed
        plot_deformed(structure, solution.displacements, args.plot,
                      title="Simply Supported Beam: Deformed Shape")
        print(f"Plot saved to: {args.plot}")


if __name__ == "__main__":
    main()

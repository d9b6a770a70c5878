"""
VISUALIZATION: UNDEFORMED AND DEFORMED SHAPE
============================================

Draws a solved structure for a quick visual check:

- Undeformed members (solid) and the deformed shape (dashed)
- Supports drawn by fixity: triangle = pin, circle = roller,
  hatched block = fixed
- Springs drawn thinner than frame members

Real deflections are millimeters on a structure of meters, so the
deformed shape is exaggerated by a scale factor. With scale=None the
factor is chosen so the largest translation is drawn as 10% of the
structure's overall size.
"""

import os
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from .model import FIXED, PIN, Spring2D, Structure

COLORS = {
    'undeformed': '#2C3E50',   # Dark blue-gray
    'deformed': '#E74C3C',     # Coral red
    'spring': '#3498DB',       # Sky blue
    'support': '#27AE60',      # Green
    'grid': '#E0E0E0',
}


def auto_scale(structure: Structure, d: np.ndarray, fraction: float = 0.1) -> float:
    """Scale so the largest nodal translation is `fraction` of the extent."""
    if not structure.nodes:
        return 1.0
    xs = [n.x for n in structure.nodes.values()]
    ys = [n.y for n in structure.nodes.values()]
    extent = max(max(xs) - min(xs), max(ys) - min(ys), 1.0)
    u_max = 0.0
    for node in structure.nodes.values():
        ux, uy, _ = (d[dof] for dof in structure.dof.node_dofs(node.index))
        u_max = max(u_max, float(np.hypot(ux, uy)))
    if u_max == 0.0:
        return 1.0
    return fraction * extent / u_max


def plot_deformed(
    structure: Structure,
    d: np.ndarray,
    outpath: Optional[str] = None,
    scale: Optional[float] = None,
    title: str = "Deformed Shape",
):
    """
    Plot undeformed and deformed geometry of a solved structure.

    Parameters:
    -----------
    structure : Structure
        The analyzed structure
    d : np.ndarray
        Global displacement vector, shape (3 × n_nodes,)
    outpath : str, optional
        Save to this file (.png, .pdf, .svg) and close the figure.
        If None, the figure is returned open.
    scale : float, optional
        Deformation exaggeration; chosen automatically if None
    title : str
        Plot title

    Returns:
    --------
    matplotlib.figure.Figure or None
    """
    if scale is None:
        scale = auto_scale(structure, d)

    undeformed = {}
    deformed = {}
    for node_id, node in structure.nodes.items():
        ux, uy, _ = (d[dof] for dof in structure.dof.node_dofs(node.index))
        undeformed[node_id] = (node.x, node.y)
        deformed[node_id] = (node.x + scale * ux, node.y + scale * uy)

    fig, ax = plt.subplots(figsize=(10, 6))

    for i, e in enumerate(structure.elements.values()):
        is_spring = isinstance(e, Spring2D)
        (xi, yi), (xj, yj) = undeformed[e.ni], undeformed[e.nj]
        ax.plot([xi, xj], [yi, yj], '-',
                color=COLORS['spring'] if is_spring else COLORS['undeformed'],
                linewidth=1.5 if is_spring else 3,
                label='Undeformed' if i == 0 else None, zorder=1)
        (xi, yi), (xj, yj) = deformed[e.ni], deformed[e.nj]
        ax.plot([xi, xj], [yi, yj], '--', color=COLORS['deformed'], linewidth=2,
                label=f'Deformed (×{scale:.3g})' if i == 0 else None, zorder=2)

    if undeformed:
        xs, ys = zip(*undeformed.values())
        ax.plot(xs, ys, 'o', color=COLORS['undeformed'], markersize=6, zorder=3)

    size = 0.03 * max([1.0] + [abs(v) for xy in undeformed.values() for v in xy])
    for node_id, fixity in structure.supports.items():
        x, y = undeformed[node_id]
        if fixity == FIXED:
            ax.add_patch(plt.Rectangle((x - size, y - size), 2 * size, size,
                                       hatch='///', fill=False,
                                       edgecolor=COLORS['support'], zorder=4))
        elif fixity == PIN:
            ax.plot([x - size, x, x + size, x - size], [y - size, y, y - size, y - size],
                    '-', color=COLORS['support'], linewidth=2, zorder=4)
        elif any(fixity):
            ax.add_patch(plt.Circle((x, y - size / 2), size / 2, fill=False,
                                    edgecolor=COLORS['support'], linewidth=2, zorder=4))

    ax.set_xlabel('x (m)')
    ax.set_ylabel('y (m)')
    ax.set_title(title, fontweight='bold')
    ax.grid(True, color=COLORS['grid'], linestyle='--')
    if structure.elements:
        ax.legend(loc='best', fontsize=9)
    ax.set_aspect('equal', adjustable='datalim')

    if outpath is None:
        return fig

    os.makedirs(os.path.dirname(outpath) or '.', exist_ok=True)
    fig.tight_layout()
    fig.savefig(outpath, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return None

# planeframe/kernel/linalg.py
"""
DENSE LINEAR ALGEBRA PRIMITIVES
===============================

The handful of matrix operations the stiffness method needs:

    multiply           A·B or A·x, with an explicit shape check
    transpose          Aᵀ
    extract_submatrix  gather M[rows, cols] (reduce K to free DOFs, or take
                       the fixed-DOF rows of K for reactions)
    scatter_add        target[rows, cols] += source (the assembly primitive)
    solve              Gaussian elimination with partial pivoting

`solve` never guesses. If a pivot vanishes, the system is singular and the
caller gets a SingularMatrix exception with the offending column; deciding
what a singular system means (an unstable structure) is the solver's job.
"""

import numpy as np
from typing import Sequence

from ..errors import ShapeMismatch, SingularMatrix


def multiply(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """Matrix×matrix or matrix×vector product."""
    A = np.asarray(A, dtype=float)
    B = np.asarray(B, dtype=float)
    if A.ndim != 2 or B.ndim not in (1, 2):
        raise ShapeMismatch(f"Cannot multiply shapes {A.shape} and {B.shape}")
    if A.shape[1] != B.shape[0]:
        raise ShapeMismatch(
            f"Inner dimensions disagree: {A.shape} x {B.shape}"
        )
    return A @ B


def transpose(A: np.ndarray) -> np.ndarray:
    return np.asarray(A, dtype=float).T.copy()


def extract_submatrix(M: np.ndarray, rows: Sequence[int], cols: Sequence[int]) -> np.ndarray:
    """New matrix with entry (i, j) = M[rows[i], cols[j]]."""
    rows = np.asarray(rows, dtype=int)
    cols = np.asarray(cols, dtype=int)
    return np.asarray(M, dtype=float)[np.ix_(rows, cols)].copy()


def scatter_add(
    target: np.ndarray,
    source: np.ndarray,
    rows: Sequence[int],
    cols: Sequence[int],
) -> None:
    """
    In-place accumulation target[rows[i], cols[j]] += source[i, j].

    Always adds: several elements share each node, so their contributions
    to the same DOF must sum.
    """
    if source.shape != (len(rows), len(cols)):
        raise ShapeMismatch(
            f"Source shape {source.shape} doesn't match index map "
            f"({len(rows)}, {len(cols)})"
        )
    for a in range(len(rows)):
        ia = rows[a]
        for b in range(len(cols)):
            ib = cols[b]
            target[ia, ib] += source[a, b]


def solve(A: np.ndarray, b: np.ndarray, tol: float = 1e-12) -> np.ndarray:
    """
    Solve A·x = b by Gaussian elimination with partial pivoting.

    Parameters:
    -----------
    A : np.ndarray
        Square coefficient matrix (n, n). Not modified.
    b : np.ndarray
        Right-hand side (n,). Not modified.
    tol : float
        Pivot threshold, relative to the largest absolute entry of A.
        Stiffness entries are typically ~1e9, so an absolute threshold
        would miss round-off residue left by a singular system.

    Returns:
    --------
    np.ndarray
        Solution vector x, shape (n,)

    Raises:
    -------
    ShapeMismatch
        If A is not square or b has the wrong length
    SingularMatrix
        If any pivot satisfies |pivot| < tol * max|A|
    """
    M = np.array(A, dtype=float)
    x = np.array(b, dtype=float)
    n = M.shape[0]
    if M.ndim != 2 or M.shape[1] != n:
        raise ShapeMismatch(f"Coefficient matrix must be square, got {M.shape}")
    if x.shape != (n,):
        raise ShapeMismatch(f"Right-hand side shape {x.shape} doesn't match ({n},)")
    if n == 0:
        return x

    scale = float(np.max(np.abs(M)))
    threshold = tol * scale if scale > 0.0 else tol

    # Forward elimination
    for i in range(n):
        # Largest-magnitude pivot in column i, at or below the diagonal
        p = i + int(np.argmax(np.abs(M[i:, i])))
        if p != i:
            M[[i, p]] = M[[p, i]]
            x[[i, p]] = x[[p, i]]

        pivot = M[i, i]
        if abs(pivot) < threshold:
            raise SingularMatrix(i, float(pivot))

        for k in range(i + 1, n):
            factor = M[k, i] / pivot
            if factor == 0.0:
                continue
            M[k, i:] -= factor * M[i, i:]
            x[k] -= factor * x[i]

    # Back substitution
    res = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        s = M[i, i + 1:] @ res[i + 1:]
        res[i] = (x[i] - s) / M[i, i]
    return res

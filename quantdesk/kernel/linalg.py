"""Minimal dense linear algebra for small (N <= ~20) matrices.

Matrices are lists of row lists. Nothing here is tuned for large inputs.
"""
import math

from quantdesk.errors import NotPositiveDefiniteError

Matrix = list[list[float]]

DEFAULT_PIVOT_FLOOR = 1e-12


def zeros(rows: int, cols: int) -> Matrix:
    return [[0.0] * cols for _ in range(rows)]


def mat_mul(a: Matrix, b: Matrix) -> Matrix:
    """C = A x B for A (m x k) and B (k x n)."""
    m, k, n = len(a), len(b), len(b[0])
    c = zeros(m, n)
    for i in range(m):
        row = c[i]
        for l in range(k):
            a_il = a[i][l]
            if a_il == 0.0:
                continue
            b_row = b[l]
            for j in range(n):
                row[j] += a_il * b_row[j]
    return c


def transpose(a: Matrix) -> Matrix:
    return [list(col) for col in zip(*a)]


def mat_vec(a: Matrix, v: list[float]) -> list[float]:
    return [sum(a_ij * v_j for a_ij, v_j in zip(row, v)) for row in a]


def dot(u: list[float], v: list[float]) -> float:
    return sum(x * y for x, y in zip(u, v))


def quadratic_form(w: list[float], m: Matrix) -> float:
    """w' M w"""
    return dot(w, mat_vec(m, w))


def cholesky(m: Matrix, pivot_floor: float | None = DEFAULT_PIVOT_FLOOR) -> Matrix:
    """Lower-triangular L with M = L L'.

    Diagonal pivots below ``pivot_floor`` are clamped to it. With
    ``pivot_floor=None`` a non-positive pivot raises NotPositiveDefiniteError.
    """
    n = len(m)
    lower = zeros(n, n)
    for i in range(n):
        for j in range(i + 1):
            s = sum(lower[i][k] * lower[j][k] for k in range(j))
            if i == j:
                pivot = m[i][i] - s
                if pivot_floor is None:
                    if pivot <= 0.0:
                        raise NotPositiveDefiniteError(i, pivot)
                else:
                    pivot = max(pivot, pivot_floor)
                lower[i][j] = math.sqrt(pivot)
            else:
                lower[i][j] = (m[i][j] - s) / lower[j][j]
    return lower


def invert_lower_triangular(lower: Matrix) -> Matrix:
    """Inverse of a lower-triangular matrix by forward substitution."""
    n = len(lower)
    inv = zeros(n, n)
    for i in range(n):
        inv[i][i] = 1.0 / lower[i][i]
        for j in range(i + 1, n):
            s = sum(lower[j][k] * inv[k][i] for k in range(i, j))
            inv[j][i] = -s / lower[j][j]
    return inv


def invert_spd(m: Matrix, pivot_floor: float | None = DEFAULT_PIVOT_FLOOR) -> Matrix:
    """Inverse of a symmetric positive-definite matrix.

    M = L L'  =>  M^-1 = (L^-1)' L^-1
    """
    l_inv = invert_lower_triangular(cholesky(m, pivot_floor))
    return mat_mul(transpose(l_inv), l_inv)

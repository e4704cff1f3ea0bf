"""
pointtrack - Dense Matrix Algebra
=================================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

Small dense matrix primitives shared by every filter.

A matrix is a non-empty, rectangular, row-major 2-D float64 array. Every
function accepts anything ``numpy.asarray`` turns into such an array
(nested lists included), validates it, and returns a freshly allocated
result. Operands are never modified.

The product and the Cholesky factor are written as explicit accumulation
loops so that every entry is summed in ascending index order, which keeps
results bit-for-bit reproducible across BLAS builds.
"""

import math
from typing import Sequence

import numpy as np

from .errors import (
    DimensionMismatch,
    IncompatibleDimensions,
    InvalidMatrix,
    SingularMatrix,
)

Matrix = np.ndarray


def as_matrix(A) -> Matrix:
    """Validate and copy ``A`` into a new float64 matrix."""
    try:
        M = np.array(A, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidMatrix(f"Not a rectangular matrix: {exc}") from exc
    if M.ndim != 2 or M.shape[0] == 0 or M.shape[1] == 0:
        raise InvalidMatrix(f"Expected a non-empty 2-D matrix, got shape {M.shape}")
    return M


def column_vector(values: Sequence[float]) -> Matrix:
    """Build an (n x 1) column from a flat sequence."""
    return as_matrix(np.asarray(values, dtype=np.float64).reshape(-1, 1))


def _same_shape(A: Matrix, B: Matrix, op: str) -> None:
    if A.shape != B.shape:
        raise DimensionMismatch(
            f"Cannot {op} matrices of shape {A.shape} and {B.shape}"
        )


def add(A, B) -> Matrix:
    """Element-wise ``A + B``."""
    A, B = as_matrix(A), as_matrix(B)
    _same_shape(A, B, "add")
    return A + B


def sub(A, B) -> Matrix:
    """Element-wise ``A - B``."""
    A, B = as_matrix(A), as_matrix(B)
    _same_shape(A, B, "subtract")
    return A - B


def mul(A, B) -> Matrix:
    """
    Matrix product ``A @ B``.

    Entry ``C[i, j]`` is accumulated as ``sum(A[i, k] * B[k, j])`` for
    ``k = 0, 1, ...`` in that order, starting from 0.0.

    Raises:
        IncompatibleDimensions: if ``cols(A) != rows(B)``.
    """
    A, B = as_matrix(A), as_matrix(B)
    if A.shape[1] != B.shape[0]:
        raise IncompatibleDimensions(
            f"Matrix dimensions are not compatible for multiplication: "
            f"{A.shape} x {B.shape}"
        )
    C = np.zeros((A.shape[0], B.shape[1]))
    for k in range(A.shape[1]):
        C += np.outer(A[:, k], B[k, :])
    return C


def transpose(A) -> Matrix:
    return as_matrix(A).T.copy()


def scalar_mul(A, s: float) -> Matrix:
    return as_matrix(A) * s


def identity(n: int) -> Matrix:
    if n < 1:
        raise InvalidMatrix(f"Identity size must be positive, got {n}")
    return np.eye(n)


def column(A, j: int) -> Matrix:
    """Column ``j`` of ``A`` as an (rows x 1) matrix."""
    A = as_matrix(A)
    return A[:, j:j + 1].copy()


def outer(u, v) -> Matrix:
    """``u @ v.T`` for column vectors ``u`` and ``v``."""
    return mul(u, transpose(v))


def inverse_2x2(A) -> Matrix:
    """
    Closed-form inverse of a 2x2 matrix.

    The determinant is compared with zero exactly; nearly singular input
    is inverted as-is.

    Raises:
        DimensionMismatch: if ``A`` is not 2x2.
        SingularMatrix: if the determinant is exactly zero.
    """
    A = as_matrix(A)
    if A.shape != (2, 2):
        raise DimensionMismatch(f"Expected a 2x2 matrix, got shape {A.shape}")
    det = A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0]
    if det == 0:
        raise SingularMatrix("Matrix is singular and cannot be inverted.")
    inv_det = 1.0 / det
    return np.array([
        [A[1, 1] * inv_det, -A[0, 1] * inv_det],
        [-A[1, 0] * inv_det, A[0, 0] * inv_det],
    ])


def cholesky(A) -> Matrix:
    """
    Lower-triangular ``L`` with ``A ~= L @ L.T``.

    Intended for symmetric positive (semi)definite covariances. A negative
    diagonal radicand left over from rounding is clamped to zero, and when
    a pivot ``L[j, j]`` is zero the entries below it stay zero. The
    factorization therefore never fails on square input; a collapsed axis
    simply contributes a zero column.

    Raises:
        DimensionMismatch: if ``A`` is not square.
    """
    A = as_matrix(A)
    n = A.shape[0]
    if A.shape[1] != n:
        raise DimensionMismatch(f"Cholesky needs a square matrix, got shape {A.shape}")

    L = np.zeros((n, n))
    for i in range(n):
        for j in range(i + 1):
            s = 0.0
            for k in range(j):
                s += L[i, k] * L[j, k]
            if i == j:
                val = A[i, i] - s
                L[i, j] = math.sqrt(val) if val > 0 else 0.0
            elif L[j, j] != 0:
                L[i, j] = 1.0 / L[j, j] * (A[i, j] - s)
    return L


def readonly(A) -> Matrix:
    """Validated copy of ``A`` that rejects in-place writes."""
    M = as_matrix(A)
    M.setflags(write=False)
    return M

"""
pointtrack - Exceptions
=======================
Copyright (C) 2026 pointtrack contributors
License: AGPL-3.0-or-later

All errors raised by the matrix primitives and the filters derive from
``PointTrackError``. Matrix errors also derive from ``ValueError`` so code
that only expects bad-input errors keeps working.
"""


class PointTrackError(Exception):
    """Base exception for pointtrack."""


class MatrixError(PointTrackError, ValueError):
    """Raised by the dense matrix primitives."""


class InvalidMatrix(MatrixError):
    """Input is not a non-empty rectangular 2-D matrix."""


class DimensionMismatch(MatrixError):
    """Element-wise operation on matrices of different shapes."""


class IncompatibleDimensions(MatrixError):
    """Matrix product with ``cols(A) != rows(B)``."""


class SingularMatrix(MatrixError):
    """Determinant is exactly zero."""


class InvalidParameter(PointTrackError, ValueError):
    """Filter or noise parameter outside its valid range."""


# A filter call fails only through the matrix layer; a caller drops the
# tick and keeps the previous state when it sees one of these.
FilterError = MatrixError

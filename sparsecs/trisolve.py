"""Sparse triangular solves."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Any

from .matrix import CsMat, SparseVector


class SingularMatrixError(ArithmeticError):
    """Raised when a triangular system has a zero on its diagonal."""

    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"singular matrix at index {index}: {reason}")
        self.index = index
        self.reason = reason


def _check_dimensions(mat: CsMat, dim: int) -> None:
    if mat.rows() != mat.cols():
        raise ValueError("Non square matrix passed to solver")
    if mat.cols() != dim:
        raise ValueError("Dimension mismatch")


def _require_csr(mat: CsMat) -> None:
    if not mat.is_csr():
        raise ValueError("Storage mismatch")


def _require_csc(mat: CsMat) -> None:
    if not mat.is_csc():
        raise ValueError("Storage mismatch")


def lsolve_csr_dense_rhs(lower_tri_mat: CsMat, rhs: MutableSequence[Any]) -> None:
    """Solve ``L x = rhs`` in place for a CSR matrix, ignoring its upper part."""
    _check_dimensions(lower_tri_mat, len(rhs))
    _require_csr(lower_tri_mat)
    # | L_0_0    0     | | x_0 |    | b_0 |
    # | l_1_0^T  l_1_1 | | x_1 |  = | b_1 |
    for row_ind, row in enumerate(lower_tri_mat.outer_iterator()):
        diag_val: Any = 0
        x = rhs[row_ind]
        for col_ind, val in row:
            if col_ind == row_ind:
                diag_val = val
            elif col_ind < row_ind:
                x = x - val * rhs[col_ind]
        if diag_val == 0:
            raise SingularMatrixError(row_ind, "diagonal element is 0")
        rhs[row_ind] = x / diag_val


def _process_csc_col(
    col: SparseVector, col_ind: int, rhs: MutableSequence[Any], lower: bool
) -> None:
    diag_val = col.get(col_ind)
    if diag_val is None:
        raise SingularMatrixError(col_ind, "diagonal element is a structural 0")
    if diag_val == 0:
        raise SingularMatrixError(col_ind, "diagonal element is a numeric 0")
    rhs[col_ind] = rhs[col_ind] / diag_val
    x = rhs[col_ind]
    for row_ind, val in col:
        if (row_ind > col_ind) if lower else (row_ind < col_ind):
            rhs[row_ind] = rhs[row_ind] - val * x


def lsolve_csc_dense_rhs(lower_tri_mat: CsMat, rhs: MutableSequence[Any]) -> None:
    """Solve ``L x = rhs`` in place for a CSC matrix, ignoring its upper part."""
    _check_dimensions(lower_tri_mat, len(rhs))
    _require_csc(lower_tri_mat)
    # |l_0_0    0    | |x_0|    |b_0|
    # |l_1_0    L_1_1| |x_1|  = |b_1|
    for col_ind, col in enumerate(lower_tri_mat.outer_iterator()):
        _process_csc_col(col, col_ind, rhs, lower=True)


def usolve_csc_dense_rhs(upper_tri_mat: CsMat, rhs: MutableSequence[Any]) -> None:
    """Solve ``U x = rhs`` in place for a CSC matrix, ignoring its lower part."""
    _check_dimensions(upper_tri_mat, len(rhs))
    _require_csc(upper_tri_mat)
    # | U_0_0    u_0_1 | | x_0 |    | b_0 |
    # |   0      u_1_1 | | x_1 |  = | b_1 |
    cols = list(upper_tri_mat.outer_iterator())
    for col_ind in reversed(range(len(cols))):
        _process_csc_col(cols[col_ind], col_ind, rhs, lower=False)


def usolve_csr_dense_rhs(upper_tri_mat: CsMat, rhs: MutableSequence[Any]) -> None:
    """Solve ``U x = rhs`` in place for a CSR matrix, ignoring its lower part."""
    _check_dimensions(upper_tri_mat, len(rhs))
    _require_csr(upper_tri_mat)
    # | u_0_0    u_0_1^T | | x_0 |    | b_0 |
    # |   0      U_1_1   | | x_1 |  = | b_1 |
    rows = list(upper_tri_mat.outer_iterator())
    for row_ind in reversed(range(len(rows))):
        diag_val: Any = 0
        x = rhs[row_ind]
        for col_ind, val in rows[row_ind]:
            if col_ind == row_ind:
                diag_val = val
            elif col_ind > row_ind:
                x = x - val * rhs[col_ind]
        if diag_val == 0:
            raise SingularMatrixError(row_ind, "diagonal element is a numeric 0")
        rhs[row_ind] = x / diag_val


def _nonzero_pattern(lower_tri_mat: CsMat, roots: Sequence[int]) -> list[int]:
    """Indices of the solution's nonzeros, in an order valid for solving."""
    visited = [False] * lower_tri_mat.rows()
    postorder: list[int] = []
    for root in roots:
        if visited[root]:
            continue
        stack: list[tuple[bool, int]] = [(True, root)]
        while stack:
            entering, ind = stack.pop()
            if not entering:
                postorder.append(ind)
                continue
            if visited[ind]:
                continue
            visited[ind] = True
            stack.append((False, ind))
            stack.extend((True, child) for child in lower_tri_mat.outer_view(ind).indices)
    postorder.reverse()
    return postorder


def lsolve_csc_sparse_rhs(
    lower_tri_mat: CsMat, rhs: SparseVector
) -> list[tuple[int, Any]]:
    """Solve ``L x = rhs`` for a CSC matrix and a sparse right-hand side.

    Returns ``(index, value)`` pairs for the nonzero pattern of ``x``, in the
    order they were solved (sorted within each connected component only).
    """
    _require_csc(lower_tri_mat)
    n = lower_tri_mat.rows()
    if rhs.dim != n:
        raise ValueError("Dimension mismatch")
    pattern = _nonzero_pattern(lower_tri_mat, rhs.indices)
    workspace: list[Any] = [0] * n
    rhs.scatter(workspace)
    for ind in pattern:
        _process_csc_col(lower_tri_mat.outer_view(ind), ind, workspace, lower=True)
    return [(ind, workspace[ind]) for ind in pattern]
"""Sparse matrix product of CSR matrices (symbolic then numeric phase)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .matrix import CsMat


def _check_product(a: CsMat, b: CsMat) -> None:
    if a.cols() != b.rows():
        raise ValueError("Dimension mismatch")
    if not (a.is_csr() and b.is_csr()):
        raise ValueError("Storage mismatch")


def symbolic(a: CsMat, b: CsMat) -> tuple[list[int], list[int]]:
    """The structure of ``C = A * B`` for CSR matrices.

    Returns the indptr and the indices of ``C``; indices are sorted within
    each row.
    """
    _check_product(a, b)
    b_rows = [vec.indices for vec in b.outer_iterator()]
    c_indptr = [0]
    c_indices: list[int] = []
    for a_row in a.outer_iterator():
        columns = {b_col for a_col in a_row.indices for b_col in b_rows[a_col]}
        c_indices.extend(sorted(columns))
        c_indptr.append(len(c_indices))
    return c_indptr, c_indices


def numeric(
    a: CsMat, b: CsMat, c_indptr: Sequence[int], c_indices: Sequence[int]
) -> list[Any]:
    """The values of ``C = A * B`` for the structure given by :func:`symbolic`."""
    _check_product(a, b)
    if len(c_indptr) != a.rows() + 1:
        raise ValueError("Dimension mismatch")
    if c_indptr and c_indptr[-1] - c_indptr[0] != len(c_indices):
        raise ValueError("Dimension mismatch")
    b_rows = list(b.outer_iterator())
    offset = c_indptr[0]
    c_data: list[Any] = []
    for a_row, start, end in zip(a.outer_iterator(), c_indptr, c_indptr[1:]):
        acc: dict[int, Any] = {}
        for a_col, a_val in a_row:
            for b_col, b_val in b_rows[a_col]:
                acc[b_col] = acc.get(b_col, 0) + a_val * b_val
        c_data.extend(acc.get(c_col, 0) for c_col in c_indices[start - offset : end - offset])
    return c_data


def mul_csr_csr(lhs: CsMat, rhs: CsMat) -> CsMat:
    """The CSR product ``lhs * rhs`` of two CSR matrices."""
    c_indptr, c_indices = symbolic(lhs, rhs)
    c_data = numeric(lhs, rhs, c_indptr, c_indices)
    return CsMat.csr((lhs.rows(), rhs.cols()), c_indptr, c_indices, c_data)
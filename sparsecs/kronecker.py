"""Kronecker product of sparse matrices."""

from __future__ import annotations

from .matrix import CsMat


def kronecker_product(a: CsMat, b: CsMat) -> CsMat:
    """The Kronecker product of ``a`` and ``b``, stored like ``a``."""
    if a.storage is not b.storage:
        return kronecker_product(a, b.to_other_storage())
    was_csc = a.is_csc()
    if was_csc:
        a, b = a.transpose(), b.transpose()
    a_rows, a_cols = a.shape()
    b_rows, b_cols = b.shape()
    b_lines = list(b.outer_iterator())
    indptr = [0]
    indices: list[int] = []
    values = []
    for a_line in a.outer_iterator():
        for b_line in b_lines:
            for ai, av in a_line:
                for bi, bv in b_line:
                    indices.append(ai * b_cols + bi)
                    values.append(av * bv)
            indptr.append(len(indices))
    product = CsMat.csr((a_rows * b_rows, a_cols * b_cols), indptr, indices, values)
    return product.transpose() if was_csc else product
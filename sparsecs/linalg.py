"""Dense helpers for sparse linear algebra."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence


def diag_solve(diag: Sequence, x: MutableSequence) -> None:
    """Solve ``D y = x`` for a diagonal ``D``, overwriting ``x`` with ``y``."""
    if len(diag) != len(x):
        raise ValueError("Dimension mismatch")
    for i, d in enumerate(diag):
        x[i] = x[i] / d
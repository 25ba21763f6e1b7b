"""Common sparse matrices."""

from __future__ import annotations

import bisect
import operator
from collections.abc import Iterable, Sequence

import numpy as np

from .matrix import CsMat


def tri_mesh_graph_laplacian(
    nb_vertices: int, triangles: Iterable[Sequence[int]]
) -> CsMat:
    """The CSR graph Laplacian of a triangle mesh.

    ``triangles`` holds one row of three vertex indices per triangle.
    """
    if isinstance(triangles, np.ndarray) and (
        triangles.ndim != 2 or triangles.shape[1] != 3
    ):
        raise ValueError("triangles must have 3 columns")
    neighbors: list[list[int]] = [[] for _ in range(nb_vertices)]

    def insert_edge(v0: int, v1: int) -> None:
        vert_neighbs = neighbors[v0]
        pos = bisect.bisect_left(vert_neighbs, v1)
        if pos == len(vert_neighbs) or vert_neighbs[pos] != v1:
            vert_neighbs.insert(pos, v1)

    for triangle in triangles:
        if len(triangle) != 3:
            raise ValueError("triangles must have 3 columns")
        v0, v1, v2 = (operator.index(v) for v in triangle)
        for v in (v0, v1, v2):
            if not 0 <= v < nb_vertices:
                raise IndexError(f"vertex {v} out of bounds")
        for a, b in ((v0, v1), (v0, v2), (v1, v2)):
            insert_edge(a, b)
            insert_edge(b, a)

    indptr = [0]
    indices: list[int] = []
    data: list[float] = []
    for vert_ind, vert_neighbs in enumerate(neighbors):
        degree = float(len(vert_neighbs))
        below_diag = True
        for neighbor in vert_neighbs:
            if below_diag and neighbor > vert_ind:
                data.append(degree)
                indices.append(vert_ind)
                below_diag = False
            data.append(-1.0)
            indices.append(neighbor)
        if below_diag:
            data.append(degree)
            indices.append(vert_ind)
        indptr.append(len(indices))
    return CsMat.csr((nb_vertices, nb_vertices), indptr, indices, data)
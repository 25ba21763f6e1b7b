# sparsecs

Compressed sparse matrices for Python. A matrix is stored in CSR (compressed
sparse row) or CSC (compressed sparse column) form. The package also provides
the algorithms that usually come with such matrices.

## What it provides

- `sparsecs.indptr`
  - `IndPtr` is a validated index-pointer array. It raises `StructureError`
    when the array is empty, unsorted or holds negative values.
  - `StructureError` carries a `StructureErrorKind` that tells which check
    failed.
  - Slicing an `IndPtr` gives one that does not start at 0. Its accessors
    (`outer_inds`, `iter_outer`, `nnz`, ...) correct for that offset.
- `sparsecs.matrix`
  - `CsMat` is a checked sparse matrix. It is built with `CsMat.csr`,
    `CsMat.csc`, `CsMat.eye` or `CsMat.eye_csc`.
  - `CsMat` supports outer slicing (`slice_outer`), `transpose`, conversion
    between storage orders (`to_other_storage`, `to_csr`, `to_csc`), and
    conversion to a numpy array (`to_dense`).
  - `to_dict` and `from_dict` give a plain-mapping round trip. `from_dict`
    checks the structure.
  - Iterating over a `CsMat` yields `(value, (row, col))` pairs.
  - `SparseVector` is a sparse vector. It provides `get`, `dot`, `scatter` and
    `to_dense`.
  - `is_symmetric`, `assign_to_dense` and `assign_vector_to_dense` are helper
    functions.
- `sparsecs.smmp`: products of two CSR matrices.
  - `symbolic` computes the structure of the product.
  - `numeric` computes its values.
  - `mul_csr_csr` runs both and returns the product.
- `sparsecs.kronecker.kronecker_product`: the Kronecker product of two sparse
  matrices. The result uses the storage order of the first matrix.
- `sparsecs.trisolve`: in-place triangular solves against a dense right-hand
  side.
  - The solvers are `lsolve_csr_dense_rhs`, `lsolve_csc_dense_rhs`,
    `usolve_csr_dense_rhs` and `usolve_csc_dense_rhs`.
  - `lsolve_csc_sparse_rhs` solves against a sparse right-hand side.
  - A zero diagonal raises `SingularMatrixError`. Its `index` and `reason`
    attributes say where and why.
- `sparsecs.special_mats.tri_mesh_graph_laplacian`: the CSR graph Laplacian of
  a triangle mesh.
- `sparsecs.start`: strategies that pick a starting vertex for a level-based
  graph traversal of a symmetric matrix.
  - `Next` picks the first unvisited vertex.
  - `MinimumDegree` picks an unvisited vertex of minimum degree.
  - `PseudoPeripheral` picks a pseudo-peripheral vertex, found with George
    and Liu's method.
- `sparsecs.etree.Parents`: an elimination forest, stored as the parent of
  each node.
- `sparsecs.linalg.diag_solve`: an in-place diagonal solve.

## Example

```python
from sparsecs.matrix import CsMat
from sparsecs.smmp import mul_csr_csr
from sparsecs.trisolve import lsolve_csr_dense_rhs

# | 1 0 0 |
# | 0 2 0 |
# | 1 0 1 |
a = CsMat.csr((3, 3), [0, 1, 2, 4], [0, 1, 0, 2], [1.0, 2.0, 1.0, 1.0])

print(mul_csr_csr(a, a).to_dense())

x = [3.0, 2.0, 4.0]
lsolve_csr_dense_rhs(a, x)
print(x)  # [3.0, 1.0, 1.0]
```

## What it does not do

- There is no permutation type and no `P A Pᵀ` transform.
- There is no bandwidth-reducing (Cuthill-McKee) ordering. The strategies in
  `sparsecs.start` only choose starting vertices. Nothing in the package
  builds an ordering from them.
- Products are computed serially. There is no multi-threaded product.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```
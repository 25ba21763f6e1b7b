"""Compressed sparse vectors and matrices (CSR and CSC)."""

from __future__ import annotations

import bisect
import enum
import operator
from collections.abc import Iterable, Iterator, MutableSequence, Sequence
from itertools import accumulate
from typing import Any

import numpy as np

from .indptr import IndPtr, StructureError, StructureErrorKind


class CompressedStorage(enum.Enum):
    """Whether the outer dimension of a matrix is its rows or its columns."""

    CSR = "CSR"
    CSC = "CSC"

    def _other(self) -> CompressedStorage:
        return CompressedStorage.CSC if self is CompressedStorage.CSR else CompressedStorage.CSR


def _dense_dtype(values: Sequence[Any]) -> np.dtype:
    return np.asarray(values).dtype if values else np.dtype(float)


class SparseVector:
    """A sparse vector: sorted distinct indices with their values."""

    __slots__ = ("dim", "indices", "data")

    def __init__(self, dim: int, indices: Iterable[int], data: Iterable[Any]) -> None:
        dim = operator.index(dim)
        indices = [operator.index(i) for i in indices]
        data = list(data)
        if dim < 0:
            raise StructureError(StructureErrorKind.OUT_OF_RANGE, "Negative dimension")
        if len(indices) != len(data):
            raise StructureError(
                StructureErrorKind.SIZE_MISMATCH,
                "indices and data do not have compatible lengths",
            )
        if any(a >= b for a, b in zip(indices, indices[1:])):
            raise StructureError(StructureErrorKind.UNSORTED, "Unsorted indices")
        if indices and (indices[0] < 0 or indices[-1] >= dim):
            raise StructureError(
                StructureErrorKind.OUT_OF_RANGE, "Index larger than dimension"
            )
        self.dim = dim
        self.indices = indices
        self.data = data

    @classmethod
    def _trusted(cls, dim: int, indices: list[int], data: list[Any]) -> SparseVector:
        obj = cls.__new__(cls)
        obj.dim = dim
        obj.indices = indices
        obj.data = data
        return obj

    def __repr__(self) -> str:
        return f"SparseVector({self.dim!r}, {self.indices!r}, {self.data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return (self.dim, self.indices, self.data) == (other.dim, other.indices, other.data)

    __hash__ = None  # type: ignore[assignment]

    def nnz(self) -> int:
        """The number of stored elements."""
        return len(self.indices)

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        return zip(self.indices, self.data)

    def get(self, index: int) -> Any | None:
        """The value stored at ``index``, or ``None`` if it is not stored."""
        pos = bisect.bisect_left(self.indices, index)
        if pos < len(self.indices) and self.indices[pos] == index:
            return self.data[pos]
        return None

    def dot(self, other: SparseVector | Sequence[Any]) -> Any:
        """Dot product with another sparse vector or a dense sequence."""
        if isinstance(other, SparseVector):
            if other.dim != self.dim:
                raise ValueError("Dimension mismatch")
            total: Any = 0
            left, right = iter(self), iter(other)
            a, b = next(left, None), next(right, None)
            while a is not None and b is not None:
                if a[0] < b[0]:
                    a = next(left, None)
                elif a[0] > b[0]:
                    b = next(right, None)
                else:
                    total = total + a[1] * b[1]
                    a, b = next(left, None), next(right, None)
            return total
        if len(other) != self.dim:
            raise ValueError("Dimension mismatch")
        total = 0
        for index, value in self:
            total = total + value * other[index]
        return total

    def scatter(self, out: MutableSequence[Any]) -> None:
        """Write the stored values into the dense ``out`` at their indices."""
        for index, value in self:
            out[index] = value

    def to_dense(self) -> np.ndarray:
        """A dense numpy array holding this vector."""
        array = np.zeros(self.dim, dtype=_dense_dtype(self.data))
        assign_vector_to_dense(array, self)
        return array


class CsMat:
    """A sparse matrix in compressed row (CSR) or column (CSC) storage."""

    __slots__ = ("_storage", "_nrows", "_ncols", "_indptr", "_indices", "_data")

    def __init__(
        self,
        storage: CompressedStorage | str,
        shape: tuple[int, int],
        indptr: IndPtr | Iterable[int],
        indices: Iterable[int],
        data: Iterable[Any],
    ) -> None:
        storage = CompressedStorage(storage)
        nrows, ncols = (operator.index(d) for d in shape)
        if nrows < 0 or ncols < 0:
            raise StructureError(StructureErrorKind.OUT_OF_RANGE, "Negative dimension")
        iptr = indptr if isinstance(indptr, IndPtr) else IndPtr(indptr)
        indices = [operator.index(i) for i in indices]
        data = list(data)
        outer, inner = (nrows, ncols) if storage is CompressedStorage.CSR else (ncols, nrows)
        if len(iptr) != outer + 1:
            raise StructureError(
                StructureErrorKind.SIZE_MISMATCH,
                "Indptr length does not match dimension",
            )
        if len(indices) != len(data):
            raise StructureError(
                StructureErrorKind.SIZE_MISMATCH,
                "Indices and data lengths do not match",
            )
        if iptr.nnz() != len(indices):
            raise StructureError(
                StructureErrorKind.SIZE_MISMATCH,
                "Indices length and indptr's nnz do not match",
            )
        for span in iptr.iter_outer():
            chunk = indices[span.start : span.stop]
            if any(a >= b for a, b in zip(chunk, chunk[1:])):
                raise StructureError(StructureErrorKind.UNSORTED, "Indices are not sorted")
            if chunk and (chunk[0] < 0 or chunk[-1] >= inner):
                raise StructureError(
                    StructureErrorKind.OUT_OF_RANGE, "Indices larger than shape"
                )
        self._storage = storage
        self._nrows = nrows
        self._ncols = ncols
        self._indptr = IndPtr.trusted(iptr.to_proper())
        self._indices = indices
        self._data = data

    @classmethod
    def _trusted(
        cls,
        storage: CompressedStorage,
        shape: tuple[int, int],
        indptr: Iterable[int],
        indices: list[int],
        data: list[Any],
    ) -> CsMat:
        obj = cls.__new__(cls)
        obj._storage = storage
        obj._nrows, obj._ncols = shape
        obj._indptr = IndPtr.trusted(indptr)
        obj._indices = indices
        obj._data = data
        return obj

    @classmethod
    def csr(cls, shape, indptr, indices, data) -> CsMat:
        """Build a checked CSR matrix."""
        return cls(CompressedStorage.CSR, shape, indptr, indices, data)

    @classmethod
    def csc(cls, shape, indptr, indices, data) -> CsMat:
        """Build a checked CSC matrix."""
        return cls(CompressedStorage.CSC, shape, indptr, indices, data)

    @classmethod
    def eye(cls, dim: int) -> CsMat:
        """The CSR identity matrix of size ``dim``."""
        return cls._trusted(
            CompressedStorage.CSR, (dim, dim), range(dim + 1), list(range(dim)), [1.0] * dim
        )

    @classmethod
    def eye_csc(cls, dim: int) -> CsMat:
        """The CSC identity matrix of size ``dim``."""
        return cls._trusted(
            CompressedStorage.CSC, (dim, dim), range(dim + 1), list(range(dim)), [1.0] * dim
        )

    @property
    def storage(self) -> CompressedStorage:
        return self._storage

    @property
    def indptr(self) -> IndPtr:
        return self._indptr

    @property
    def indices(self) -> list[int]:
        """The inner indices; must not be modified."""
        return self._indices

    @property
    def data(self) -> list[Any]:
        """The stored values; must not be modified."""
        return self._data

    def __repr__(self) -> str:
        return (
            f"CsMat({self._storage.value!r}, {self.shape()!r}, "
            f"{self._indptr.raw_storage()!r}, {self._indices!r}, {self._data!r})"
        )

    def rows(self) -> int:
        return self._nrows

    def cols(self) -> int:
        return self._ncols

    def shape(self) -> tuple[int, int]:
        return (self._nrows, self._ncols)

    def nnz(self) -> int:
        return self._indptr.nnz()

    def is_csr(self) -> bool:
        return self._storage is CompressedStorage.CSR

    def is_csc(self) -> bool:
        return self._storage is CompressedStorage.CSC

    def outer_dims(self) -> int:
        return self._nrows if self.is_csr() else self._ncols

    def _inner_dims(self) -> int:
        return self._ncols if self.is_csr() else self._nrows

    def _outer_vector(self, span: range) -> SparseVector:
        return SparseVector._trusted(
            self._inner_dims(),
            self._indices[span.start : span.stop],
            self._data[span.start : span.stop],
        )

    def outer_view(self, i: int) -> SparseVector:
        """The sparse vector of outer dimension ``i``."""
        return self._outer_vector(self._indptr.outer_inds(i))

    def outer_iterator(self) -> Iterator[SparseVector]:
        """Yield the sparse vector of each outer dimension in turn."""
        for span in self._indptr.iter_outer():
            yield self._outer_vector(span)

    def slice_outer(self, start: int, end: int | None = None) -> CsMat:
        """The matrix made of outer dimensions ``start..end``."""
        if end is None:
            end = self.outer_dims()
        if end < start:
            raise ValueError("Invalid view")
        span = self._indptr.outer_inds_slice(start, end)
        indptr = self._indptr.middle_slice(start, end).to_proper()
        if self.is_csr():
            shape = (end - start, self._ncols)
        else:
            shape = (self._nrows, end - start)
        return CsMat._trusted(
            self._storage,
            shape,
            indptr,
            self._indices[span.start : span.stop],
            self._data[span.start : span.stop],
        )

    def get_outer_inner(self, outer: int, inner: int) -> Any | None:
        """The value at (outer, inner), or ``None`` if it is not stored."""
        if not 0 <= outer < self.outer_dims():
            return None
        return self.outer_view(outer).get(inner)

    def degrees(self) -> list[int]:
        """The number of off-diagonal nonzeros of each outer dimension."""
        return [
            vec.nnz() - int(vec.get(outer) is not None)
            for outer, vec in enumerate(self.outer_iterator())
        ]

    def max_outer_nnz(self) -> int:
        """The largest number of nonzeros in a single outer dimension."""
        return max((len(span) for span in self._indptr.iter_outer()), default=0)

    def transpose(self) -> CsMat:
        """The transposed matrix, sharing the same arrays in the other storage."""
        return CsMat._trusted(
            self._storage._other(),
            (self._ncols, self._nrows),
            self._indptr.raw_storage(),
            list(self._indices),
            list(self._data),
        )

    def to_other_storage(self) -> CsMat:
        """The same matrix, converted to the other storage order."""
        buckets: list[list[tuple[int, Any]]] = [[] for _ in range(self._inner_dims())]
        for outer, vec in enumerate(self.outer_iterator()):
            for inner, value in vec:
                buckets[inner].append((outer, value))
        indptr = [0, *accumulate(len(bucket) for bucket in buckets)]
        indices = [outer for bucket in buckets for outer, _ in bucket]
        data = [value for bucket in buckets for _, value in bucket]
        return CsMat._trusted(self._storage._other(), self.shape(), indptr, indices, data)

    def _copy(self) -> CsMat:
        return CsMat._trusted(
            self._storage,
            self.shape(),
            self._indptr.raw_storage(),
            list(self._indices),
            list(self._data),
        )

    def to_csr(self) -> CsMat:
        return self._copy() if self.is_csr() else self.to_other_storage()

    def to_csc(self) -> CsMat:
        return self._copy() if self.is_csc() else self.to_other_storage()

    def to_dense(self) -> np.ndarray:
        """A dense numpy array holding this matrix."""
        array = np.zeros(self.shape(), dtype=_dense_dtype(self._data))
        assign_to_dense(array, self)
        return array

    def to_dict(self) -> dict[str, Any]:
        """A plain mapping of the matrix, suitable for serialization."""
        return {
            "storage": self._storage.value,
            "nrows": self._nrows,
            "ncols": self._ncols,
            "indptr": self._indptr.raw_storage(),
            "indices": list(self._indices),
            "data": list(self._data),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CsMat:
        """Rebuild a matrix from :meth:`to_dict` output, checking its structure."""
        try:
            return cls(
                data["storage"],
                (data["nrows"], data["ncols"]),
                data["indptr"],
                data["indices"],
                data["data"],
            )
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from exc

    def __iter__(self) -> Iterator[tuple[Any, tuple[int, int]]]:
        """Yield ``(value, (row, col))`` for each nonzero, in storage order."""
        csr = self.is_csr()
        for outer, vec in enumerate(self.outer_iterator()):
            for inner, value in vec:
                yield value, ((outer, inner) if csr else (inner, outer))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CsMat):
            return NotImplemented
        return (
            self._storage is other._storage
            and self.shape() == other.shape()
            and self._indptr == other._indptr
            and self._indices == other._indices
            and self._data == other._data
        )

    __hash__ = None  # type: ignore[assignment]


def is_symmetric(mat: CsMat) -> bool:
    """Whether a matrix is square and equal to its transpose."""
    if mat.rows() != mat.cols():
        return False
    for outer, vec in enumerate(mat.outer_iterator()):
        for inner, value in vec:
            transposed = mat.get_outer_inner(inner, outer)
            if transposed is None or transposed != value:
                return False
    return True


def assign_to_dense(array: np.ndarray, mat: CsMat) -> None:
    """Write the nonzeros of ``mat`` into ``array``; other entries are kept."""
    if array.ndim != 2 or array.shape != mat.shape():
        raise ValueError("Dimension mismatch")
    for value, position in mat:
        array[position] = value


def assign_vector_to_dense(array: np.ndarray, vec: SparseVector) -> None:
    """Write the nonzeros of ``vec`` into ``array``; other entries are kept."""
    if len(array) != vec.dim:
        raise ValueError("Dimension mismatch")
    for index, value in vec:
        array[index] = value
"""Storage of the outer pointers ("indptr") of a compressed sparse matrix."""

from __future__ import annotations

import enum
import operator
from collections.abc import Iterable, Iterator, Sequence

# Indptr values above this would exhaust any available memory.
_MAX_INDPTR = (2**64 - 1) // 2


class StructureErrorKind(enum.Enum):
    """The kinds of structural problems a sparse structure can have."""

    UNSORTED = "unsorted"
    SIZE_MISMATCH = "size_mismatch"
    OUT_OF_RANGE = "out_of_range"


class StructureError(ValueError):
    """Raised when sparse structure data does not satisfy its invariants."""

    def __init__(self, kind: StructureErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def _check_structure(storage: Sequence[int]) -> None:
    for value in storage:
        if value < 0:
            raise StructureError(
                StructureErrorKind.OUT_OF_RANGE,
                "Indptr value out of range of usize",
            )
    if any(a > b for a, b in zip(storage, storage[1:])):
        raise StructureError(StructureErrorKind.UNSORTED, "Unsorted indptr")
    if storage and storage[-1] > _MAX_INDPTR:
        raise StructureError(
            StructureErrorKind.OUT_OF_RANGE,
            "An indptr value is larger than allowed",
        )
    if not storage:
        raise StructureError(
            StructureErrorKind.SIZE_MISMATCH,
            "An indptr should have its len >= 1",
        )


def _as_indices(storage: Iterable[int]) -> list[int]:
    try:
        return [operator.index(value) for value in storage]
    except TypeError as exc:
        raise StructureError(
            StructureErrorKind.OUT_OF_RANGE,
            "Indptr value out of range of usize",
        ) from exc


class IndPtr:
    """Outer pointers of a compressed matrix, possibly of a sliced one.

    A sliced indptr does not start at 0; all accessors subtract the first
    value so that ranges index into the sliced indices and data.
    """

    __slots__ = ("_storage",)

    def __init__(self, storage: Iterable[int]) -> None:
        values = _as_indices(storage)
        _check_structure(values)
        self._storage = values

    @classmethod
    def trusted(cls, storage: Iterable[int]) -> IndPtr:
        """Build an indptr without checking its structure."""
        obj = cls.__new__(cls)
        obj._storage = list(storage)
        return obj

    def __len__(self) -> int:
        return len(self._storage)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IndPtr):
            return self._storage == other._storage
        if isinstance(other, Iterable) and not isinstance(other, (str, bytes)):
            return self._storage == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"IndPtr({self._storage!r})"

    def is_empty(self) -> bool:
        """Whether this indptr describes no outer dimension."""
        return len(self._storage) <= 1

    def outer_dims(self) -> int:
        """The number of outer dimensions this indptr represents."""
        return max(len(self._storage) - 1, 0)

    def is_proper(self) -> bool:
        """Whether the indptr starts at 0, i.e. belongs to a non-sliced matrix."""
        return bool(self._storage) and self._storage[0] == 0

    def as_slice(self) -> list[int] | None:
        """The storage if the indptr is proper, else ``None``."""
        return list(self._storage) if self.is_proper() else None

    def raw_storage(self) -> list[int]:
        """A copy of the underlying storage, offset included."""
        return list(self._storage)

    def to_proper(self) -> list[int]:
        """The storage with the offset removed, so that it starts at 0."""
        offset = self.offset()
        return [value - offset for value in self._storage]

    def offset(self) -> int:
        """The first stored value, or 0 for an empty storage."""
        return self._storage[0] if self._storage else 0

    def iter_outer_nnz_inds(self) -> Iterator[int]:
        """Yield the outer dimension of each nonzero, in storage order."""
        for outer, span in enumerate(self.iter_outer()):
            for _ in span:
                yield outer

    def iter_outer(self) -> Iterator[range]:
        """Yield the range of nonzero positions of each outer dimension."""
        offset = self.offset()
        for start, end in zip(self._storage, self._storage[1:]):
            yield range(start - offset, end - offset)

    def _at(self, i: int) -> int:
        if not 0 <= i < len(self._storage):
            raise IndexError(f"indptr index {i} out of bounds")
        return self._storage[i]

    def index(self, i: int) -> int:
        """The offset-corrected value stored at position ``i``."""
        return self._at(i) - self.offset()

    def outer_inds(self, i: int) -> range:
        """The range of nonzero positions for outer dimension ``i``."""
        if not 0 <= i or i + 1 >= len(self._storage):
            raise IndexError(f"outer dimension {i} out of bounds")
        offset = self.offset()
        return range(self._storage[i] - offset, self._storage[i + 1] - offset)

    def nnz_in_outer(self, i: int) -> int:
        """The number of nonzeros in outer dimension ``i``."""
        if not 0 <= i or i + 1 >= len(self._storage):
            raise IndexError(f"outer dimension {i} out of bounds")
        return self._storage[i + 1] - self._storage[i]

    def outer_inds_slice(self, start: int, end: int) -> range:
        """The range of nonzero positions for outer dimensions ``start..end``."""
        offset = self.offset()
        return range(self._at(start) - offset, self._at(end) - offset)

    def nnz(self) -> int:
        """The number of nonzeros described by this indptr."""
        if not self._storage:
            return 0
        return self._storage[-1] - self.offset()

    def middle_slice(self, start: int, end: int | None = None) -> IndPtr:
        """The indptr of outer dimensions ``start..end`` (``end`` defaults to all)."""
        if end is None:
            end = self.outer_dims()
        if start < 0 or end + 1 > len(self._storage) or start > end + 1:
            raise IndexError(f"invalid outer slice {start}..{end}")
        return IndPtr.trusted(self._storage[start : end + 1])

    def push(self, elem: int) -> None:
        """Append a value without any structure check."""
        self._storage.append(elem)

    def record_new_element(self, outer_ind: int) -> None:
        """Record one more nonzero in outer dimension ``outer_ind``."""
        storage = self._storage
        storage[outer_ind + 1 :] = [value + 1 for value in storage[outer_ind + 1 :]]
import numpy as np
import pytest

from sparsecs.matrix import CsMat
from sparsecs.smmp import mul_csr_csr, numeric, symbolic


def mat1():
    # | 0 0 3 4 0 |
    # | 0 0 0 2 5 |
    # | 0 0 5 0 0 |
    # | 0 8 0 0 0 |
    # | 0 0 0 7 0 |
    return CsMat.csr(
        (5, 5),
        [0, 2, 4, 5, 6, 7],
        [2, 3, 3, 4, 2, 1, 3],
        [3.0, 4.0, 2.0, 5.0, 5.0, 8.0, 7.0],
    )


def mat2():
    # structure:
    # | x x x   x |
    # | x     x   |
    # |           |
    # |     x x   |
    # |   x x     |
    return CsMat.csr(
        (5, 5),
        [0, 4, 6, 6, 8, 10],
        [0, 1, 2, 4, 0, 3, 2, 3, 1, 2],
        [6.0, 7.0, 3.0, 3.0, 8.0, 9.0, 2.0, 4.0, 4.0, 4.0],
    )


def test_symbolic_structure():
    c_indptr, c_indices = symbolic(mat1(), mat2())
    assert c_indptr == [0, 2, 5, 5, 7, 9]
    assert c_indices == [2, 3, 1, 2, 3, 0, 3, 2, 3]


def test_symbolic_and_numeric_match_dense_product():
    a, b = mat1(), mat2()
    c_indptr, c_indices = symbolic(a, b)
    c_data = numeric(a, b, c_indptr, c_indices)
    assert len(c_data) == len(c_indices)
    c = CsMat.csr((5, 5), c_indptr, c_indices, c_data)
    np.testing.assert_allclose(c.to_dense(), a.to_dense() @ b.to_dense())


def test_mul_csr_csr_self_product():
    a = mat1()
    res = mul_csr_csr(a, a)
    assert res.is_csr()
    assert res.shape() == (5, 5)
    np.testing.assert_allclose(res.to_dense(), a.to_dense() @ a.to_dense())
    assert res == CsMat.csr(res.shape(), *symbolic(a, a), numeric(a, a, *symbolic(a, a)))


def test_mul_zero_rows():
    a = CsMat.csr((0, 11), [0], [], [])
    b = CsMat.csr((11, 11), [0] * 12, [], [])
    c = mul_csr_csr(a, b)
    assert c.rows() == 0
    assert c.cols() == 11
    assert c.nnz() == 0


def test_mul_complex():
    # | 0  1 0   0  |
    # | 0  0 0   0  |
    # | i  0 0  1+i |
    # | 0  0 2i  0  |
    a = CsMat.csr(
        (4, 4),
        [0, 1, 1, 3, 4],
        [1, 0, 3, 2],
        [1 + 0j, 1j, 1 + 1j, 2j],
    )
    expected = CsMat.csr(
        (4, 4),
        [0, 0, 0, 2, 4],
        [1, 2, 0, 3],
        [1j, -2 + 2j, -2 + 0j, -2 + 2j],
    )
    assert mul_csr_csr(a, a) == expected


def test_dimension_mismatch():
    a = CsMat.csr((2, 3), [0, 0, 0], [], [])
    b = CsMat.csr((2, 3), [0, 0, 0], [], [])
    with pytest.raises(ValueError, match="Dimension mismatch"):
        mul_csr_csr(a, b)


def test_storage_mismatch():
    with pytest.raises(ValueError, match="Storage mismatch"):
        mul_csr_csr(mat1(), mat1().to_csc())


def test_numeric_rejects_wrong_indptr_length():
    a, b = mat1(), mat2()
    with pytest.raises(ValueError):
        numeric(a, b, [0, 1], [2])
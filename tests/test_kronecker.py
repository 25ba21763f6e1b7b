import pytest

from sparsecs.kronecker import kronecker_product
from sparsecs.matrix import CsMat

EXPECTED = {
    (0, 2): 2,
    (0, 4): 3,
    (1, 2): 4,
    (1, 4): 6,
    (2, 2): 6,
    (2, 3): -6,
    (2, 4): 9,
    (2, 5): -9,
    (3, 0): 6,
    (3, 4): 8,
    (4, 0): 12,
    (4, 4): 16,
    (5, 0): 18,
    (5, 1): -18,
    (5, 4): 24,
    (5, 5): -24,
}


def mat_a():
    return CsMat.csr((2, 3), [0, 2, 4], [1, 2, 0, 2], [2, 3, 6, 8])


def mat_b():
    return CsMat.csr((3, 2), [0, 1, 2, 4], [0, 0, 0, 1], [1, 2, 3, -3])


@pytest.mark.parametrize(
    "a_csc, b_csc",
    [(False, False), (False, True), (True, True), (True, False)],
)
def test_kronecker_product(a_csc, b_csc):
    a = mat_a().to_csc() if a_csc else mat_a()
    b = mat_b().to_csc() if b_csc else mat_b()
    c = kronecker_product(a, b)
    assert {pos: value for value, pos in c} == EXPECTED
    assert c.shape() == (6, 6)
    assert c.is_csc() == a_csc
    assert c.nnz() == a.nnz() * b.nnz()


def test_kronecker_with_identity_keeps_values():
    c = kronecker_product(CsMat.eye(2), mat_b())
    assert c.to_dense()[3:, 2:].tolist() == mat_b().to_dense().tolist()
    assert c.to_dense()[:3, 2:].tolist() == [[0, 0], [0, 0], [0, 0]]
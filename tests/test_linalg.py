import numpy as np
import pytest

from sparsecs.linalg import diag_solve


def test_diag_solve_list():
    x = [6.0, 8.0, -3.0]
    diag_solve([2.0, 4.0, 1.0], x)
    assert x == [3.0, 2.0, -3.0]


def test_diag_solve_roundtrip_numpy():
    diag = np.array([1.5, -2.0, 0.25, 7.0])
    original = np.array([3.0, 1.0, -4.0, 2.5])
    x = original.copy()
    diag_solve(diag, x)
    np.testing.assert_allclose(x * diag, original)


def test_diag_solve_identity_keeps_values():
    x = [5.0, 1.0, 2.0]
    diag_solve([1.0, 1.0, 1.0], x)
    assert x == [5.0, 1.0, 2.0]


def test_diag_solve_dimension_mismatch():
    with pytest.raises(ValueError):
        diag_solve([1.0, 2.0], [1.0])


def test_diag_solve_zero_diagonal():
    with pytest.raises(ZeroDivisionError):
        diag_solve([1.0, 0.0], [1.0, 1.0])
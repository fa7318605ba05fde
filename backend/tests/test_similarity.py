import numpy as np
import pytest

from services.similarity import cosine_score


def test_cosine_score_identical():
    v = np.array([0.3, 0.4, 0.5])
    assert cosine_score(v, v) == pytest.approx(100.0)


def test_cosine_score_orthogonal():
    assert cosine_score([1.0, 0.0], [0.0, 1.0]) == 0.0


def test_cosine_score_opposite_clamps_to_zero():
    assert cosine_score([1.0, 2.0], [-1.0, -2.0]) == 0.0


def test_cosine_score_partial():
    # 45 degrees apart -> cos = 0.7071
    assert cosine_score([1.0, 0.0], [1.0, 1.0]) == pytest.approx(70.71, abs=0.01)


def test_cosine_score_zero_vectors():
    assert cosine_score([0.0, 0.0, 0.0], [0.0, 0.0, 0.0]) == 0.0
    assert cosine_score([0.0, 0.0], [1.0, 1.0]) == 0.0


def test_cosine_score_ignores_magnitude():
    assert cosine_score([1.0, 1.0], [10.0, 10.0]) == pytest.approx(100.0)


def test_cosine_score_dimension_mismatch():
    with pytest.raises(ValueError):
        cosine_score([1.0, 0.0], [1.0, 0.0, 0.0])

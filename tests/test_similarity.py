import numpy as np
import pytest

from janusdoc.core.errors import DimensionMismatch
from janusdoc.services.retrieval.similarity import cosine_similarity


def test_identical_vectors():
    assert cosine_similarity([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)


def test_orthogonal_vectors():
    assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)


def test_opposite_vectors():
    a = [0.3, -2.0, 5.0]
    assert cosine_similarity(a, [-x for x in a]) == pytest.approx(-1.0)


def test_normalized_vectors():
    assert cosine_similarity([0.6, 0.8], [0.8, 0.6]) == pytest.approx(0.96)


def test_magnitude_does_not_matter():
    assert cosine_similarity([1, 1], [10, 10]) == pytest.approx(1.0)


def test_dimension_mismatch():
    with pytest.raises(DimensionMismatch):
        cosine_similarity([1, 2, 3], [1, 2])


def test_dimension_mismatch_is_a_value_error():
    with pytest.raises(ValueError, match="same length"):
        cosine_similarity([1.0], [1.0, 2.0])


def test_zero_vector_gives_zero():
    assert cosine_similarity([0, 0, 0], [1, 2, 3]) == 0.0
    assert cosine_similarity([1, 2, 3], [0, 0, 0]) == 0.0


def test_inputs_are_not_mutated():
    a = np.array([1.0, 2.0, 3.0])
    b = [3.0, 2.0, 1.0]
    cosine_similarity(a, b)

    assert a.tolist() == [1.0, 2.0, 3.0]
    assert b == [3.0, 2.0, 1.0]


def test_result_stays_in_range():
    v = [0.1] * 384
    assert -1.0 <= cosine_similarity(v, v) <= 1.0

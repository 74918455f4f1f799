import numpy as np
import pytest

from rdist.multiplex import as_sequence, multiplex, recycled, vectorize


def _triple(a, b, c):
    return (a, b, c)


def test_multiplex_recycles_shorter_sequences() -> None:
    result = multiplex(_triple, [1, 2, 3], [10], [100, 200])
    assert result == [(1, 10, 100), (2, 10, 200), (3, 10, 100)]


def test_multiplex_treats_scalars_as_length_one() -> None:
    assert multiplex(_triple, 1, 2, 3) == [(1, 2, 3)]
    assert multiplex(_triple, 1, [5, 6], True) == [(1, 5, True), (1, 6, True)]


def test_multiplex_empty_input_gives_empty_output() -> None:
    assert multiplex(_triple, [], [1, 2, 3], 4) == []
    assert multiplex(_triple, np.array([]), 1, 2) == []


def test_multiplex_accepts_numpy_arrays() -> None:
    result = multiplex(lambda a, b: a * b, np.array([1.0, 2.0, 3.0, 4.0]), np.array([10.0, 100.0]))
    assert result == [10.0, 200.0, 30.0, 400.0]


def test_multiplex_without_divisibility() -> None:
    result = multiplex(lambda a, b: (a, b), [1, 2, 3, 4, 5], [7, 8])
    assert [pair[1] for pair in result] == [7, 8, 7, 8, 7]


def test_multiplex_explicit_length() -> None:
    assert multiplex(lambda a: a, [1, 2], length=5) == [1, 2, 1, 2, 1]
    assert multiplex(lambda a: a, [1, 2, 3], length=2) == [1, 2]


def test_multiplex_visits_indices_in_order() -> None:
    seen: list[int] = []

    def record(value: int) -> int:
        seen.append(value)
        return value

    multiplex(record, [0, 1, 2, 3])
    assert seen == [0, 1, 2, 3]


def test_recycled_columns() -> None:
    columns = recycled([1, 2, 3], 9, [4, 5])
    assert columns == [[1, 2, 3], [9, 9, 9], [4, 5, 4]]
    assert recycled([1], []) == [[], []]


def test_as_sequence() -> None:
    assert as_sequence(3.0) == (3.0,)
    assert as_sequence(np.float64(2.0)) == (2.0,)
    assert as_sequence(np.array([[1.0, 2.0], [3.0, 4.0]])) == [1.0, 2.0, 3.0, 4.0]
    assert as_sequence((1, 2)) == [1, 2]


@vectorize
def _scaled_sum(x: float, shift: float, scale: float = 2.0) -> float:
    return (x + shift) * scale


def test_vectorize_returns_float_for_scalars() -> None:
    result = _scaled_sum(1.0, 2.0)
    assert isinstance(result, float)
    assert result == 6.0


def test_vectorize_returns_array_for_sequences() -> None:
    result = _scaled_sum([1.0, 2.0, 3.0], 1.0, scale=[1.0, 10.0])
    assert isinstance(result, np.ndarray)
    np.testing.assert_allclose(result, [2.0, 30.0, 4.0])


def test_vectorize_empty_argument() -> None:
    result = _scaled_sum([], 1.0)
    assert isinstance(result, np.ndarray)
    assert result.size == 0


def test_vectorize_keeps_scalar_function() -> None:
    assert _scaled_sum.scalar(1.0, 1.0, 1.0) == 2.0
    assert _scaled_sum.__name__ == "_scaled_sum"
    with pytest.raises(TypeError):
        _scaled_sum(1.0)

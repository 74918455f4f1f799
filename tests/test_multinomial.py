import math
import warnings

import numpy as np
import pytest
from scipy.stats import multinomial

from rdist.distributions import dmultinom, rmultinom, rmultinom_into
from rdist.errors import ConsistencyWarning, DomainWarning


@pytest.mark.parametrize(
    "size,prob",
    [
        (10, [0.2, 0.3, 0.5]),
        (1, [0.25, 0.25, 0.25, 0.25]),
        (1_000_000, [0.3, 0.3, 0.4]),
        (57, [1e-300, 1.0 - 1e-12, 1e-12]),
        (20, [0.0, 0.0, 1.0]),
        (20, [1.0 / 3.0] * 3),
        (33, [0.1] * 10),
    ],
)
def test_rmultinom_counts_sum_to_size(size: int, prob: list[float]) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        draws = rmultinom(size, prob, n=25, random_state=11)
    assert draws.shape == (25, len(prob))
    assert np.all(draws >= 0)
    np.testing.assert_array_equal(draws.sum(axis=1), np.full(25, size))


def test_rmultinom_full_mass_in_first_bucket() -> None:
    np.testing.assert_array_equal(rmultinom(10, [1.0, 0.0, 0.0], random_state=0), [10, 0, 0])


def test_rmultinom_zero_probability_buckets_stay_empty() -> None:
    draws = rmultinom(40, [0.5, 0.0, 0.5], n=50, random_state=2)
    assert np.all(draws[:, 1] == 0)


def test_rmultinom_unnormalised_probabilities_warn_but_sum_to_size() -> None:
    with pytest.warns(ConsistencyWarning, match="probability sum should be 1, but is 1.1"):
        draws = rmultinom(10, [0.5, 0.6], random_state=4)
    assert draws.sum() == 10


def test_rmultinom_small_rounding_error_is_tolerated() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        draws = rmultinom(12, [0.1] * 3 + [0.7 - 5e-8], random_state=4)
    assert draws.sum() == 12


def test_rmultinom_zero_trials() -> None:
    np.testing.assert_array_equal(rmultinom(0, [0.4, 0.6], random_state=0), [0, 0])


def test_rmultinom_single_empty_bucket() -> None:
    with pytest.warns(ConsistencyWarning):
        draws = rmultinom(5, [0.0], random_state=0)
    np.testing.assert_array_equal(draws, [0])


def test_rmultinom_single_bucket_takes_everything() -> None:
    np.testing.assert_array_equal(rmultinom(7, [1.0], random_state=0), [7])


@pytest.mark.parametrize("size", [-1, 2.5, math.inf, math.nan, 1e19, 2.0**63])
def test_rmultinom_invalid_size_flags_first_bucket(size: float) -> None:
    with pytest.warns(DomainWarning, match="rmultinom"):
        draws = rmultinom(size, [0.5, 0.5], random_state=0)
    assert draws[0] == -1


def test_rmultinom_invalid_probability_flags_its_bucket() -> None:
    with pytest.warns(DomainWarning, match="rmultinom"):
        draws = rmultinom(10, [0.5, -0.1, 0.6], random_state=0)
    assert draws[1] == -1
    with pytest.warns(DomainWarning, match="rmultinom"):
        draws = rmultinom(10, [0.5, math.nan], random_state=0)
    assert draws[1] == -1


def test_rmultinom_largest_supported_size() -> None:
    size = float(2**62)
    draws = rmultinom(size, [0.5, 0.5], random_state=0)
    assert int(draws.sum()) == 2**62


def test_rmultinom_empty_probability_vector() -> None:
    with pytest.warns(DomainWarning, match="rmultinom"):
        draws = rmultinom(10, [], random_state=0)
    assert draws.size == 0


def test_rmultinom_into_leaves_probabilities_untouched() -> None:
    prob = np.array([0.1, 0.2, 0.7])
    original = prob.copy()
    out = [99, 99, 99, 99]
    rmultinom_into(30, prob, out, random_state=8)
    np.testing.assert_array_equal(prob, original)
    assert sum(out[:3]) == 30
    assert out[3] == 99


def test_rmultinom_into_rejects_short_output() -> None:
    with pytest.raises(ValueError):
        rmultinom_into(3, [0.5, 0.5], [0], random_state=0)


def test_rmultinom_is_reproducible() -> None:
    first = rmultinom(100, [0.2, 0.3, 0.5], n=4, random_state=21)
    second = rmultinom(100, [0.2, 0.3, 0.5], n=4, random_state=21)
    np.testing.assert_array_equal(first, second)


def test_rmultinom_bucket_means() -> None:
    draws = rmultinom(100, [0.2, 0.3, 0.5], n=500, random_state=3)
    np.testing.assert_allclose(draws.mean(axis=0), [20.0, 30.0, 50.0], atol=1.5)


def test_dmultinom_matches_scipy() -> None:
    x = [3, 1, 2]
    prob = [0.2, 0.3, 0.5]
    assert dmultinom(x, prob) == pytest.approx(multinomial.pmf(x, 6, prob), rel=1e-12)
    assert dmultinom(x, prob, log=True) == pytest.approx(
        multinomial.logpmf(x, 6, prob), rel=1e-12
    )


def test_dmultinom_normalises_probabilities() -> None:
    assert dmultinom([1, 1], [2.0, 2.0]) == pytest.approx(0.5)


def test_dmultinom_zero_probability_buckets() -> None:
    assert dmultinom([2, 0, 1], [0.5, 0.0, 0.5]) == pytest.approx(0.375)
    assert dmultinom([2, 1, 1], [0.5, 0.0, 0.5]) == 0.0
    assert dmultinom([2, 1, 1], [0.5, 0.0, 0.5], log=True) == -math.inf


def test_dmultinom_invalid_input() -> None:
    with pytest.raises(ValueError, match="size"):
        dmultinom([1, 2], [0.5, 0.5], size=4)
    with pytest.raises(ValueError):
        dmultinom([1, 2], [0.5, 0.25, 0.25])
    with pytest.raises(ValueError):
        dmultinom([1, 2], [0.0, 0.0])
    with pytest.raises(ValueError):
        dmultinom([-1, 2], [0.5, 0.5])
    with pytest.raises(ValueError, match="finite"):
        dmultinom([math.inf, 1], [0.5, 0.5])
    with pytest.raises(ValueError, match="finite"):
        dmultinom([math.nan, 1], [0.5, 0.5])

import math

import numpy as np
import pytest
from scipy.stats import norm

from rdist.distributions import dnorm, pnorm, qnorm, rnorm
from rdist.errors import DomainWarning


def test_dnorm_matches_scipy() -> None:
    x = np.array([-7.5, -1.0, 0.0, 0.3, 2.0, 6.0, 30.0])
    np.testing.assert_allclose(dnorm(x, 0.5, 1.3), norm.pdf(x, 0.5, 1.3), rtol=1e-12)
    np.testing.assert_allclose(
        dnorm(x, 0.5, 1.3, log=True), norm.logpdf(x, 0.5, 1.3), rtol=1e-12
    )


def test_dnorm_far_tail() -> None:
    assert dnorm(40.0) == 0.0
    assert dnorm(40.0, log=True) == pytest.approx(norm.logpdf(40.0))
    assert dnorm(8.0) == pytest.approx(norm.pdf(8.0), rel=1e-13)


def test_dnorm_degenerate_sd() -> None:
    assert dnorm(1.0, 1.0, 0.0) == math.inf
    assert dnorm(1.5, 1.0, 0.0) == 0.0
    assert dnorm(1.5, 1.0, 0.0, log=True) == -math.inf
    assert dnorm(1.5, 1.0, math.inf) == 0.0
    assert math.isnan(dnorm(math.inf, math.inf, 1.0))
    with pytest.warns(DomainWarning, match="dnorm"):
        assert math.isnan(dnorm(0.0, 0.0, -1.0))


def test_pnorm_matches_scipy() -> None:
    q = np.array([-40.0, -3.0, 0.0, 1.5, 9.0])
    np.testing.assert_allclose(pnorm(q), norm.cdf(q), rtol=1e-12)
    np.testing.assert_allclose(pnorm(q, lower_tail=False), norm.sf(q), rtol=1e-12)
    np.testing.assert_allclose(pnorm(q, log_p=True), norm.logcdf(q), rtol=1e-12)


def test_pnorm_edges() -> None:
    assert pnorm(-math.inf) == 0.0
    assert pnorm(math.inf) == 1.0
    assert pnorm(math.inf, lower_tail=False, log_p=True) == -math.inf
    assert pnorm(0.5, 1.0, 0.0) == 0.0
    assert pnorm(1.0, 1.0, 0.0) == 1.0
    with pytest.warns(DomainWarning, match="pnorm"):
        assert math.isnan(pnorm(0.0, 0.0, -2.0))


def test_qnorm_matches_scipy() -> None:
    p = np.array([1e-10, 0.025, 0.5, 0.9])
    np.testing.assert_allclose(qnorm(p, 2.0, 3.0), norm.ppf(p, 2.0, 3.0), rtol=1e-12)
    np.testing.assert_allclose(qnorm(p, lower_tail=False), norm.isf(p), rtol=1e-12)
    np.testing.assert_allclose(
        qnorm(np.log(p), log_p=True), norm.ppf(p), rtol=1e-10, atol=1e-12
    )


def test_qnorm_boundaries() -> None:
    assert qnorm(0.0) == -math.inf
    assert qnorm(1.0) == math.inf
    assert qnorm(0.0, lower_tail=False) == math.inf
    assert qnorm(0.0, log_p=True) == math.inf
    assert qnorm(0.3, 4.0, 0.0) == 4.0
    with pytest.warns(DomainWarning, match="qnorm"):
        assert math.isnan(qnorm(1.2))
    with pytest.warns(DomainWarning, match="qnorm"):
        assert math.isnan(qnorm(0.3, 0.0, -1.0))


def test_qnorm_inverts_pnorm() -> None:
    q = np.array([-5.0, -0.4, 0.0, 2.2])
    np.testing.assert_allclose(qnorm(pnorm(q, 1.0, 2.0), 1.0, 2.0), q, atol=1e-9)


def test_rnorm_draws() -> None:
    draws = rnorm(2000, 10.0, 2.0, random_state=5)
    assert draws.shape == (2000,)
    assert abs(draws.mean() - 10.0) < 0.2
    assert abs(draws.std() - 2.0) < 0.2


def test_rnorm_degenerate_parameters() -> None:
    np.testing.assert_array_equal(rnorm(3, 4.0, 0.0, random_state=1), np.full(3, 4.0))
    np.testing.assert_array_equal(rnorm(2, math.inf, 1.0, random_state=1), [math.inf] * 2)
    with pytest.warns(DomainWarning, match="rnorm"):
        assert np.all(np.isnan(rnorm(2, 0.0, -1.0, random_state=1)))


def test_rnorm_recycles_means() -> None:
    draws = rnorm(4, [0.0, 100.0], 0.0, random_state=1)
    np.testing.assert_array_equal(draws, [0.0, 100.0, 0.0, 100.0])

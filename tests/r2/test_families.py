"""
Family and link unit tests.

Tests inverse links, outcome-type resolution and the per-draw
residual variance each family implies.
"""

import numpy as np
import pytest
from scipy.stats import norm

from bayesr2.core.exceptions import DomainError
from bayesr2.r2.families import (
    Binomial,
    Gaussian,
    IdentityLink,
    LogitLink,
    ProbitLink,
    resolve_family,
)


# =====================================================================
# Links
# =====================================================================

class TestLinks:

    def test_identity_linkinv_returns_eta(self):
        eta = np.linspace(-5, 5, 11)
        np.testing.assert_array_equal(IdentityLink().linkinv(eta), eta)

    def test_logit_linkinv_is_logistic(self):
        eta = np.linspace(-6, 6, 25)
        np.testing.assert_allclose(
            LogitLink().linkinv(eta), 1.0 / (1.0 + np.exp(-eta)), rtol=1e-12,
        )

    def test_probit_linkinv_is_normal_cdf(self):
        eta = np.array([-1.959963984540054, 0.0, 1.0])
        np.testing.assert_allclose(
            ProbitLink().linkinv(eta), [0.025, 0.5, norm.cdf(1.0)], rtol=1e-12,
        )

    def test_logit_extreme_eta_stays_in_unit_interval(self):
        mu = LogitLink().linkinv(np.array([-800.0, -30.0, 0.0, 30.0, 800.0]))
        assert np.all(np.isfinite(mu))
        assert np.all((mu >= 0.0) & (mu <= 1.0))
        assert mu[2] == 0.5

    def test_linkinv_does_not_alias_input(self):
        eta = np.array([1.0, 2.0])
        mu = IdentityLink().linkinv(eta)
        mu[0] = 99.0
        assert eta[0] == 1.0


# =====================================================================
# Resolution
# =====================================================================

class TestResolveFamily:

    @pytest.mark.parametrize("name", ["continuous", "gaussian", "Normal"])
    def test_continuous_names(self, name):
        family = resolve_family(name)
        assert isinstance(family, Gaussian)
        assert family.outcome_type == "continuous"
        assert family.link.name == "identity"

    @pytest.mark.parametrize("name", ["binary", "binomial", "BERNOULLI"])
    def test_binary_names(self, name):
        family = resolve_family(name)
        assert isinstance(family, Binomial)
        assert family.outcome_type == "binary"
        assert family.link.name == "logit"

    def test_link_override(self):
        assert resolve_family("binary", "probit").link.name == "probit"
        assert resolve_family("binary", ProbitLink()).link.name == "probit"

    def test_instance_passthrough(self):
        family = Binomial(link="probit")
        assert resolve_family(family) is family

    def test_instance_with_link_rejected(self):
        with pytest.raises(ValueError, match="link"):
            resolve_family(Binomial(), "probit")

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown outcome type"):
            resolve_family("poisson")

    def test_unknown_link(self):
        with pytest.raises(ValueError, match="Unknown link"):
            resolve_family("binary", "cloglog")

    def test_bad_type(self):
        with pytest.raises(TypeError):
            resolve_family(3)

    def test_repr(self):
        assert repr(Binomial()) == "Binomial(link='logit')"


# =====================================================================
# Residual variance
# =====================================================================

class TestResidualVariance:

    def test_gaussian_returns_parameter_draws(self):
        res_var = np.array([1.0, 2.0])
        out = Gaussian().residual_variance(np.zeros((2, 3)), res_var)
        np.testing.assert_array_equal(out, res_var)

    def test_binomial_mean_bernoulli_variance(self):
        p = np.array([
            [0.5, 0.5, 0.5, 0.5],
            [0.1, 0.9, 0.1, 0.9],
            [0.0, 1.0, 0.0, 1.0],
        ])
        out = Binomial().residual_variance(p, None)
        np.testing.assert_allclose(out, [0.25, 0.09, 0.0], atol=1e-15)

    def test_binomial_is_not_parameterised(self):
        assert not Binomial().residual_variance_is_parameter
        assert Gaussian().residual_variance_is_parameter


class TestDomainChecks:

    def test_binomial_rejects_probability_above_one(self):
        with pytest.raises(DomainError):
            Binomial().check_mean(np.array([[0.2, 1.3]]), "fitted_values")

    def test_binomial_rejects_non_binary_outcome(self):
        with pytest.raises(DomainError):
            Binomial().check_outcome(np.array([0.0, 0.5]), "y")

    def test_gaussian_accepts_any_finite_mean(self):
        Gaussian().check_mean(np.array([[-100.0, 1e6]]), "fitted_values")
        Gaussian().check_outcome(np.array([-3.0, 2.5]), "y")

"""
BayesR2Design construction and validation tests.

Every contract violation must be rejected at construction, before any
R² is computed.
"""

import numpy as np
import pytest

from bayesr2.core.exceptions import DimensionError, DomainError, InvalidInputError
from bayesr2.r2.design import BayesR2Design, linear_predictor


class TestFromDraws:

    def test_continuous_properties(self):
        mu = [[1.0, 2.0, 3.0], [2.0, 3.0, 4.0]]
        design = BayesR2Design.from_draws(
            mu, outcome_type="continuous", residual_variance=[1.0, 2.0],
        )
        assert design.n_draws == 2
        assert design.n_observations == 3
        assert design.outcome_type == "continuous"
        assert design.method == "model"
        assert design.y is None
        np.testing.assert_array_equal(design.residual_variance, [1.0, 2.0])

    def test_sigma_is_squared(self):
        design = BayesR2Design.from_draws(
            [[1.0, 2.0], [3.0, 5.0]], outcome_type="continuous", sigma=[0.5, 3.0],
        )
        np.testing.assert_allclose(design.residual_variance, [0.25, 9.0])

    def test_binary_has_no_residual_variance(self):
        design = BayesR2Design.from_draws([[0.2, 0.8]], outcome_type="binary")
        assert design.residual_variance is None
        assert design.outcome_type == "binary"

    def test_input_is_copied(self):
        mu = np.array([[1.0, 2.0, 3.0]])
        design = BayesR2Design.from_draws(mu, outcome_type="continuous", residual_variance=[1.0])
        mu[0, 0] = 100.0
        assert design.fitted_values[0, 0] == 1.0


class TestResidualVarianceContract:

    def test_missing_for_continuous(self):
        with pytest.raises(InvalidInputError, match="required"):
            BayesR2Design.from_draws([[1.0, 2.0]], outcome_type="continuous")

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="fitted_values=2, residual_variance=3"):
            BayesR2Design.from_draws(
                [[1.0, 2.0], [1.0, 3.0]],
                outcome_type="continuous",
                residual_variance=[1.0, 1.0, 1.0],
            )

    @pytest.mark.parametrize("bad", [0.0, -1.0])
    def test_non_positive(self, bad):
        with pytest.raises(DomainError, match="strictly positive"):
            BayesR2Design.from_draws(
                [[1.0, 2.0]], outcome_type="continuous", residual_variance=[bad],
            )

    def test_non_positive_sigma(self):
        with pytest.raises(DomainError):
            BayesR2Design.from_draws([[1.0, 2.0]], outcome_type="continuous", sigma=[0.0])

    def test_non_finite(self):
        with pytest.raises(InvalidInputError, match="non-finite"):
            BayesR2Design.from_draws(
                [[1.0, 2.0]], outcome_type="continuous", residual_variance=[np.inf],
            )

    def test_not_1d(self):
        with pytest.raises(DimensionError):
            BayesR2Design.from_draws(
                [[1.0, 2.0]], outcome_type="continuous", residual_variance=[[1.0]],
            )

    def test_sigma_and_residual_variance_exclusive(self):
        with pytest.raises(InvalidInputError, match="mutually exclusive"):
            BayesR2Design.from_draws(
                [[1.0, 2.0]], outcome_type="continuous",
                residual_variance=[1.0], sigma=[1.0],
            )

    def test_rejected_for_binary(self):
        with pytest.raises(InvalidInputError, match="not used for binary"):
            BayesR2Design.from_draws(
                [[0.2, 0.8]], outcome_type="binary", residual_variance=[0.1],
            )


class TestFittedValuesContract:

    def test_must_be_2d(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            BayesR2Design.from_draws([1.0, 2.0, 3.0], outcome_type="continuous",
                                     residual_variance=[1.0])

    def test_no_draws(self):
        with pytest.raises(DimensionError):
            BayesR2Design.from_draws(np.zeros((0, 4)), outcome_type="binary")

    def test_single_observation(self):
        with pytest.raises(DimensionError, match="at least 2"):
            BayesR2Design.from_draws([[0.5], [0.4]], outcome_type="binary")

    def test_non_finite(self):
        with pytest.raises(InvalidInputError, match="1 NaN"):
            BayesR2Design.from_draws([[0.5, np.nan]], outcome_type="binary")

    def test_probability_above_one(self):
        with pytest.raises(DomainError):
            BayesR2Design.from_draws([[0.2, 1.3, 0.5]], outcome_type="binary")

    def test_negative_probability(self):
        with pytest.raises(DomainError):
            BayesR2Design.from_draws([[-0.01, 0.5]], outcome_type="binary")

    def test_grouped_binomial_3d_rejected(self):
        with pytest.raises(InvalidInputError, match="grouped"):
            BayesR2Design.from_draws(np.full((2, 3, 2), 0.5), outcome_type="binary")


class TestOutcomeContract:

    def test_residual_method_requires_y(self):
        with pytest.raises(InvalidInputError, match="y: required"):
            BayesR2Design.from_draws([[0.2, 0.8]], outcome_type="binary", method="residual")

    def test_residual_method_without_residual_variance(self):
        design = BayesR2Design.from_draws(
            [[1.0, 2.0]], outcome_type="continuous", y=[1.5, 2.5], method="residual",
        )
        assert design.residual_variance is None

    def test_column_vector_y_flattened(self):
        design = BayesR2Design.from_draws(
            [[0.2, 0.8]], outcome_type="binary", y=[[0], [1]],
        )
        assert design.y.shape == (2,)

    def test_two_column_y_rejected(self):
        with pytest.raises(InvalidInputError, match="grouped"):
            BayesR2Design.from_draws(
                [[0.2, 0.8]], outcome_type="binary", y=[[1, 2], [3, 0]],
            )

    def test_y_length_mismatch(self):
        with pytest.raises(DimensionError):
            BayesR2Design.from_draws([[0.2, 0.8]], outcome_type="binary", y=[0, 1, 1])

    def test_non_binary_y(self):
        with pytest.raises(DomainError, match="0/1"):
            BayesR2Design.from_draws([[0.2, 0.8]], outcome_type="binary", y=[0, 2])

    def test_bool_y_accepted(self):
        design = BayesR2Design.from_draws(
            [[0.2, 0.8]], outcome_type="binary", y=np.array([False, True]),
        )
        np.testing.assert_array_equal(design.y, [0.0, 1.0])

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown method"):
            BayesR2Design.from_draws([[0.2, 0.8]], outcome_type="binary", method="loo")


class TestFromCoefficients:

    def test_linear_predictor_shape_and_values(self):
        X = np.array([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0]])
        beta = np.array([[1.0, 2.0], [0.0, -1.0]])
        eta = linear_predictor(X, beta)
        assert eta.shape == (2, 3)
        np.testing.assert_allclose(eta, [[1.0, 3.0, 5.0], [0.0, -1.0, -2.0]])

    def test_1d_X_is_single_column(self):
        eta = linear_predictor([0.0, 1.0, 2.0], [[2.0]])
        np.testing.assert_allclose(eta, [[0.0, 2.0, 4.0]])

    def test_coefficient_count_mismatch(self):
        with pytest.raises(DimensionError):
            linear_predictor(np.ones((3, 2)), np.ones((4, 3)))

    def test_binary_uses_inverse_logit(self):
        X = np.array([[1.0, -1.0], [1.0, 0.0], [1.0, 1.0]])
        beta = np.array([[0.0, 1.0]])
        design = BayesR2Design.from_coefficients(X, beta, outcome_type="binary")
        expected = 1.0 / (1.0 + np.exp(-np.array([-1.0, 0.0, 1.0])))
        np.testing.assert_allclose(design.fitted_values[0], expected, rtol=1e-12)

    def test_probit_link(self):
        from scipy.stats import norm
        X = np.array([[1.0, -1.0], [1.0, 0.5]])
        beta = np.array([[0.0, 1.0]])
        design = BayesR2Design.from_coefficients(X, beta, outcome_type="binary", link="probit")
        np.testing.assert_allclose(design.fitted_values[0], norm.cdf([-1.0, 0.5]))
        assert design.family.link.name == "probit"

    def test_continuous_identity(self, linear_draws):
        X, y, coefficients, sigma = linear_draws
        design = BayesR2Design.from_coefficients(
            X, coefficients, outcome_type="continuous", sigma=sigma,
        )
        np.testing.assert_allclose(design.fitted_values, coefficients @ X.T)

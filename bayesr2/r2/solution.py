"""
Bayesian R² solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from bayesr2.core.result import Result

if TYPE_CHECKING:
    from bayesr2.r2.design import BayesR2Design


# Default probability mass of the central posterior interval
DEFAULT_INTERVAL_PROB = 0.9

_METHOD_LABELS = {
    'model': 'modelled residual variance',
    'residual': 'residual draws (y - mu)',
}


@dataclass(frozen=True)
class BayesR2Params:
    """
    Parameter payload for Bayesian R².

    One entry per posterior draw, in input draw order.
    """
    r2: NDArray[np.floating[Any]]
    var_fit: NDArray[np.floating[Any]]
    var_res: NDArray[np.floating[Any]]


@dataclass
class BayesR2Solution:
    """
    User-facing Bayesian R² results.

    Wraps the backend Result and provides the per-draw values plus the
    summaries usually reported for them (median, MAD SD, intervals).
    """
    _result: Result[BayesR2Params]
    _design: 'BayesR2Design'

    # --- Core fields ---

    @property
    def r2(self) -> NDArray[np.floating[Any]]:
        """Per-draw Bayesian R², shape (S,)."""
        return self._result.params.r2

    @property
    def var_fit(self) -> NDArray[np.floating[Any]]:
        """Per-draw variance of the fitted means, shape (S,)."""
        return self._result.params.var_fit

    @property
    def var_res(self) -> NDArray[np.floating[Any]]:
        """Per-draw residual variance, shape (S,)."""
        return self._result.params.var_res

    @property
    def n_draws(self) -> int:
        return self._design.n_draws

    @property
    def n_observations(self) -> int:
        return self._design.n_observations

    @property
    def outcome_type(self) -> str:
        return self._design.outcome_type

    @property
    def method(self) -> str:
        return self._design.method

    # --- Summaries ---

    @property
    def median(self) -> float:
        return float(np.median(self.r2))

    @property
    def mean(self) -> float:
        return float(np.mean(self.r2))

    @property
    def sd(self) -> float:
        """
        Posterior standard deviation (ddof=1).

        NaN, with a RuntimeWarning, when there is a single draw.
        """
        if self.n_draws < 2:
            warnings.warn(
                "sd is undefined for a single posterior draw; returning NaN",
                RuntimeWarning,
                stacklevel=2,
            )
            return float('nan')
        return float(np.std(self.r2, ddof=1))

    @property
    def mad_sd(self) -> float:
        """Median absolute deviation, scaled to be consistent with the SD
        of a normal distribution."""
        return float(sp_stats.median_abs_deviation(self.r2, scale='normal'))

    def quantile(self, q: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """
        Posterior quantile(s) of R².

        Args:
            q: Probability or array of probabilities in [0, 1]

        Raises:
            ValueError: If any probability lies outside [0, 1]
        """
        q_arr = np.asarray(q, dtype=np.float64)
        if np.any((q_arr < 0.0) | (q_arr > 1.0)):
            raise ValueError(f"q must lie in [0, 1], got {q!r}")
        result = np.quantile(self.r2, q_arr)
        if result.ndim == 0:
            return float(result)
        return result

    def interval(self, prob: float = DEFAULT_INTERVAL_PROB) -> tuple[float, float]:
        """
        Central posterior interval holding ``prob`` of the draws.

        Raises:
            ValueError: If prob is not strictly between 0 and 1
        """
        if not 0.0 < prob < 1.0:
            raise ValueError(f"prob must be in (0, 1), got {prob}")
        alpha = (1.0 - prob) / 2.0
        lower, upper = np.quantile(self.r2, [alpha, 1.0 - alpha])
        return float(lower), float(upper)

    def histogram(
        self, bins: int | ArrayLike = 20
    ) -> tuple[NDArray[np.int_], NDArray[np.floating[Any]]]:
        """
        Histogram of the R² draws over [0, 1].

        Returns:
            (counts, bin_edges) as from numpy.histogram
        """
        return np.histogram(self.r2, bins=bins, range=(0.0, 1.0))

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self, prob: float = DEFAULT_INTERVAL_PROB) -> str:
        """Text summary of the R² draws."""
        family = self._design.family
        lower, upper = self.interval(prob)
        sd = self.sd if self.n_draws >= 2 else float('nan')
        pct = f"{prob * 100:g}%"

        lines = [
            "Bayesian R-squared",
            "=" * 60,
            f"Outcome: {self.outcome_type} ({family.name}, {family.link.name} link)",
            f"Residual variance: {_METHOD_LABELS[self.method]}",
            f"Posterior draws: {self.n_draws}",
            f"Observations: {self.n_observations}",
            "-" * 60,
            f"{'Median':<16} {self.median:>12.4f}",
            f"{'MAD_SD':<16} {self.mad_sd:>12.4f}",
            f"{'Mean':<16} {self.mean:>12.4f}",
            f"{'SD':<16} {sd:>12.4f}",
            f"{pct + ' interval':<16} ({lower:.4f}, {upper:.4f})",
            "-" * 60,
            f"Backend: {self.backend_name}",
        ]
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BayesR2Solution(S={self.n_draws}, n={self.n_observations}, "
            f"outcome_type={self.outcome_type!r}, median={self.median:.4f})"
        )

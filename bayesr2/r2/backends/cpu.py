"""
CPU backend for Bayesian R².

Vectorised NumPy over the S x N matrix of fitted means: every draw is
handled by the same array operations, with no Python-level loop.
"""

from typing import Any
import numpy as np

from bayesr2.core.result import Result
from bayesr2.core.exceptions import DegenerateVarianceError
from bayesr2.core.compute.timing import Timer
from bayesr2.r2.design import BayesR2Design
from bayesr2.r2.solution import BayesR2Params


class CPUBayesR2Backend:
    """
    CPU backend using NumPy.

    Implements the Backend protocol for BayesR2Design -> BayesR2Params.
    """

    @property
    def name(self) -> str:
        return 'cpu_numpy'

    def solve(self, design: BayesR2Design) -> Result[BayesR2Params]:
        """
        Compute Bayesian R² for every posterior draw.

        Algorithm (per draw s):
            1. var_fit[s] = var(mu[s, :]), ddof=1 (exactly 0 for a constant row)
            2. var_res[s] = modelled residual variance of draw s
               (σ²_s, or mean p(1-p) for binary outcomes), or
               var(y - mu[s, :]) with ddof=1 for method='residual'
            3. r2[s] = var_fit[s] / (var_fit[s] + var_res[s])

        Raises:
            DegenerateVarianceError: If any draw has var_fit == var_res == 0
        """
        timer = Timer()
        timer.start()

        mu = design.fitted_values
        family = design.family

        # === Variance Components ===
        with timer.section('variance'):
            var_fit = _row_variance(mu)
            if design.method == 'residual':
                var_res = _row_variance(design.y[np.newaxis, :] - mu)
            else:
                var_res = np.asarray(
                    family.residual_variance(mu, design.residual_variance),
                    dtype=np.float64,
                )

        # === Degeneracy Check (before any ratio is formed) ===
        with timer.section('degeneracy_check'):
            degenerate = np.flatnonzero((var_fit == 0.0) & (var_res == 0.0))
            if degenerate.size > 0:
                shown = degenerate[:10].tolist()
                raise DegenerateVarianceError(
                    f"{degenerate.size} draw(s) have zero fitted and zero residual "
                    f"variance, so R² is 0/0 (draw indices: {shown}"
                    f"{', ...' if degenerate.size > 10 else ''})",
                    draws=tuple(int(i) for i in degenerate),
                )

        # === Variance Ratio ===
        with timer.section('ratio'):
            r2 = var_fit / (var_fit + var_res)

        timer.stop()

        warnings_list: list[str] = []
        n_zero_res = int(np.sum(var_res == 0.0))
        if n_zero_res > 0:
            warnings_list.append(
                f"{n_zero_res} draw(s) have zero residual variance; their R² is exactly 1"
            )

        params = BayesR2Params(r2=r2, var_fit=var_fit, var_res=var_res)

        info: dict[str, Any] = {
            'method': design.method,
            'outcome_type': design.outcome_type,
            'family': family.name,
            'n_draws': design.n_draws,
            'n_observations': design.n_observations,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _row_variance(a: np.ndarray) -> np.ndarray:
    """Sample variance (ddof=1) of each row; exactly 0 for constant rows.

    np.var of a constant non-dyadic row such as [0.1, 0.1, 0.1] leaves
    rounding residue (~1e-34) from the mean subtraction.
    """
    var = np.var(a, axis=1, ddof=1)
    var[np.ptp(a, axis=1) == 0.0] = 0.0
    return var

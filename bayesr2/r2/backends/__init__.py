"""
Bayesian R² backends.

Available backends:
    CPUBayesR2Backend: vectorised NumPy implementation
"""

from bayesr2.r2.backends.cpu import CPUBayesR2Backend

__all__ = [
    "CPUBayesR2Backend",
]

"""
Shared compute infrastructure for bayesr2.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared infrastructure only.

Submodules:
    timing: Execution timing utilities
"""

from bayesr2.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]

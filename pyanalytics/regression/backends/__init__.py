"""
Regression backends.

Available backends:
    CPUNormalEquationsBackend: normal equations with Gauss-Jordan inversion
"""

from pyanalytics.regression.backends.cpu import CPUNormalEquationsBackend

__all__ = [
    "CPUNormalEquationsBackend",
]

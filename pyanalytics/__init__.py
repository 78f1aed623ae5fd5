"""
PyAnalytics: statistical analysis core for tabular business data.

Takes a Dataset of rows and typed columns and returns typed, immutable
results. Messy data degrades to well-formed results carrying a reason
code; only structurally invalid calls raise.

Submodules:
    core: Dataset, cell coercion, Result envelope, distributions, linear algebra
    hypothesis: Welch t-test, chi-squared test of independence, one-way ANOVA
    descriptive: Confidence intervals, percentiles and outliers, column summaries
    correlation: Pearson, Spearman and non-linearity detection
    pareto: 80/20 analysis
    clustering: K-means++ with automatic K
    regression: Ordinary least squares
    timeseries: Date detection, decomposition, forecasting, growth
    auto: Automatic selection and execution of analyses
"""

__version__ = "0.1.0"

from pyanalytics.core import Dataset, ColumnInfo, Result
from pyanalytics import hypothesis
from pyanalytics import descriptive
from pyanalytics import correlation
from pyanalytics import pareto
from pyanalytics import clustering
from pyanalytics import regression
from pyanalytics import timeseries
from pyanalytics import auto
from pyanalytics.auto import auto_analysis, iter_auto_analysis

__all__ = [
    "__version__",
    "Dataset",
    "ColumnInfo",
    "Result",
    "auto_analysis",
    "iter_auto_analysis",
    "hypothesis",
    "descriptive",
    "correlation",
    "pareto",
    "clustering",
    "regression",
    "timeseries",
    "auto",
]

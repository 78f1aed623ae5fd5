"""
Automatic selection and execution of the analyses that fit a dataset.

Usage:
    from pyanalytics import Dataset, auto_analysis

    result = auto_analysis(Dataset.from_dataframe(df), seed=42)
    print(result.summary())

    # Incremental, yielding control to the host between analyses
    for step in iter_auto_analysis(ds):
        render(step.name, step.result)

Analyses are chosen from the column-type census and capped in column count.
Each one runs independently: an exception in one is logged and recorded
under ``failures`` and the rest still run.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

from pyanalytics.auto.solution import ANALYSES, AnalysisStep, AutoAnalysisSolution
from pyanalytics.clustering.solvers import kmeans_clustering
from pyanalytics.clustering._kmeans import Seed
from pyanalytics.core.config import DEFAULT_AUTO, AutoAnalysisConfig
from pyanalytics.core.dataset import Dataset
from pyanalytics.core.values import is_missing
from pyanalytics.correlation._nonlinear import detect_nonlinear_correlations
from pyanalytics.descriptive._interval import confidence_interval
from pyanalytics.descriptive._percentiles import percentile_analysis
from pyanalytics.hypothesis.solvers import anova_from_dataset, t_test_from_dataset
from pyanalytics.pareto.solvers import pareto_analysis
from pyanalytics.regression.solvers import multiple_regression
from pyanalytics.timeseries.solvers import auto_detect_time_series

logger = logging.getLogger(__name__)

MIN_GROUP_LEVELS = 2


def _attempt(
    key: str,
    failures: dict[str, str],
    func: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Run one analysis, recording rather than raising its error."""
    try:
        return func(*args, **kwargs)
    except Exception as exc:
        logger.warning("Analysis %s failed: %s", key, exc, exc_info=True)
        failures[key] = f"{type(exc).__name__}: {exc}"
        return None


def _grouping_column(dataset: Dataset, max_levels: int) -> str | None:
    """First string column with 2..max_levels distinct non-missing values."""
    for name in dataset.columns_of_type('string'):
        levels = {str(v) for v in dataset.column(name) if not is_missing(v)}
        if MIN_GROUP_LEVELS <= len(levels) <= max_levels:
            return name
    return None


def _segmentation(dataset, numeric, config, seed, failures):
    if len(numeric) < 2 or dataset.row_count < config.min_rows:
        return None
    return _attempt(
        'segmentation', failures,
        kmeans_clustering, dataset, numeric[:config.max_columns], seed=seed,
    )


def _pareto(dataset, numeric, config, seed, failures):
    strings = dataset.columns_of_type('string')
    if not strings or not numeric:
        return ()
    category = strings[0]
    solutions = []
    for value_column in numeric[:config.max_pareto_columns]:
        solution = _attempt(
            f'pareto[{value_column}]', failures,
            pareto_analysis, dataset, category, value_column,
        )
        if solution is not None:
            solutions.append(solution)
    return tuple(solutions)


def _regression(dataset, numeric, config, seed, failures):
    if len(numeric) < 2 or dataset.row_count < config.min_rows:
        return None
    target = numeric[0]
    predictors = list(numeric[1:1 + config.max_predictors])
    return _attempt(
        'regression', failures,
        multiple_regression, dataset, target, predictors,
    )


def _percentiles(dataset, numeric, config, seed, failures):
    summaries = []
    for name in numeric[:config.max_columns]:
        values = dataset.numeric(name)
        if len(values) < config.percentile_min_values:
            continue
        summary = _attempt(
            f'percentiles[{name}]', failures,
            percentile_analysis, values, column=name,
        )
        if summary is not None:
            summaries.append(summary)
    return tuple(summaries)


def _confidence_intervals(dataset, numeric, config, seed, failures):
    intervals = []
    for name in numeric[:config.max_columns]:
        values = dataset.numeric(name)
        if len(values) < config.ci_min_values:
            continue
        interval = _attempt(
            f'confidence_intervals[{name}]', failures,
            confidence_interval, values, 0.95, column=name,
        )
        if interval is not None:
            intervals.append(interval)
    return tuple(intervals)


def _nonlinear_correlations(dataset, numeric, config, seed, failures):
    if len(numeric) < 2:
        return ()
    pairs = _attempt(
        'nonlinear_correlations', failures,
        detect_nonlinear_correlations, dataset,
    )
    return tuple(pairs or ())


def _time_series(dataset, numeric, config, seed, failures):
    if not numeric:
        return ()
    solutions = _attempt(
        'time_series', failures,
        auto_detect_time_series, dataset, max_columns=config.max_timeseries_columns,
    )
    return tuple(solutions or ())


def _hypothesis_tests(dataset, numeric, config, seed, failures):
    if not numeric or dataset.row_count < config.min_rows:
        return ()
    group_column = _grouping_column(dataset, config.max_group_levels)
    if group_column is None:
        return ()

    value_column = numeric[0]
    tests = []
    anova = _attempt(
        f'hypothesis_tests[anova:{group_column}]', failures,
        anova_from_dataset, dataset, value_column, group_column,
    )
    if anova is not None:
        tests.append(anova)
    if anova is not None and len(anova.estimate or {}) == 2:
        welch = _attempt(
            f'hypothesis_tests[t_test:{group_column}]', failures,
            t_test_from_dataset, dataset, value_column, group_column,
        )
        if welch is not None:
            tests.append(welch)
    return tuple(tests)


_RUNNERS = {
    'segmentation': _segmentation,
    'pareto': _pareto,
    'regression': _regression,
    'percentiles': _percentiles,
    'confidence_intervals': _confidence_intervals,
    'nonlinear_correlations': _nonlinear_correlations,
    'time_series': _time_series,
    'hypothesis_tests': _hypothesis_tests,
}


def iter_auto_analysis(
    dataset: Dataset,
    *,
    config: AutoAnalysisConfig = DEFAULT_AUTO,
    seed: Seed = None,
) -> Iterator[AnalysisStep]:
    """
    Run the applicable analyses one at a time.

    Parameters
    ----------
    dataset : Dataset
    config : AutoAnalysisConfig
        Row thresholds and column caps.
    seed : int, Generator or None
        Seed for K-means++ initialization.

    Yields
    ------
    AnalysisStep
        One per analysis, in the order segmentation, pareto, regression,
        percentiles, confidence_intervals, nonlinear_correlations,
        time_series, hypothesis_tests. Analyses that do not apply yield
        None or an empty tuple.
    """
    numeric = dataset.columns_of_type('number')
    logger.info(
        "Auto analysis of %r: %d rows, %d numeric columns",
        dataset.name, dataset.row_count, len(numeric),
    )
    for name in ANALYSES:
        failures: dict[str, str] = {}
        result = _RUNNERS[name](dataset, numeric, config, seed, failures)
        yield AnalysisStep(name=name, result=result, failures=failures)


def auto_analysis(
    dataset: Dataset,
    *,
    config: AutoAnalysisConfig = DEFAULT_AUTO,
    seed: Seed = None,
) -> AutoAnalysisSolution:
    """
    Run every applicable analysis on a dataset.

    Selection:
        - segmentation and regression: >= 2 numeric columns and
          ``config.min_rows`` rows; first 5 numeric columns, regression
          target is the first of them
        - pareto: first string column by the first 2 numeric columns
        - percentiles (>= 5 values) and confidence intervals (>= 3 values)
          for the first 5 numeric columns
        - non-linear correlations: >= 2 numeric columns
        - time series: a date-like column and a numeric column
        - hypothesis tests: one-way ANOVA of the first numeric column across
          the first string column with 2-10 categories, plus a Welch t-test
          when it has exactly 2

    Returns
    -------
    AutoAnalysisSolution
        ``failures`` lists analyses that raised; they never abort the run.
    """
    collected: dict[str, Any] = {}
    failures: dict[str, str] = {}
    for step in iter_auto_analysis(dataset, config=config, seed=seed):
        collected[step.name] = step.result
        failures.update(step.failures)

    return AutoAnalysisSolution(dataset_name=dataset.name, failures=failures, **collected)

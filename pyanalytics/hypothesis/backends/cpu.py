"""
CPU backend for hypothesis tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

from pyanalytics.core.result import Result
from pyanalytics.core.compute.timing import Timer
from pyanalytics.hypothesis._common import HTestParams
from pyanalytics.hypothesis.design import HypothesisDesign


class CPUHypothesisBackend:
    """CPU backend for hypothesis tests."""

    @property
    def name(self) -> str:
        return 'cpu_hypothesis'

    def solve(self, design: HypothesisDesign) -> Result[HTestParams]:
        """Dispatch to test-specific implementation based on design.test_type."""
        timer = Timer()
        timer.start()

        test_type = design.test_type

        with timer.section(test_type):
            if test_type == "welch_t":
                from pyanalytics.hypothesis.backends._t_test import welch_t_test
                params, warnings_list, reason = welch_t_test(design)
            elif test_type == "chisq_independence":
                from pyanalytics.hypothesis.backends._chisq_test import chisq_independence
                params, warnings_list, reason = chisq_independence(design)
            elif test_type == "anova_oneway":
                from pyanalytics.hypothesis.backends._anova import anova_oneway
                params, warnings_list, reason = anova_oneway(design)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()

        info = {'test_type': test_type}
        if reason is not None:
            info['reason'] = reason

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

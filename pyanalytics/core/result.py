"""
Generic result container for all PyAnalytics computations.

The Result class provides a standardized envelope that all domain-specific
results use. This enables shared tooling for timing, warnings and degenerate
case reporting while allowing domains to define their own parameter structures.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (reason codes, iterations, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True); every call produces a fresh Result
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for analytical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (statistics, clusters, forecasts)
        info: Structured metadata (method, reason code, iterations)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the code path that produced this result
        warnings: Non-fatal issues encountered during computation

    A degenerate result (insufficient data, zero variance, singular matrix)
    is still a Result: ``info['reason']`` names the condition and the
    params hold conservative defaults.

    Examples:
        >>> Result(
        ...     params=HTestParams(...),
        ...     info={'test_type': 'welch_t'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_hypothesis'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    @property
    def reason(self) -> str | None:
        """Reason code for a degenerate result, or None for a normal one."""
        return self.info.get('reason')

    @property
    def is_degenerate(self) -> bool:
        return self.reason is not None

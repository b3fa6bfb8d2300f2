"""Metrics hook protocol and no-op default implementation.

okgroups emits counters and timings around every gateway call.  By default
a :class:`NoopMetricsHook` is used.  Supply any object satisfying
:class:`MetricsHook` via ``OkConfig(metrics=...)`` to route data points to
a real backend.

Emitted metric names:

* ``okgroups.requests_total``       -- counter (tags: api_method, status)
* ``okgroups.request_duration_ms``  -- timing  (tags: api_method, status)
* ``okgroups.api_errors_total``     -- counter (tags: api_method, error_code)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy."""

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

from __future__ import annotations

import logging
from typing import Optional

from adapters.metrics.base import Metrics
from adapters.metrics.noop import NoOpMetrics
from adapters.metrics.prometheus import PrometheusMetrics
from asyncstatus.clock import Clock
from asyncstatus.settings import METRICS_BACKENDS, Settings, get_settings
from asyncstatus.status import AsyncStatus

log = logging.getLogger(__name__)


def build_metrics(settings: Settings) -> Metrics:
    kind = (settings.metrics_backend or "noop").lower()
    if kind == "noop":
        return NoOpMetrics()
    if kind == "prometheus":
        return PrometheusMetrics()
    raise ValueError(
        f"Unknown metrics backend: {kind!r} (expected one of {', '.join(METRICS_BACKENDS)})"
    )


def make_async_status(
    name: Optional[str] = None,
    *,
    settings: Settings | None = None,
    clock: Clock | None = None,
    metrics: Metrics | None = None,
) -> AsyncStatus:
    """
    Build a tracker wired from Settings.

    Explicit metrics/clock arguments win over configuration.
    """
    settings = settings or get_settings()
    name = name or settings.default_name
    if metrics is None:
        metrics = build_metrics(settings)
        if isinstance(metrics, PrometheusMetrics):
            metrics.prime(tracker=name)

    log.info(
        "Built AsyncStatus %r with %s metrics", name, type(metrics).__name__
    )
    return AsyncStatus(name, clock=clock, metrics=metrics)

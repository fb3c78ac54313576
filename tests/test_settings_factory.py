import pytest

from adapters.metrics.noop import NoOpMetrics
from adapters.metrics.prometheus import PrometheusMetrics
from asyncstatus.factory import build_metrics, make_async_status
from asyncstatus.prom import REGISTRY
from asyncstatus.settings import Settings, get_settings


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("ASYNC_STATUS_METRICS", raising=False)
    monkeypatch.delenv("ASYNC_STATUS_DEFAULT_NAME", raising=False)

    s = Settings.from_env()
    assert s.metrics_backend == "noop"
    assert s.default_name == "default"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ASYNC_STATUS_METRICS", " Prometheus ")
    monkeypatch.setenv("ASYNC_STATUS_DEFAULT_NAME", "checkout")

    s = Settings.from_env()
    assert s.metrics_backend == "prometheus"
    assert s.default_name == "checkout"


def test_settings_blank_values_fall_back(monkeypatch):
    monkeypatch.setenv("ASYNC_STATUS_METRICS", "   ")
    monkeypatch.setenv("ASYNC_STATUS_DEFAULT_NAME", "")

    s = Settings.from_env()
    assert s.metrics_backend == "noop"
    assert s.default_name == "default"


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("ASYNC_STATUS_DEFAULT_NAME", "first")
    first = get_settings()
    monkeypatch.setenv("ASYNC_STATUS_DEFAULT_NAME", "second")

    assert get_settings() is first
    assert get_settings().default_name == "first"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def test_build_metrics_backends():
    assert isinstance(build_metrics(Settings(metrics_backend="noop")), NoOpMetrics)
    assert isinstance(
        build_metrics(Settings(metrics_backend="prometheus")), PrometheusMetrics
    )


def test_build_metrics_rejects_unknown_backend():
    with pytest.raises(ValueError, match="statsd"):
        build_metrics(Settings(metrics_backend="statsd"))


def test_make_async_status_uses_settings(clock):
    settings = Settings(metrics_backend="prometheus", default_name="factory_job")
    s = make_async_status(settings=settings, clock=clock)

    assert s.name == "factory_job"
    assert isinstance(s.metrics, PrometheusMetrics)
    assert (
        REGISTRY.get_sample_value(
            "async_status_attempts_total",
            {"tracker": "factory_job", "outcome": "started"},
        )
        == 0
    )

    s.start()
    clock.advance(2)
    s.end()
    assert s.elapsed_time == 2


def test_make_async_status_explicit_args_win():
    settings = Settings(metrics_backend="prometheus")
    metrics = NoOpMetrics()
    s = make_async_status("explicit", settings=settings, metrics=metrics)

    assert s.name == "explicit"
    assert s.metrics is metrics


def test_make_async_status_reads_env(monkeypatch):
    monkeypatch.setenv("ASYNC_STATUS_METRICS", "noop")
    monkeypatch.setenv("ASYNC_STATUS_DEFAULT_NAME", "from_env")

    s = make_async_status()
    assert s.name == "from_env"
    assert isinstance(s.metrics, NoOpMetrics)

"""Shared pytest fixtures for dnsscore tests."""

import json

import pytest

from scoring.model import BenchmarkResult, LatencyStats

SCORING_ENV_VARS = (
    "LOG_LEVEL",
    "DNSSCORE_DB_PATH",
    "DNSSCORE_MAX_QPS",
    "DNSSCORE_LATENCY_MIN_MS",
    "DNSSCORE_LATENCY_MAX_MS",
    "DNSSCORE_LATENCY_FULL_MARK_MS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SCORING_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def make_result():
    """Factory for BenchmarkResult; defaults describe a perfect run."""

    def _factory(
        *,
        total=100,
        successes=100,
        errors=0,
        io_errors=0,
        qps=80.0,
        mean=50.0,
        std=0.0,
        p95=50.0,
        server="",
    ) -> BenchmarkResult:
        return BenchmarkResult(
            total_requests=total,
            total_success_responses=successes,
            total_error_responses=errors,
            total_io_errors=io_errors,
            queries_per_second=qps,
            latency_stats=LatencyStats(mean_ms=mean, std_ms=std, p95_ms=p95),
            server=server,
        )

    return _factory


@pytest.fixture()
def sample_report():
    """Report in the server -> record layout."""
    return {
        "8.8.8.8": {
            "totalRequests": 100,
            "totalSuccessResponses": 100,
            "totalErrorResponses": 0,
            "totalIOErrors": 0,
            "queriesPerSecond": 80,
            "latencyStats": {"meanMs": 50, "stdMs": 0, "p95Ms": 50},
        },
        "1.1.1.1": {
            "totalRequests": 100,
            "totalSuccessResponses": 90,
            "totalErrorResponses": 5,
            "totalIOErrors": 5,
            "queriesPerSecond": 40,
            "latencyStats": {"meanMs": 525, "stdMs": 0, "p95Ms": 700},
        },
        "10.0.0.1": {
            "totalRequests": 100,
            "totalSuccessResponses": 0,
            "totalErrorResponses": 0,
            "totalIOErrors": 100,
            "queriesPerSecond": 0,
            "latencyStats": {"meanMs": 0, "stdMs": 0, "p95Ms": 0},
        },
    }


@pytest.fixture()
def report_file(tmp_path, sample_report):
    path = tmp_path / "report.json"
    path.write_text(json.dumps(sample_report), encoding="utf-8")
    return path

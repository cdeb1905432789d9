# bench/loader.py
"""
Чтение JSON отчёта бенчмарка.

Поддерживаются два вида:
    {"8.8.8.8": {...}, "1.1.1.1": {...}}
    [{"server": "8.8.8.8", ...}, ...]
"""

import json
import math
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from scoring.model import BenchmarkResult, LatencyStats

logger = logging.getLogger(__name__)

COUNT_FIELDS = {
    "total_requests": "totalRequests",
    "total_success_responses": "totalSuccessResponses",
    "total_error_responses": "totalErrorResponses",
    "total_io_errors": "totalIOErrors",
}

LATENCY_FIELDS = {
    "mean_ms": "meanMs",
    "std_ms": "stdMs",
    "p95_ms": "p95Ms",
}


class ReportFormatError(ValueError):
    """Отчёт не соответствует ожидаемой структуре."""


def _number(server: str, key: str, value: Any) -> float:
    # bool является подклассом int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ReportFormatError(f"{server}: field {key!r} is not a number: {value!r}")
    if not math.isfinite(value):
        raise ReportFormatError(f"{server}: field {key!r} is not finite: {value!r}")
    if value < 0:
        raise ReportFormatError(f"{server}: field {key!r} is negative: {value!r}")
    return value


def _count(server: str, key: str, value: Any) -> int:
    value = _number(server, key, value)
    if value != int(value):
        raise ReportFormatError(f"{server}: field {key!r} is not an integer: {value!r}")
    return int(value)


def parse_record(server: str, record: Dict[str, Any]) -> BenchmarkResult:
    if not isinstance(record, dict):
        raise ReportFormatError(f"{server}: record must be an object")

    counts = {
        attr: _count(server, key, record.get(key, 0))
        for attr, key in COUNT_FIELDS.items()
    }

    raw_stats = record.get("latencyStats") or {}
    if not isinstance(raw_stats, dict):
        raise ReportFormatError(f"{server}: field 'latencyStats' must be an object")

    stats = LatencyStats(**{
        attr: float(_number(server, f"latencyStats.{key}", raw_stats.get(key, 0)))
        for attr, key in LATENCY_FIELDS.items()
    })

    return BenchmarkResult(
        queries_per_second=float(
            _number(server, "queriesPerSecond", record.get("queriesPerSecond", 0))
        ),
        latency_stats=stats,
        server=server,
        **counts,
    )


def parse_results(data: Union[Dict[str, Any], List[Any]]) -> List[BenchmarkResult]:
    if isinstance(data, dict):
        return [parse_record(str(server), record) for server, record in data.items()]

    if isinstance(data, list):
        results = []
        for i, record in enumerate(data):
            if not isinstance(record, dict):
                raise ReportFormatError(f"record #{i} must be an object")
            server = str(record.get("server", f"#{i}"))
            results.append(parse_record(server, record))
        return results

    raise ReportFormatError(
        f"report must be an object or a list, got {type(data).__name__}"
    )


def load_results(path: Union[str, Path]) -> List[BenchmarkResult]:
    path = Path(path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ReportFormatError(f"{path}: invalid JSON: {e}") from e

    results = parse_results(data)
    logger.info(f"Загружено результатов: {len(results)} из {path}")
    return results

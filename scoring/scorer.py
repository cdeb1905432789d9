# scoring/scorer.py

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from scoring.model import BenchmarkResult, ScoreResult
from scoring.components import (
    success_rate_score,
    error_rate_score,
    latency_score,
    qps_score,
    round_half_away,
)

logger = logging.getLogger(__name__)

# Веса — часть модели, сумма = 100
WEIGHTS = {
    "success_rate": 25,
    "error_rate": 25,
    "latency": 40,
    "qps": 10,
}

LATENCY_RANGE_MIN = 0.1        # ms, ниже: 0 баллов
LATENCY_RANGE_MAX = 1000.0     # ms, выше: 0 баллов
LATENCY_FULL_MARK_POINT = 50.0 # ms, ниже: полный балл
LATENCY_TAIL_PENALTY = 0.8     # множитель при p95 > LATENCY_RANGE_MAX
MAX_QPS = 80.0                 # QPS для полного балла

SCORE_DIGITS = 2

# "нет данных": ни одного успешного ответа
NO_REQUESTS = ScoreResult()


class InvalidBenchmarkResult(ValueError):
    """Успешные ответы есть, а запросов меньше (или ноль)."""


@dataclass(frozen=True)
class ScoringConfig:
    """Пороги и веса. Значения по умолчанию из таблицы выше."""
    latency_range_min: float = LATENCY_RANGE_MIN
    latency_range_max: float = LATENCY_RANGE_MAX
    latency_full_mark_point: float = LATENCY_FULL_MARK_POINT
    latency_tail_penalty: float = LATENCY_TAIL_PENALTY
    max_qps: float = MAX_QPS
    success_rate_weight: float = WEIGHTS["success_rate"]
    error_rate_weight: float = WEIGHTS["error_rate"]
    latency_weight: float = WEIGHTS["latency"]
    qps_weight: float = WEIGHTS["qps"]

    @property
    def weights(self) -> Dict[str, float]:
        return {
            "success_rate": self.success_rate_weight,
            "error_rate": self.error_rate_weight,
            "latency": self.latency_weight,
            "qps": self.qps_weight,
        }


DEFAULT_CONFIG = ScoringConfig()


def score_benchmark(
    result: BenchmarkResult,
    config: Optional[ScoringConfig] = None,
) -> Optional[ScoreResult]:
    """
    Считает score DNS сервера.

    None: нет ни одного успешного ответа, оценивать нечего.
    """
    cfg = config or DEFAULT_CONFIG

    if result.total_success_responses == 0:
        logger.debug(f"Нет успешных ответов: {result.server!r}, оценивать нечего")
        return None

    total_requests = result.total_requests
    if total_requests <= 0 or total_requests < result.total_success_responses:
        raise InvalidBenchmarkResult(
            f"{result.server or 'result'}: total_requests={total_requests} "
            f"with {result.total_success_responses} successful responses"
        )

    components = {}

    components["success_rate"] = success_rate_score(
        result.total_success_responses, total_requests
    )

    components["error_rate"] = error_rate_score(
        result.total_error_responses + result.total_io_errors, total_requests
    )

    stats = result.latency_stats
    components["latency"] = latency_score(
        stats.mean_ms,
        stats.std_ms,
        stats.p95_ms,
        range_min=cfg.latency_range_min,
        range_max=cfg.latency_range_max,
        full_mark_point=cfg.latency_full_mark_point,
        tail_penalty=cfg.latency_tail_penalty,
    )

    components["qps"] = qps_score(result.queries_per_second, cfg.max_qps)

    # взвешенная сумма по неокруглённым значениям
    weights = cfg.weights
    total = 0.0
    for k, v in components.items():
        total += weights[k] * v
    total /= sum(weights.values())

    return ScoreResult(
        total=round_half_away(total, SCORE_DIGITS),
        success_rate=round_half_away(components["success_rate"], SCORE_DIGITS),
        error_rate=round_half_away(components["error_rate"], SCORE_DIGITS),
        latency=round_half_away(components["latency"], SCORE_DIGITS),
        qps=round_half_away(components["qps"], SCORE_DIGITS),
    )


def compute_dns_score(
    result: BenchmarkResult,
    config: Optional[ScoringConfig] = None,
) -> ScoreResult:
    """То же, но "нет данных" -> NO_REQUESTS (все поля 0)."""
    return score_benchmark(result, config) or NO_REQUESTS

# scoring/model.py

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class LatencyStats:
    mean_ms: float = 0.0
    std_ms: float = 0.0
    p95_ms: float = 0.0


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Агрегированный результат бенчмарка одного DNS сервера.
    Приходит снаружи (от раннера), здесь только читается.
    """
    total_requests: int = 0
    total_success_responses: int = 0
    total_error_responses: int = 0
    total_io_errors: int = 0
    queries_per_second: float = 0.0
    latency_stats: LatencyStats = field(default_factory=LatencyStats)
    server: str = ""  # только для ранжирования, на score не влияет


@dataclass(frozen=True)
class ScoreResult:
    total: float = 0.0          # 0 .. 100
    success_rate: float = 0.0
    error_rate: float = 0.0
    latency: float = 0.0
    qps: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        """Имена полей как в JSON отчёте."""
        return {
            "total": self.total,
            "successRate": self.success_rate,
            "errorRate": self.error_rate,
            "latency": self.latency,
            "qps": self.qps,
        }

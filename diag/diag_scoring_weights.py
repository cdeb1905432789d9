# diag/diag_scoring_weights.py

from scoring.model import BenchmarkResult, LatencyStats
from scoring.scorer import WEIGHTS, compute_dns_score

def run():
    print("\nSCORING WEIGHTS DIAGNOSTIC\n")

    # 1. веса существуют
    required = {"success_rate", "error_rate", "latency", "qps"}
    assert required == set(WEIGHTS), "Scoring weights mismatch"

    # 2. сумма весов
    total = sum(WEIGHTS.values())
    assert total == 100, f"Weights sum != 100 ({total})"
    print("OK   | weights sum = 100")

    # 3. score в диапазоне
    worst = compute_dns_score(BenchmarkResult(
        total_requests=100,
        total_success_responses=1,
        total_error_responses=99,
        latency_stats=LatencyStats(mean_ms=5000, std_ms=5000, p95_ms=9000),
    ))
    best = compute_dns_score(BenchmarkResult(
        total_requests=100,
        total_success_responses=100,
        queries_per_second=500,
        latency_stats=LatencyStats(mean_ms=10, std_ms=0, p95_ms=12),
    ))
    assert 0.0 <= worst.total <= best.total <= 100.0, "Score out of bounds"
    assert best.total == 100.0, f"Perfect run scored {best.total}"
    print(f"OK   | score bounded [0,100] (worst={worst.total}, best={best.total})")

    # 4. задержка — главный фактор, но не доминирует
    assert max(WEIGHTS, key=WEIGHTS.get) == "latency", "Latency is not the main factor"
    for k, w in WEIGHTS.items():
        assert w < 50, f"Weight {k} dominates system"

    print("OK   | no dominant factor")
    print("\nSCORING DIAGNOSTIC PASSED")

if __name__ == "__main__":
    run()

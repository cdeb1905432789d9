# scoring/ranking.py

import logging
from typing import Iterable, Optional

import pandas as pd

from scoring.model import BenchmarkResult
from scoring.scorer import NO_REQUESTS, ScoringConfig, score_benchmark

logger = logging.getLogger(__name__)

SCORE_COLUMNS = ["total", "successRate", "errorRate", "latency", "qps"]
RANK_COLUMNS = ["rank", "server"] + SCORE_COLUMNS + ["noData"]


def rank_results(
    results: Iterable[BenchmarkResult],
    config: Optional[ScoringConfig] = None,
) -> pd.DataFrame:
    """
    Считает score по каждому серверу и сортирует.

    Порядок: сначала серверы с данными, затем по total (убыв.),
    при равенстве по latency (убыв.), затем по имени.
    """
    rows = []
    for result in results:
        score = score_benchmark(result, config)
        row = {"server": result.server}
        row.update((score or NO_REQUESTS).to_dict())
        row["noData"] = score is None
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=RANK_COLUMNS)

    df = pd.DataFrame(rows)
    df = df.sort_values(
        by=["noData", "total", "latency", "server"],
        ascending=[True, False, False, True],
        kind="mergesort",
    ).reset_index(drop=True)
    df.insert(0, "rank", range(1, len(df) + 1))

    no_data = int(df["noData"].sum())
    if no_data:
        logger.info(f"Без успешных ответов: {no_data} из {len(df)} серверов")

    return df[RANK_COLUMNS]

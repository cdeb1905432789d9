# scoring/components.py

import math


def success_rate_score(successes: int, total_requests: int) -> float:
    """Линейно: доля успешных ответов * 100."""
    return successes / total_requests * 100


def error_rate_score(errors: int, total_requests: int) -> float:
    """
    Чем ниже доля ошибок — тем выше score.
    Штраф выпуклый: малые ошибки почти бесплатны,
    дальше падение ускоряется.
    """
    error_rate = errors / total_requests
    return 100 / (1 + math.pow(error_rate * 100, 2))


def latency_score(
    mean_ms: float,
    std_ms: float,
    p95_ms: float,
    *,
    range_min: float,
    range_max: float,
    full_mark_point: float,
    tail_penalty: float,
) -> float:
    """
    Среднее + стабильность.
    100 при mean <= full_mark_point, 0 при mean = range_max.
    Вне [range_min, range_max] невалидно, 0.
    """
    if mean_ms < range_min or mean_ms > range_max:
        score = 0.0
    else:
        base = 100 - (mean_ms - full_mark_point) * 100 / (range_max - full_mark_point)
        # большой разброс относительно среднего -> множитель к 0
        stability = 1 - min(1.0, std_ms / mean_ms)
        score = base * stability

    score = max(0.0, min(100.0, score))

    # хвост p95 за пределом — дополнительный штраф
    if p95_ms > range_max:
        score *= tail_penalty

    return score


def qps_score(qps: float, max_qps: float) -> float:
    """Линейно до max_qps, выше 100."""
    return min(100.0, qps * 100 / max_qps)


def round_half_away(value: float, digits: int = 2) -> float:
    """Округление 0.5 от нуля (не банковское, как у round())."""
    scale = 10 ** digits
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale

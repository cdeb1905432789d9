#!/usr/bin/env python3
"""
Конфигурация проекта.
Все настройки в одном месте с валидацией.
"""
import math
import os
from typing import Dict, Any
from dataclasses import dataclass, asdict, field, replace
from enum import Enum
from dotenv import load_dotenv

from scoring.scorer import ScoringConfig, DEFAULT_CONFIG

# Загружаем переменные окружения
load_dotenv()

class LogLevel(str, Enum):
    """Уровни логирования."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class DatabaseConfig:
    """Конфигурация базы истории."""
    path: str = "data/dnsscore.db"

# переменная окружения -> поле ScoringConfig
SCORING_ENV = {
    "DNSSCORE_MAX_QPS": "max_qps",
    "DNSSCORE_LATENCY_MIN_MS": "latency_range_min",
    "DNSSCORE_LATENCY_MAX_MS": "latency_range_max",
    "DNSSCORE_LATENCY_FULL_MARK_MS": "latency_full_mark_point",
}

@dataclass
class Settings:
    """
    Главный класс настроек.
    Пороги score в ScoringConfig (неизменяемый), остальное здесь.
    """

    project_name: str = "dnsscore"
    version: str = "1.0.0"
    log_level: LogLevel = LogLevel.INFO

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    scoring: ScoringConfig = DEFAULT_CONFIG

    def __post_init__(self):
        """Инициализация после создания объекта."""
        self._load_from_env()
        self._validate()

    def _load_from_env(self):
        """Загружает настройки из переменных окружения."""
        log_level_str = os.getenv("LOG_LEVEL", self.log_level.value)
        try:
            self.log_level = LogLevel(log_level_str.upper())
        except ValueError:
            raise ValueError(f"Неизвестный LOG_LEVEL: {log_level_str}") from None

        self.database.path = os.getenv("DNSSCORE_DB_PATH", self.database.path)

        overrides = {}
        for env_name, attr in SCORING_ENV.items():
            raw = os.getenv(env_name)
            if raw is None or raw == "":
                continue
            try:
                overrides[attr] = float(raw)
            except ValueError:
                raise ValueError(f"{env_name} должно быть числом: {raw!r}") from None

        if overrides:
            self.scoring = replace(self.scoring, **overrides)

    def _validate(self):
        """Валидация настроек."""
        errors = validate_scoring(self.scoring)

        if errors:
            error_msg = "\n".join([f"  • {error}" for error in errors])
            raise ValueError(f"Ошибки конфигурации:\n{error_msg}")

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует настройки в словарь."""
        data = asdict(self)
        data["log_level"] = self.log_level.value
        return data

def validate_scoring(cfg: ScoringConfig) -> list:
    """Возвращает список проблем (пустой, если всё ок)."""
    errors = []

    non_finite = [
        f"{name}={value}" for name, value in asdict(cfg).items()
        if not math.isfinite(value)
    ]
    if non_finite:
        errors.append(f"Значения должны быть конечными: {', '.join(non_finite)}")

    total_weight = sum(cfg.weights.values())
    if abs(total_weight - 100) > 1e-9:
        errors.append(f"Сумма весов должна быть 100, сейчас {total_weight}")

    for name, w in cfg.weights.items():
        if w < 0:
            errors.append(f"Отрицательный вес {name}: {w}")

    if not (0 <= cfg.latency_range_min < cfg.latency_full_mark_point < cfg.latency_range_max):
        errors.append(
            "Пороги задержки должны идти по возрастанию: "
            f"0 <= {cfg.latency_range_min} < {cfg.latency_full_mark_point} < {cfg.latency_range_max}"
        )

    if cfg.max_qps <= 0:
        errors.append(f"max_qps должно быть > 0, сейчас {cfg.max_qps}")

    if not (0 <= cfg.latency_tail_penalty <= 1):
        errors.append(f"latency_tail_penalty вне [0, 1]: {cfg.latency_tail_penalty}")

    return errors

# Глобальный экземпляр настроек
settings = Settings()

def get_settings() -> Settings:
    """Возвращает глобальный экземпляр настроек."""
    return settings

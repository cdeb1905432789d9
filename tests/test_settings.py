"""Tests for settings and scoring config validation."""

import pytest

from config.settings import LogLevel, Settings, validate_scoring
from scoring.scorer import DEFAULT_CONFIG, ScoringConfig


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings()
        assert s.log_level == LogLevel.INFO
        assert s.scoring == DEFAULT_CONFIG
        assert s.database.path == "data/dnsscore.db"

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DNSSCORE_DB_PATH", "/tmp/x.db")
        monkeypatch.setenv("DNSSCORE_MAX_QPS", "100")
        monkeypatch.setenv("DNSSCORE_LATENCY_MAX_MS", "2000")
        s = Settings()
        assert s.log_level == LogLevel.DEBUG
        assert s.database.path == "/tmp/x.db"
        assert s.scoring.max_qps == 100.0
        assert s.scoring.latency_range_max == 2000.0
        assert s.scoring.latency_range_min == DEFAULT_CONFIG.latency_range_min

    def test_non_numeric_override(self, monkeypatch) -> None:
        monkeypatch.setenv("DNSSCORE_MAX_QPS", "lots")
        with pytest.raises(ValueError, match="DNSSCORE_MAX_QPS"):
            Settings()

    def test_unknown_log_level(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            Settings()

    def test_invalid_thresholds_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("DNSSCORE_LATENCY_FULL_MARK_MS", "5000")
        with pytest.raises(ValueError, match="Ошибки конфигурации"):
            Settings()

    def test_to_dict(self) -> None:
        data = Settings().to_dict()
        assert data["log_level"] == "INFO"
        assert data["scoring"]["max_qps"] == 80.0


class TestValidateScoring:
    def test_default_is_valid(self) -> None:
        assert validate_scoring(DEFAULT_CONFIG) == []

    def test_collects_every_problem(self) -> None:
        cfg = ScoringConfig(qps_weight=20, max_qps=0, latency_tail_penalty=1.5)
        assert len(validate_scoring(cfg)) == 3

    def test_negative_weight(self) -> None:
        cfg = ScoringConfig(qps_weight=-10, latency_weight=60)
        errors = validate_scoring(cfg)
        assert len(errors) == 1
        assert "qps" in errors[0]

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_non_finite_override_rejected(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("DNSSCORE_MAX_QPS", raw)
        with pytest.raises(ValueError, match="max_qps"):
            Settings()

    def test_non_finite_config_reported(self) -> None:
        errors = validate_scoring(ScoringConfig(max_qps=float("nan")))
        assert any("max_qps=nan" in e for e in errors)

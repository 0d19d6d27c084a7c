"""Tests for configuration loading."""

from cloud_cost_analytics.config import Config


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        """Defaults match the documented analysis parameters."""
        config = Config()
        assert config.smoothing_alpha == 0.3
        assert config.season_length == 7
        assert config.annual_growth_rate == 0.05
        assert config.anomaly_threshold == 2.0
        assert config.trend_window_size == 7
        assert config.trend_deviation_threshold == 0.30
        assert config.forecast_method == "linear"
        assert config.forecast_horizon == 14

    def test_environment_overrides(self, monkeypatch):
        """Environment variables override defaults."""
        monkeypatch.setenv("FORECAST_SMOOTHING_ALPHA", "0.5")
        monkeypatch.setenv("FORECAST_SEASON_LENGTH", "30")
        monkeypatch.setenv("ANOMALY_THRESHOLD", "3")
        config = Config()
        assert config.smoothing_alpha == 0.5
        assert config.season_length == 30
        assert config.anomaly_threshold == 3.0

    def test_to_dict(self):
        """to_dict exposes the analysis parameters."""
        data = Config().to_dict()
        assert data["seasonal_weight"] == 0.3
        assert data["seasonal_trend_step"] == 0.001
        assert "data_dir" not in data

"""Pytest configuration and fixtures."""

from datetime import date, timedelta

import pandas as pd
import pytest

from cloud_cost_analytics.config import Config
from cloud_cost_analytics.models import CostObservation, CostSeries

CONFIG_ENV_VARS = [
    "DATA_DIR",
    "FORECAST_METHOD",
    "FORECAST_HORIZON",
    "FORECAST_SMOOTHING_ALPHA",
    "FORECAST_SEASON_LENGTH",
    "FORECAST_SEASONAL_TREND_STEP",
    "FORECAST_SEASONAL_WEIGHT",
    "FORECAST_ANNUAL_GROWTH_RATE",
    "ANOMALY_THRESHOLD",
    "TREND_WINDOW_SIZE",
    "TREND_DEVIATION_THRESHOLD",
]

START_DATE = date(2025, 1, 1)


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep analysis parameters at their defaults regardless of the shell."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def make_series():
    """Factory building a daily CostSeries from a list of costs."""

    def _make(costs, key="payments", start=START_DATE):
        return CostSeries(
            key=key,
            observations=tuple(
                CostObservation(
                    date=start + timedelta(days=i), entity_key=key, amount=cost
                )
                for i, cost in enumerate(costs)
            ),
        )

    return _make


@pytest.fixture
def usage_records():
    """Long-format usage records across teams, services and regions."""
    rows = []
    for day in range(10):
        current = (START_DATE + timedelta(days=day)).isoformat()
        rows.append((current, "payments", "Amazon EC2", "us-east-1", 100.0 + day))
        rows.append((current, "payments", "Amazon RDS", "us-east-1", 50.0))
        rows.append((current, "search", "Amazon EC2", "eu-west-1", 30.0))
        rows.append((current, "search", "AWS Lambda", "eu-west-1", 10.0))
        rows.append((current, "search", "Amazon S3", "us-east-1", 5.0))
    return pd.DataFrame(rows, columns=["date", "team", "service", "region", "cost"])

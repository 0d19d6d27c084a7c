"""
Configuration management for Cloud Cost Analytics
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration settings for Cloud Cost Analytics"""

    def __init__(self):
        # Directory Structure
        self.base_dir = Path.cwd()
        self.data_dir = self.base_dir / os.getenv("DATA_DIR", "data")

        # Forecasting Settings
        self.forecast_method = os.getenv("FORECAST_METHOD", "linear")
        self.forecast_horizon = int(os.getenv("FORECAST_HORIZON", "14"))
        self.smoothing_alpha = float(os.getenv("FORECAST_SMOOTHING_ALPHA", "0.3"))
        self.season_length = int(os.getenv("FORECAST_SEASON_LENGTH", "7"))
        self.seasonal_trend_step = float(
            os.getenv("FORECAST_SEASONAL_TREND_STEP", "0.001")
        )
        self.seasonal_weight = float(os.getenv("FORECAST_SEASONAL_WEIGHT", "0.3"))
        self.annual_growth_rate = float(
            os.getenv("FORECAST_ANNUAL_GROWTH_RATE", "0.05")
        )

        # Anomaly Detection
        self.anomaly_threshold = float(os.getenv("ANOMALY_THRESHOLD", "2.0"))

        # Trend Analysis
        self.trend_window_size = int(os.getenv("TREND_WINDOW_SIZE", "7"))
        self.trend_deviation_threshold = float(
            os.getenv("TREND_DEVIATION_THRESHOLD", "0.30")
        )

    def to_dict(self):
        """Convert configuration to dictionary"""
        return {
            "forecast_method": self.forecast_method,
            "forecast_horizon": self.forecast_horizon,
            "smoothing_alpha": self.smoothing_alpha,
            "season_length": self.season_length,
            "seasonal_trend_step": self.seasonal_trend_step,
            "seasonal_weight": self.seasonal_weight,
            "annual_growth_rate": self.annual_growth_rate,
            "anomaly_threshold": self.anomaly_threshold,
            "trend_window_size": self.trend_window_size,
            "trend_deviation_threshold": self.trend_deviation_threshold,
        }

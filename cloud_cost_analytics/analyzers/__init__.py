"""
Analysis modules for cloud cost series
"""

from .anomaly import AnomalyDetector, detect_anomalies
from .comparison import EntityComparator, compare_entities
from .forecasting import ForecastingAnalyzer, forecast
from .trending import TrendingAnalyzer, analyze_trend

__all__ = [
    "AnomalyDetector",
    "EntityComparator",
    "ForecastingAnalyzer",
    "TrendingAnalyzer",
    "analyze_trend",
    "compare_entities",
    "detect_anomalies",
    "forecast",
]

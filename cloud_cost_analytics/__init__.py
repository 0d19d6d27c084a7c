"""
Cloud Cost Analytics

Cost analytics engine for per-day cloud spend grouped by team, service or
region:
- Multi-method cost forecasting
- Trend classification with narrative insight
- Statistical anomaly detection
- Ranked cross-entity comparison and benchmarks
"""

from .analyzers import analyze_trend, compare_entities, detect_anomalies, forecast
from .config import Config
from .main import CostAnalytics
from .models import CostObservation, CostSeries, EntityRow

__version__ = "1.0.0"
__all__ = [
    "Config",
    "CostAnalytics",
    "CostObservation",
    "CostSeries",
    "EntityRow",
    "analyze_trend",
    "compare_entities",
    "detect_anomalies",
    "forecast",
]

"""
Error types raised by the cost analytics engine
"""


class AnalyticsError(Exception):
    """Base class for all analytics errors"""


class UnsupportedMethod(AnalyticsError, ValueError):
    """Forecast method name is not one of the known strategies"""

    def __init__(self, method):
        self.method = method
        super().__init__(f"Unsupported prediction method: {method}")


class UnsupportedComparisonAxis(AnalyticsError, ValueError):
    """Comparison axis is not teams, services or regions"""

    def __init__(self, axis):
        self.axis = axis
        super().__init__(f"Unsupported comparison type: {axis}")


class UnsupportedComparisonMetric(AnalyticsError, ValueError):
    """Ranking metric is not total_cost or efficiency"""

    def __init__(self, metric):
        self.metric = metric
        super().__init__(f"Unsupported comparison metric: {metric}")


class NoHistoricalData(AnalyticsError):
    """Forecast requested over an empty series"""

    def __init__(self, key=None):
        self.key = key
        target = f" for '{key}'" if key else ""
        super().__init__(f"No historical data found for prediction{target}")


class InvalidHorizon(AnalyticsError, ValueError):
    """Forecast horizon is negative"""

    def __init__(self, horizon):
        self.horizon = horizon
        super().__init__(f"Forecast horizon must be >= 0, got {horizon}")

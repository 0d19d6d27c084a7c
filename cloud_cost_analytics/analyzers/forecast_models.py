"""
Forecast model implementations for cost prediction
"""

import math
from datetime import timedelta

import numpy as np

from ..models import ForecastMethod, ForecastResult, PredictionPoint

DAYS_PER_YEAR = 365


def build_predictions(values, last_date, bound_width):
    """Turn raw predicted values into dated points with symmetric bounds.

    Each value is floored at zero before its bounds are derived, so
    0 <= lower <= predicted <= upper always holds.
    """
    points = []
    for step, value in enumerate(values, start=1):
        predicted = max(0.0, float(value))
        points.append(
            PredictionPoint(
                date=last_date + timedelta(days=step),
                predicted_cost=predicted,
                lower_bound=predicted * (1 - bound_width),
                upper_bound=predicted * (1 + bound_width),
            )
        )
    return tuple(points)


class LinearTrendModel:
    """Ordinary least squares trend on a 1-based day index"""

    method = ForecastMethod.LINEAR
    bound_width = 0.10

    def fit(self, costs):
        """Closed-form OLS fit.

        Returns:
            (slope, intercept). A single point has no defined slope, so the
            fit degrades to a flat line through its value.
        """
        n = len(costs)
        x = np.arange(1, n + 1, dtype=float)

        sum_x = float(x.sum())
        sum_y = float(costs.sum())
        sum_xy = float((x * costs).sum())
        sum_x2 = float((x * x).sum())

        denominator = n * sum_x2 - sum_x * sum_x
        slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator else 0.0
        intercept = (sum_y - slope * sum_x) / n
        return slope, intercept

    def r_squared(self, costs, slope, intercept):
        """Coefficient of determination, not clamped to [0, 1].

        Negative for fits worse than the mean; NaN when actuals have no variance.
        """
        if np.ptp(costs) == 0:
            return math.nan
        x = np.arange(1, len(costs) + 1, dtype=float)
        fitted = slope * x + intercept
        ss_res = float(((costs - fitted) ** 2).sum())
        ss_tot = float(((costs - costs.mean()) ** 2).sum())
        return 1 - ss_res / ss_tot

    def fit_and_forecast(self, costs, last_date, horizon):
        n = len(costs)
        slope, intercept = self.fit(costs)
        values = [slope * (n + step) + intercept for step in range(1, horizon + 1)]

        return ForecastResult(
            method=self.method,
            predictions=build_predictions(values, last_date, self.bound_width),
            confidence=self.r_squared(costs, slope, intercept),
            metadata={"slope": slope, "intercept": intercept},
        )


class ExponentialSmoothingModel:
    """Simple exponential smoothing with a drift term"""

    method = ForecastMethod.EXPONENTIAL
    bound_width = 0.15
    confidence = 0.8

    def __init__(self, alpha=0.3):
        if not 0 < alpha <= 1:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        self.alpha = alpha

    def smooth(self, costs):
        smoothed = [float(costs[0])]
        for actual in costs[1:]:
            smoothed.append(self.alpha * float(actual) + (1 - self.alpha) * smoothed[-1])
        return smoothed

    def fit_and_forecast(self, costs, last_date, horizon):
        smoothed = self.smooth(costs)
        trend = (smoothed[-1] - smoothed[0]) / len(smoothed)
        last_smoothed = smoothed[-1]
        values = [last_smoothed + trend * step for step in range(1, horizon + 1)]

        return ForecastResult(
            method=self.method,
            predictions=build_predictions(values, last_date, self.bound_width),
            confidence=self.confidence,
            metadata={"alpha": self.alpha, "trend": trend},
        )


class SeasonalModel:
    """Per-phase seasonal averages blended onto a slowly rising mean"""

    method = ForecastMethod.SEASONAL
    bound_width = 0.20
    confidence = 0.85

    def __init__(self, season_length=7, trend_step=0.001, seasonal_weight=0.3):
        if season_length < 1:
            raise ValueError(f"season_length must be >= 1, got {season_length}")
        self.season_length = season_length
        self.trend_step = trend_step
        self.seasonal_weight = seasonal_weight

    def seasonal_components(self, costs):
        """Mean cost for each phase (index mod season_length), 0 if unobserved"""
        components = []
        for phase in range(self.season_length):
            phase_costs = costs[phase :: self.season_length]
            components.append(float(phase_costs.mean()) if len(phase_costs) else 0.0)
        return components

    def fit_and_forecast(self, costs, last_date, horizon):
        seasonal = self.seasonal_components(costs)
        avg_cost = float(costs.mean())

        values = []
        for step in range(1, horizon + 1):
            trend_component = avg_cost * (1 + step * self.trend_step)
            seasonal_component = seasonal[step % self.season_length]
            values.append(
                trend_component + (seasonal_component - avg_cost) * self.seasonal_weight
            )

        return ForecastResult(
            method=self.method,
            predictions=build_predictions(values, last_date, self.bound_width),
            confidence=self.confidence,
            metadata={"seasonLength": self.season_length, "avgCost": avg_cost},
        )


class GrowthModel:
    """Compound daily growth from a fixed annual rate"""

    method = ForecastMethod.GROWTH
    bound_width = 0.10
    confidence = 0.75

    def __init__(self, annual_rate=0.05):
        self.annual_rate = annual_rate

    def fit_and_forecast(self, costs, last_date, horizon):
        avg_cost = float(costs.mean())
        daily_factor = 1 + self.annual_rate / DAYS_PER_YEAR
        values = [avg_cost * daily_factor**step for step in range(1, horizon + 1)]

        return ForecastResult(
            method=self.method,
            predictions=build_predictions(values, last_date, self.bound_width),
            confidence=self.confidence,
            metadata={"growthRate": self.annual_rate, "avgCost": avg_cost},
        )

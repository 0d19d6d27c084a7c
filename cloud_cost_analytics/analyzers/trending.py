"""
Trend classification, volatility and trend-deviation analysis for a cost series
"""

import logging

import numpy as np

from ..models import (
    Anomaly,
    AnomalyType,
    Severity,
    TrendClassification,
    TrendResult,
    TrendSummary,
)
from .base import BaseAnalyzer

logger = logging.getLogger(__name__)

# Constants for trend classification
MIN_TREND_DATA_POINTS = 2
STABLE_GROWTH_THRESHOLD = 5
RAPID_GROWTH_THRESHOLD = 20
HIGH_VOLATILITY_THRESHOLD = 50
MANY_ANOMALIES_THRESHOLD = 5
HIGH_SEVERITY_MULTIPLIER = 1.5

NARRATIVES = {
    TrendClassification.STABLE: (
        "Costs are remaining relatively stable with minimal growth or decline"
    ),
    TrendClassification.INCREASING: "Costs are increasing at {rate:.1f}% rate",
    TrendClassification.RAPIDLY_INCREASING: (
        "Costs are rapidly increasing at {rate:.1f}% rate - immediate attention needed"
    ),
    TrendClassification.DECREASING: "Costs are decreasing at {rate:.1f}% rate",
    TrendClassification.RAPIDLY_DECREASING: (
        "Costs are rapidly decreasing at {rate:.1f}% rate"
    ),
    TrendClassification.INSUFFICIENT_DATA: "Insufficient data for trend analysis",
}


def classify_growth(growth_rate):
    """Map a growth percentage onto a trend classification"""
    if abs(growth_rate) < STABLE_GROWTH_THRESHOLD:
        return TrendClassification.STABLE
    if growth_rate > 0:
        if growth_rate > RAPID_GROWTH_THRESHOLD:
            return TrendClassification.RAPIDLY_INCREASING
        return TrendClassification.INCREASING
    if growth_rate < -RAPID_GROWTH_THRESHOLD:
        return TrendClassification.RAPIDLY_DECREASING
    return TrendClassification.DECREASING


class TrendingAnalyzer(BaseAnalyzer):
    """Analyzes growth, volatility and deviations from the trailing trend"""

    def analyze(self, data):
        return self.analyze_trend(data)

    def analyze_trend(self, series, period=None, include_anomalies=True):
        """
        Classify the cost trend of a series and summarise it

        Args:
            series: CostSeries or sequence of CostObservation
            period: label for the analysed period; defaults to the series'
                first and last dates
            include_anomalies: run the sliding-window deviation scan

        Returns:
            TrendResult
        """
        series = self.prepare_series(series)
        if period is None:
            period = (
                f"{series.first_date} to {series.last_date}" if len(series) else ""
            )

        if len(series) < MIN_TREND_DATA_POINTS:
            overall = TrendClassification.INSUFFICIENT_DATA
            growth_rate = 0.0
            volatility = 0.0
        else:
            costs = series.costs
            growth_rate = self.growth_rate(costs)
            volatility = self.volatility(costs)
            overall = classify_growth(growth_rate)

        anomalies = self.detect_trend_anomalies(series) if include_anomalies else ()
        summary = self.summarize(overall, growth_rate, volatility, anomalies)

        logger.debug(
            "Trend for %r: %s (growth %.2f%%, volatility %.2f%%, %d deviations)",
            series.key,
            overall.value,
            growth_rate,
            volatility,
            len(anomalies),
        )
        return TrendResult(
            data_point_count=len(series),
            period=period,
            overall_trend=overall,
            growth_rate_percent=growth_rate,
            volatility_percent=volatility,
            anomalies=anomalies,
            summary=summary,
        )

    def growth_rate(self, costs):
        """Percent change from the first half's mean to the second half's"""
        mid_point = len(costs) // 2
        first_half = float(costs[:mid_point].mean())
        second_half = float(costs[mid_point:].mean())
        if first_half > 0:
            return (second_half - first_half) / first_half * 100
        return 0.0

    def volatility(self, costs):
        """Population coefficient of variation, as a percentage"""
        mean = float(costs.mean())
        if mean == 0:
            return 0.0
        return float(np.std(costs)) / mean * 100

    def detect_trend_anomalies(self, series):
        """Flag points that stray from the mean of the preceding window"""
        window = self.config.trend_window_size
        threshold = self.config.trend_deviation_threshold
        if len(series) < window:
            return ()

        costs = series.costs
        anomalies = []
        for i in range(window, len(costs)):
            window_avg = float(costs[i - window : i].mean())
            if window_avg == 0:
                continue

            current = float(costs[i])
            deviation = abs(current - window_avg) / window_avg
            if deviation > threshold:
                observation = series[i]
                anomalies.append(
                    Anomaly(
                        date=observation.date,
                        entity_label=observation.entity_key or None,
                        actual_value=current,
                        expected_value=window_avg,
                        deviation_score=deviation,
                        severity=(
                            Severity.HIGH
                            if deviation > threshold * HIGH_SEVERITY_MULTIPLIER
                            else Severity.MEDIUM
                        ),
                        type=(
                            AnomalyType.SPIKE
                            if current > window_avg
                            else AnomalyType.DROP
                        ),
                    )
                )
        return tuple(anomalies)

    def summarize(self, overall, growth_rate, volatility, anomalies):
        """Narrative, recommendation and detail lines for a trend"""
        narrative = NARRATIVES[overall].format(rate=abs(growth_rate))

        if volatility > HIGH_VOLATILITY_THRESHOLD:
            recommendation = (
                "High volatility detected - investigate cost spikes and "
                "implement better forecasting"
            )
        elif growth_rate > RAPID_GROWTH_THRESHOLD:
            recommendation = (
                "Rapid cost growth - review optimization opportunities and "
                "budget adjustments"
            )
        elif len(anomalies) > MANY_ANOMALIES_THRESHOLD:
            recommendation = (
                "Multiple anomalies detected - investigate unusual spending patterns"
            )
        else:
            recommendation = (
                "Cost trends are within normal parameters - continue monitoring"
            )

        details = (
            f"Growth rate: {growth_rate:.1f}%",
            f"Volatility: {volatility:.1f}%",
            f"Anomalies detected: {len(anomalies)}",
        )
        return TrendSummary(
            narrative=narrative, recommendation=recommendation, details=details
        )


def analyze_trend(series, config=None, period=None, include_anomalies=True):
    """Analyze a series with a freshly configured analyzer"""
    return TrendingAnalyzer(config).analyze_trend(
        series, period=period, include_anomalies=include_anomalies
    )

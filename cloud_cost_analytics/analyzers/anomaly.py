"""
Anomaly detection for cost patterns
"""

import logging

import numpy as np
from scipy.stats import zscore

from ..models import Anomaly, AnomalyType, Severity
from .base import BaseAnalyzer

logger = logging.getLogger(__name__)

# Severity is high once the score passes threshold * this multiplier
HIGH_SEVERITY_MULTIPLIER = 1.5


class AnomalyDetector(BaseAnalyzer):
    """Flags points far from the series mean in standard-deviation units"""

    def analyze(self, data):
        return self.detect_anomalies(data)

    def detect_anomalies(self, series, threshold=None):
        """Detect unusual cost spikes or drops using population z-scores.

        A series with no variance has no defined z-score and yields no
        anomalies.

        Args:
            series: CostSeries or sequence of CostObservation
            threshold: z-score above which a point is flagged; defaults to
                config.anomaly_threshold

        Returns:
            list of Anomaly in series order
        """
        if threshold is None:
            threshold = self.config.anomaly_threshold

        series = self.prepare_series(series)
        if len(series) == 0:
            return []

        costs = series.costs
        mean = float(costs.mean())
        # Identical amounts can still leave float noise in the std
        if np.ptp(costs) == 0:
            logger.debug("Series %r has zero variance; no anomalies", series.key)
            return []

        z_scores = np.abs(zscore(costs))
        anomalies = []
        for observation, cost, z_score in zip(series, costs, z_scores):
            z_score = float(z_score)
            if not (np.isfinite(z_score) and z_score > threshold):
                continue
            cost = float(cost)
            anomalies.append(
                Anomaly(
                    date=observation.date,
                    entity_label=observation.entity_key or None,
                    actual_value=cost,
                    expected_value=mean,
                    deviation_score=z_score,
                    severity=(
                        Severity.HIGH
                        if z_score > threshold * HIGH_SEVERITY_MULTIPLIER
                        else Severity.MEDIUM
                    ),
                    type=AnomalyType.SPIKE if cost > mean else AnomalyType.DROP,
                )
            )

        logger.info(
            "Detected %d anomalies for %r (threshold %.2f)",
            len(anomalies),
            series.key,
            threshold,
        )
        return anomalies


def detect_anomalies(series, threshold=2.0, config=None):
    """Detect anomalies with a freshly configured detector"""
    return AnomalyDetector(config).detect_anomalies(series, threshold=threshold)

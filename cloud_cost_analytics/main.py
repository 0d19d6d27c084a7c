"""
Main orchestrator for Cloud Cost Analytics
"""

import math

from .analyzers import (
    AnomalyDetector,
    EntityComparator,
    ForecastingAnalyzer,
    TrendingAnalyzer,
)
from .config import Config
from .data_processor import ALL_ENTITIES, DataProcessor
from .models import (
    AnalysisOutcome,
    AnomalyType,
    ComparisonAxis,
    Severity,
    TrendClassification,
)
from .utils import clean_service_name

# Constants
MAX_PREDICTIONS_SHOWN = 14
MAX_ANOMALIES_SHOWN = 10

TREND_EMOJI = {
    TrendClassification.STABLE: "➡️",
    TrendClassification.INCREASING: "📈",
    TrendClassification.RAPIDLY_INCREASING: "🚀",
    TrendClassification.DECREASING: "📉",
    TrendClassification.RAPIDLY_DECREASING: "🔻",
    TrendClassification.INSUFFICIENT_DATA: "⚠",
}


def print_section_header(title):
    """Print a formatted section header"""
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


class CostAnalytics:
    """Loads usage records and runs the analyzers over them"""

    def __init__(self, config=None):
        self.config = config if config is not None else Config()
        self.df = None

        # Initialize components
        self.data_processor = DataProcessor(self.config)
        self.forecasting_analyzer = ForecastingAnalyzer(self.config)
        self.trending_analyzer = TrendingAnalyzer(self.config)
        self.anomaly_detector = AnomalyDetector(self.config)
        self.entity_comparator = EntityComparator(self.config)

    def load_from_csv(self, filepath):
        """Load usage records from a CSV file"""
        print_section_header(f"LOADING DATA FROM CSV: {filepath}")
        try:
            self.df = self.data_processor.load_from_csv(filepath)
        except (OSError, ValueError) as e:
            print(f"✗ Error loading CSV: {e}")
            return False
        print(f"✓ Successfully loaded {len(self.df)} usage records")
        return True

    def fetch_series(
        self, key=ALL_ENTITIES, start_date=None, end_date=None, dimension="team"
    ):
        return self.data_processor.fetch_series(
            self.df, key, start_date, end_date, dimension=dimension
        )

    def run_forecast(self, series, method=None, horizon=None):
        return AnalysisOutcome.attempt(
            self.forecasting_analyzer.forecast,
            series,
            method or self.config.forecast_method,
            self.config.forecast_horizon if horizon is None else horizon,
        )

    def run_trend_analysis(self, series, period=None):
        return AnalysisOutcome.attempt(
            self.trending_analyzer.analyze_trend, series, period=period
        )

    def run_anomaly_detection(self, series, threshold=None):
        return AnalysisOutcome.attempt(
            self.anomaly_detector.detect_anomalies, series, threshold=threshold
        )

    def run_comparison(
        self, axis, start_date=None, end_date=None, metric="total_cost", period=""
    ):
        return AnalysisOutcome.attempt(
            self._compare, axis, start_date, end_date, metric, period
        )

    def _compare(self, axis, start_date, end_date, metric, period):
        rows = self.data_processor.aggregate_entities(
            self.df, axis, start_date, end_date
        )
        return self.entity_comparator.compare_entities(
            rows, axis, period=period, metric=metric
        )

    def print_forecast(self, outcome):
        print_section_header("COST FORECASTING ANALYSIS")
        if not outcome.ok:
            print(f"❌ {outcome.error}")
            return

        result = outcome.value
        confidence = (
            "undefined" if math.isnan(result.confidence) else f"{result.confidence:.3f}"
        )
        print(f"Method: {result.method.value} (confidence: {confidence})")
        params = ", ".join(f"{k}={v:.4g}" for k, v in result.metadata.items())
        print(f"Parameters: {params}")
        print("-" * 50)
        for point in result.predictions[:MAX_PREDICTIONS_SHOWN]:
            print(
                f"{point.date:%Y-%m-%d}: ${point.predicted_cost:8,.2f} "
                f"(${point.lower_bound:,.2f} - ${point.upper_bound:,.2f})"
            )
        if result.horizon > MAX_PREDICTIONS_SHOWN:
            total = sum(p.predicted_cost for p in result.predictions)
            print(f"... {result.horizon} days total, ${total:,.2f} projected")

    def print_trend(self, outcome):
        print_section_header("TREND ANALYSIS")
        if not outcome.ok:
            print(f"❌ {outcome.error}")
            return

        result = outcome.value
        emoji = TREND_EMOJI[result.overall_trend]
        print(f"📊 Period: {result.period} ({result.data_point_count} days)")
        print(f"{emoji} {result.summary.narrative}")
        for line in result.summary.details:
            print(f"   • {line}")
        print(f"💡 {result.summary.recommendation}")

    def print_anomalies(self, outcome):
        print_section_header("ANOMALY DETECTION")
        if not outcome.ok:
            print(f"❌ {outcome.error}")
            return

        anomalies = outcome.value
        if not anomalies:
            print("✅ No significant anomalies detected in cost patterns")
            return

        ranked = sorted(anomalies, key=lambda a: a.deviation_score, reverse=True)
        for anomaly in ranked[:MAX_ANOMALIES_SHOWN]:
            marker = "📈 SPIKE" if anomaly.type is AnomalyType.SPIKE else "📉 DROP"
            severity = " ⚠️ HIGH" if anomaly.severity is Severity.HIGH else ""
            print(
                f"{marker} {anomaly.date:%Y-%m-%d}: ${anomaly.actual_value:,.2f} "
                f"vs ${anomaly.expected_value:,.2f} expected "
                f"(z-score: {anomaly.deviation_score:.2f}){severity}"
            )

    def print_comparison(self, outcome):
        print_section_header("ENTITY COMPARISON")
        if not outcome.ok:
            print(f"❌ {outcome.error}")
            return

        result = outcome.value
        print(
            f"Comparing {result.total_entities} {result.comparison_type.value}"
            + (f" ({result.period})" if result.period else "")
        )
        print("-" * 60)
        shorten = result.comparison_type is ComparisonAxis.SERVICES
        for entity in result.entities:
            label = clean_service_name(entity.key, 25) if shorten else entity.key
            print(
                f"{entity.rank:2d}. {label:<25} ${entity.total_cost:10,.2f} total "
                f"${entity.efficiency:9,.2f}/unit ({entity.derived_count} units)"
            )
        print("-" * 60)
        print(
            f"Benchmarks: ${result.benchmarks.avg_total_cost:,.2f} avg total, "
            f"${result.benchmarks.avg_efficiency:,.2f} avg efficiency"
        )

    def run_full_analysis(  # noqa: PLR0913
        self,
        key=ALL_ENTITIES,
        start_date=None,
        end_date=None,
        dimension="team",
        method=None,
        horizon=None,
        threshold=None,
        compare=None,
        metric="total_cost",
    ):
        """Run forecast, trend, anomaly and (optionally) comparison sections"""
        print("🚀 CLOUD COST ANALYTICS")
        print("=" * 60)

        if self.df is None:
            print("✗ No data loaded")
            return False

        series = self.fetch_series(key, start_date, end_date, dimension)
        print(f"📅 {dimension}={key}: {len(series)} days of cost data")

        period = None
        if start_date or end_date:
            period = (
                f"{start_date or series.first_date} to "
                f"{end_date or series.last_date}"
            )

        self.print_trend(self.run_trend_analysis(series, period=period))
        self.print_anomalies(self.run_anomaly_detection(series, threshold))
        forecast_outcome = self.run_forecast(series, method, horizon)
        self.print_forecast(forecast_outcome)

        if compare:
            self.print_comparison(
                self.run_comparison(
                    compare, start_date, end_date, metric=metric, period=period or ""
                )
            )

        print("\n" + "=" * 60)
        print("✅ ANALYSIS COMPLETE")
        print("=" * 60)
        return forecast_outcome.ok

"""Tests for the data model and outcome wrapper."""

from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from cloud_cost_analytics.analyzers.forecasting import forecast
from cloud_cost_analytics.errors import NoHistoricalData, UnsupportedMethod
from cloud_cost_analytics.models import (
    AnalysisOutcome,
    CostObservation,
    CostSeries,
    ForecastMethod,
    as_cost_series,
)


class TestCostObservation:
    """Tests for CostObservation validation."""

    def test_negative_amount_rejected(self):
        """Costs must be non-negative."""
        with pytest.raises(ValueError):
            CostObservation(date=date(2025, 1, 1), entity_key="a", amount=-1)

    def test_missing_date_rejected(self):
        """Every observation needs a date."""
        with pytest.raises(ValueError):
            CostObservation(date=None, entity_key="a", amount=1)

    @pytest.mark.parametrize("amount", [float("nan"), float("inf")])
    def test_non_finite_amount_rejected(self, amount):
        """NaN and infinite costs are rejected."""
        with pytest.raises(ValueError):
            CostObservation(date=date(2025, 1, 1), entity_key="a", amount=amount)

    def test_decimal_and_datetime_normalised(self):
        """Decimal amounts become floats and datetimes become dates."""
        obs = CostObservation(
            date=datetime(2025, 1, 2, 13, 30), entity_key="a", amount=Decimal("12.50")
        )
        assert obs.amount == 12.5
        assert isinstance(obs.amount, float)
        assert obs.date == date(2025, 1, 2)


class TestCostSeries:
    """Tests for CostSeries."""

    def test_sorted_by_date(self):
        """Observations are stored in ascending date order."""
        series = CostSeries(
            key="a",
            observations=(
                CostObservation(date(2025, 1, 3), "a", 3),
                CostObservation(date(2025, 1, 1), "a", 1),
                CostObservation(date(2025, 1, 2), "a", 2),
            ),
        )
        assert list(series.costs) == [1.0, 2.0, 3.0]
        assert series.first_date == date(2025, 1, 1)
        assert series.last_date == date(2025, 1, 3)

    def test_empty_series(self):
        """An empty series has no dates."""
        series = CostSeries(key="a")
        assert len(series) == 0
        assert series.first_date is None
        assert series.costs.size == 0

    def test_pandas_round_trip(self, make_series):
        """Conversion to and from pandas keeps dates and costs."""
        series = make_series([10.0, 20.0, 30.0])
        as_pandas = series.to_pandas()
        assert isinstance(as_pandas.index, pd.DatetimeIndex)
        assert CostSeries.from_pandas("payments", as_pandas) == series

    def test_plain_list_accepted(self):
        """A list of observations is wrapped with the first entity key."""
        series = as_cost_series(
            [
                CostObservation(date(2025, 1, 2), "search", 5),
                CostObservation(date(2025, 1, 1), "search", 4),
            ]
        )
        assert series.key == "search"
        assert list(series.costs) == [4.0, 5.0]

    def test_list_input_to_forecast(self):
        """Operations accept plain observation lists."""
        result = forecast(
            [CostObservation(date(2025, 1, 1), "a", 10)], ForecastMethod.GROWTH, 1
        )
        assert result.predictions[0].date == date(2025, 1, 2)

    def test_forecast_result_immutable(self, make_series):
        """Results cannot be changed after construction."""
        result = forecast(make_series([1.0, 2.0]), "linear", 2)
        with pytest.raises(AttributeError):
            result.confidence = 0.5
        with pytest.raises(TypeError):
            result.metadata["slope"] = 0


class TestAnalysisOutcome:
    """Tests for AnalysisOutcome."""

    def test_success(self, make_series):
        """Successful calls carry their value."""
        outcome = AnalysisOutcome.attempt(forecast, make_series([5.0]), "growth", 2)
        assert outcome.ok
        assert outcome.unwrap().horizon == 2

    def test_failure_captured(self):
        """Analytics errors become failed outcomes."""
        outcome = AnalysisOutcome.attempt(forecast, [], "linear", 2)
        assert not outcome.ok
        assert isinstance(outcome.error, NoHistoricalData)
        with pytest.raises(NoHistoricalData):
            outcome.unwrap()

    def test_method_error_captured(self, make_series):
        """Unsupported methods are captured too."""
        outcome = AnalysisOutcome.attempt(forecast, make_series([5.0]), "x", 2)
        assert isinstance(outcome.error, UnsupportedMethod)

    def test_other_errors_propagate(self):
        """Errors outside the analytics family are not swallowed."""

        def broken():
            raise KeyError("boom")

        with pytest.raises(KeyError):
            AnalysisOutcome.attempt(broken)

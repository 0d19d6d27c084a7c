"""
Data model for cost observations and analysis results

Every result type is a frozen dataclass built fresh per call. Nothing here
holds state beyond the values it was constructed with.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

import numpy as np
import pandas as pd

from .errors import (
    AnalyticsError,
    UnsupportedComparisonAxis,
    UnsupportedComparisonMetric,
    UnsupportedMethod,
)


class _ParsableEnum(str, Enum):
    """String enum parsed case-insensitively from caller input"""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise cls._unsupported(value) from None

    @classmethod
    def _unsupported(cls, value):
        return ValueError(f"Unsupported {cls.__name__}: {value}")


class ForecastMethod(_ParsableEnum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    SEASONAL = "seasonal"
    GROWTH = "growth"

    @classmethod
    def _unsupported(cls, value):
        return UnsupportedMethod(value)


class ComparisonAxis(_ParsableEnum):
    TEAMS = "teams"
    SERVICES = "services"
    REGIONS = "regions"

    @classmethod
    def _unsupported(cls, value):
        return UnsupportedComparisonAxis(value)


class ComparisonMetric(_ParsableEnum):
    TOTAL_COST = "total_cost"
    EFFICIENCY = "efficiency"

    @classmethod
    def _unsupported(cls, value):
        return UnsupportedComparisonMetric(value)


class TrendClassification(str, Enum):
    STABLE = "stable"
    INCREASING = "increasing"
    RAPIDLY_INCREASING = "rapidly_increasing"
    DECREASING = "decreasing"
    RAPIDLY_DECREASING = "rapidly_decreasing"
    INSUFFICIENT_DATA = "insufficient_data"


class Severity(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"


class AnomalyType(str, Enum):
    SPIKE = "spike"
    DROP = "drop"


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class CostObservation:
    """A single day's cost for one grouping key"""

    date: date
    entity_key: str
    amount: float

    def __post_init__(self):
        if self.date is None:
            raise ValueError("CostObservation.date must not be None")
        # Decimal amounts from the billing layer are coerced to float
        amount = float(self.amount)
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(
                f"CostObservation.amount must be finite and >= 0, got {amount}"
            )
        object.__setattr__(self, "date", _as_date(self.date))
        object.__setattr__(self, "amount", amount)


@dataclass(frozen=True)
class CostSeries:
    """Observations for one grouping key, sorted ascending by date"""

    key: str
    observations: tuple = ()

    def __post_init__(self):
        ordered = tuple(sorted(self.observations, key=lambda obs: obs.date))
        object.__setattr__(self, "observations", ordered)

    def __len__(self):
        return len(self.observations)

    def __iter__(self):
        return iter(self.observations)

    def __getitem__(self, index):
        return self.observations[index]

    @property
    def costs(self):
        return np.array([obs.amount for obs in self.observations], dtype=float)

    @property
    def dates(self):
        return [obs.date for obs in self.observations]

    @property
    def first_date(self):
        return self.observations[0].date if self.observations else None

    @property
    def last_date(self):
        return self.observations[-1].date if self.observations else None

    def to_pandas(self):
        """Return the costs as a pd.Series indexed by a DatetimeIndex"""
        return pd.Series(
            self.costs,
            index=pd.DatetimeIndex(pd.to_datetime(self.dates), name="Date"),
            name=self.key,
        )

    @classmethod
    def from_pandas(cls, key, series):
        """Build from a pd.Series indexed by date"""
        observations = [
            CostObservation(date=pd.Timestamp(idx).date(), entity_key=key, amount=value)
            for idx, value in series.items()
        ]
        return cls(key=key, observations=tuple(observations))


def as_cost_series(series, key=""):
    """Accept a CostSeries or any iterable of CostObservation"""
    if isinstance(series, CostSeries):
        return series
    observations = tuple(series or ())
    if not key and observations:
        key = observations[0].entity_key
    return CostSeries(key=key, observations=observations)


@dataclass(frozen=True)
class PredictionPoint:
    date: date
    predicted_cost: float
    lower_bound: float
    upper_bound: float


@dataclass(frozen=True)
class ForecastResult:
    """Standardized output for all forecast methods"""

    method: ForecastMethod
    predictions: tuple
    confidence: float
    metadata: Any = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "predictions", tuple(self.predictions))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def horizon(self):
        return len(self.predictions)


@dataclass(frozen=True)
class Anomaly:
    """A flagged point, shared by the z-score detector and the trend scan"""

    date: date
    entity_label: Optional[str]
    actual_value: float
    expected_value: float
    deviation_score: float
    severity: Severity
    type: AnomalyType


TrendAnomaly = Anomaly


@dataclass(frozen=True)
class TrendSummary:
    narrative: str
    recommendation: str
    details: tuple = ()


@dataclass(frozen=True)
class TrendResult:
    data_point_count: int
    period: str
    overall_trend: TrendClassification
    growth_rate_percent: float
    volatility_percent: float
    anomalies: tuple
    summary: TrendSummary


@dataclass(frozen=True)
class EntityRow:
    """Pre-aggregated costs for one team, service or region"""

    key: str
    total_cost: float
    avg_cost: float = 0.0
    derived_count: int = 0


@dataclass(frozen=True)
class EntityMetric:
    key: str
    total_cost: float
    avg_cost: float
    derived_count: int
    rank: int
    efficiency: float


@dataclass(frozen=True)
class Benchmarks:
    avg_total_cost: float
    avg_efficiency: float


@dataclass(frozen=True)
class ComparisonResult:
    comparison_type: ComparisonAxis
    period: str
    entities: tuple
    benchmarks: Benchmarks

    @property
    def total_entities(self):
        return len(self.entities)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Explicit success/error value for a single analysis call"""

    value: Any = None
    error: Optional[AnalyticsError] = None

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def attempt(cls, func, *args, **kwargs):
        """Run func, capturing analytics errors as a failed outcome"""
        try:
            return cls(value=func(*args, **kwargs))
        except AnalyticsError as e:
            return cls(error=e)

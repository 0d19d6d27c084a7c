"""
Ranking and benchmarking of teams, services or regions
"""

import logging

from ..models import (
    Benchmarks,
    ComparisonAxis,
    ComparisonMetric,
    ComparisonResult,
    EntityMetric,
)
from .base import BaseAnalyzer

logger = logging.getLogger(__name__)


def efficiency(total_cost, derived_count):
    """Cost per derived unit (e.g. per distinct service), 0 with no units"""
    return total_cost / derived_count if derived_count > 0 else 0.0


def _mean(values):
    return sum(values) / len(values) if values else 0.0


class EntityComparator(BaseAnalyzer):
    """Ranks pre-aggregated entity rows and computes cross-entity benchmarks"""

    def analyze(self, data, axis=ComparisonAxis.TEAMS):
        """Rank rows along axis; rows default to being teams"""
        return self.compare_entities(data, axis)

    def compare_entities(
        self,
        rows,
        axis,
        period="",
        metric=ComparisonMetric.TOTAL_COST,
        include=None,
        exclude=None,
    ):
        """
        Rank entities and benchmark them against each other

        Args:
            rows: iterable of EntityRow
            axis: ComparisonAxis or its name (teams, services, regions)
            period: label for the compared period
            metric: rank by total_cost (default) or efficiency
            include: optional keys to keep; everything else is dropped
            exclude: optional keys to drop

        Returns:
            ComparisonResult with entities sorted by the metric, descending,
            ties broken by key

        Raises:
            UnsupportedComparisonAxis: axis is not a known axis
            UnsupportedComparisonMetric: metric is not a known metric
        """
        axis = ComparisonAxis.parse(axis)
        metric = ComparisonMetric.parse(metric)

        rows = list(rows)
        if include is not None:
            keep = set(include)
            rows = [row for row in rows if row.key in keep]
        if exclude:
            drop = set(exclude)
            rows = [row for row in rows if row.key not in drop]

        scored = [
            (row, float(efficiency(row.total_cost, row.derived_count))) for row in rows
        ]
        if metric is ComparisonMetric.EFFICIENCY:
            scored.sort(key=lambda item: (-item[1], item[0].key))
        else:
            scored.sort(key=lambda item: (-item[0].total_cost, item[0].key))

        entities = tuple(
            EntityMetric(
                key=row.key,
                total_cost=float(row.total_cost),
                avg_cost=float(row.avg_cost),
                derived_count=int(row.derived_count),
                rank=position + 1,
                efficiency=row_efficiency,
            )
            for position, (row, row_efficiency) in enumerate(scored)
        )

        benchmarks = Benchmarks(
            avg_total_cost=_mean([entity.total_cost for entity in entities]),
            avg_efficiency=_mean([entity.efficiency for entity in entities]),
        )

        logger.debug(
            "Compared %d %s by %s", len(entities), axis.value, metric.value
        )
        return ComparisonResult(
            comparison_type=axis,
            period=period,
            entities=entities,
            benchmarks=benchmarks,
        )


def compare_entities(
    rows,
    axis,
    period="",
    metric=ComparisonMetric.TOTAL_COST,
    include=None,
    exclude=None,
    config=None,
):
    """Compare entities with a freshly configured comparator"""
    return EntityComparator(config).compare_entities(
        rows, axis, period=period, metric=metric, include=include, exclude=exclude
    )

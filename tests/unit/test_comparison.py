"""Tests for entity ranking and benchmarking."""

import pytest

from cloud_cost_analytics.analyzers.comparison import (
    EntityComparator,
    compare_entities,
    efficiency,
)
from cloud_cost_analytics.errors import (
    UnsupportedComparisonAxis,
    UnsupportedComparisonMetric,
)
from cloud_cost_analytics.models import ComparisonAxis, EntityRow


@pytest.fixture
def team_rows():
    """Three teams with distinct totals."""
    return [
        EntityRow(key="A", total_cost=100.0, avg_cost=10.0, derived_count=4),
        EntityRow(key="B", total_cost=80.0, avg_cost=8.0, derived_count=1),
        EntityRow(key="C", total_cost=120.0, avg_cost=12.0, derived_count=6),
    ]


class TestEntityComparator:
    """Tests for compare_entities."""

    def test_ranks_by_total_cost(self, team_rows):
        """Highest total cost ranks first."""
        result = compare_entities(team_rows, "teams")
        assert [(e.key, e.rank) for e in result.entities] == [
            ("C", 1),
            ("A", 2),
            ("B", 3),
        ]
        totals = [e.total_cost for e in result.entities]
        assert totals == sorted(totals, reverse=True)
        assert result.comparison_type is ComparisonAxis.TEAMS

    def test_efficiency(self, team_rows):
        """Efficiency is total cost per derived unit."""
        result = compare_entities(team_rows, "teams")
        by_key = {e.key: e for e in result.entities}
        assert by_key["A"].efficiency == 25.0
        assert by_key["B"].efficiency == 80.0
        assert by_key["C"].efficiency == 20.0

    def test_zero_count_efficiency_guarded(self):
        """No derived units gives zero efficiency."""
        assert efficiency(100.0, 0) == 0
        result = compare_entities([EntityRow(key="X", total_cost=50.0)], "regions")
        assert result.entities[0].efficiency == 0

    def test_benchmarks(self, team_rows):
        """Benchmarks are plain means across entities."""
        result = compare_entities(team_rows, "teams")
        assert result.benchmarks.avg_total_cost == pytest.approx(100.0)
        assert result.benchmarks.avg_efficiency == pytest.approx((25 + 80 + 20) / 3)
        assert result.total_entities == 3

    def test_empty_rows(self):
        """No entities still produces a renderable result."""
        result = compare_entities([], "services")
        assert result.entities == ()
        assert result.benchmarks.avg_total_cost == 0
        assert result.benchmarks.avg_efficiency == 0

    def test_ties_broken_by_key(self):
        """Equal totals are ordered by entity key."""
        rows = [
            EntityRow(key="zeta", total_cost=100.0),
            EntityRow(key="alpha", total_cost=100.0),
            EntityRow(key="mid", total_cost=150.0),
        ]
        result = compare_entities(rows, "teams")
        assert [e.key for e in result.entities] == ["mid", "alpha", "zeta"]

    def test_unsupported_axis(self, team_rows):
        """Unknown axes are rejected."""
        with pytest.raises(UnsupportedComparisonAxis, match="periods"):
            compare_entities(team_rows, "periods")

    def test_analyze_takes_axis(self, team_rows):
        """analyze labels rows with the axis it is given."""
        comparator = EntityComparator()
        assert comparator.analyze(team_rows).comparison_type is ComparisonAxis.TEAMS
        result = comparator.analyze(team_rows, "regions")
        assert result.comparison_type is ComparisonAxis.REGIONS

    def test_axis_case_insensitive(self, team_rows):
        """Axis names are parsed case-insensitively."""
        result = compare_entities(team_rows, "Services")
        assert result.comparison_type is ComparisonAxis.SERVICES

    def test_rank_by_efficiency(self, team_rows):
        """The efficiency metric reorders entities."""
        result = compare_entities(team_rows, "teams", metric="efficiency")
        assert [e.key for e in result.entities] == ["B", "A", "C"]
        assert [e.rank for e in result.entities] == [1, 2, 3]

    def test_unsupported_metric(self, team_rows):
        """Unknown metrics are rejected."""
        with pytest.raises(UnsupportedComparisonMetric):
            compare_entities(team_rows, "teams", metric="trend")

    def test_include_and_exclude(self, team_rows):
        """Filters apply before ranking and benchmarks."""
        included = compare_entities(team_rows, "teams", include=["A", "B"])
        assert [e.key for e in included.entities] == ["A", "B"]
        assert included.entities[0].rank == 1
        assert included.benchmarks.avg_total_cost == pytest.approx(90.0)

        excluded = compare_entities(team_rows, "teams", exclude=["C"])
        assert [e.key for e in excluded.entities] == ["A", "B"]

    def test_period_label(self, team_rows):
        """The period label is passed through."""
        result = compare_entities(team_rows, "teams", period="2025-01-01 to 2025-01-31")
        assert result.period == "2025-01-01 to 2025-01-31"

    def test_idempotent(self, team_rows):
        """Identical inputs give identical outputs."""
        assert compare_entities(team_rows, "teams") == compare_entities(
            team_rows, "teams"
        )

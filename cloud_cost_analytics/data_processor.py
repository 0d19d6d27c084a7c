"""
Data loading and preparation: turns usage records into cost series and
per-entity aggregates for the analyzers
"""

import logging

import numpy as np
import pandas as pd

from .models import ComparisonAxis, CostSeries, EntityRow

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["date", "team", "service", "region", "cost"]
COLUMN_ALIASES = {
    "team_name": "team",
    "service_name": "service",
    "usage_date": "date",
    "amount": "cost",
}
DIMENSION_COLUMNS = {"team", "service", "region"}

# Column grouped on per axis, and the column whose distinct values feed
# the efficiency denominator
AXIS_COLUMNS = {
    ComparisonAxis.TEAMS: ("team", "service"),
    ComparisonAxis.SERVICES: ("service", "team"),
    ComparisonAxis.REGIONS: ("region", "service"),
}
ALL_ENTITIES = "all"


class DataProcessor:
    """Handles data cleaning and slicing of usage records"""

    def __init__(self, config):
        self.config = config

    def load_from_csv(self, filepath):
        """
        Load and prepare usage records from a CSV file

        Args:
            filepath: Path to CSV file

        Returns:
            Prepared DataFrame
        """
        logger.info("Loading usage records from %s", filepath)
        return self.prepare_data(pd.read_csv(filepath))

    def prepare_data(self, df):
        """
        Clean and normalise a long-format usage frame

        Args:
            df: DataFrame with date, team, service, region and cost columns
                (team_name / service_name aliases accepted)

        Returns:
            DataFrame sorted by date with parsed dates and numeric costs

        Raises:
            ValueError: a required column is missing
        """
        processed_df = df.copy()
        processed_df.columns = [str(col).strip().lower() for col in processed_df.columns]
        processed_df = processed_df.rename(columns=COLUMN_ALIASES)

        missing = [col for col in REQUIRED_COLUMNS if col not in processed_df.columns]
        if missing:
            raise ValueError(f"Usage data is missing columns: {missing}")

        processed_df["date"] = pd.to_datetime(processed_df["date"], errors="coerce")
        dropped = int(processed_df["date"].isna().sum())
        if dropped:
            logger.warning("Dropping %d rows without a valid date", dropped)
        processed_df = processed_df.dropna(subset=["date"])

        processed_df["cost"] = pd.to_numeric(
            processed_df["cost"], errors="coerce"
        ).fillna(0)
        infinite = int(np.isinf(processed_df["cost"]).sum())
        if infinite:
            logger.warning("Zeroing %d rows with an infinite cost", infinite)
            processed_df.loc[np.isinf(processed_df["cost"]), "cost"] = 0.0
        negative = int((processed_df["cost"] < 0).sum())
        if negative:
            logger.warning("Clipping %d negative cost rows (credits) to zero", negative)
            processed_df["cost"] = processed_df["cost"].clip(lower=0)

        for col in DIMENSION_COLUMNS:
            processed_df[col] = processed_df[col].fillna("unknown").astype(str)

        processed_df = processed_df.sort_values("date", kind="mergesort")
        processed_df = processed_df.reset_index(drop=True)

        logger.info(
            "Data prepared: %d rows from %s to %s",
            len(processed_df),
            processed_df["date"].min().date() if len(processed_df) else None,
            processed_df["date"].max().date() if len(processed_df) else None,
        )
        return processed_df

    def _slice_period(self, df, start_date=None, end_date=None):
        mask = pd.Series(True, index=df.index)
        if start_date is not None:
            mask &= df["date"] >= pd.Timestamp(start_date)
        if end_date is not None:
            mask &= df["date"] <= pd.Timestamp(end_date)
        return df[mask]

    def fetch_series(
        self,
        df,
        grouping_key=ALL_ENTITIES,
        start_date=None,
        end_date=None,
        dimension="team",
    ):
        """
        Daily cost series for one grouping key

        Args:
            df: prepared DataFrame
            grouping_key: value of the dimension column, or "all"
            start_date: inclusive lower bound (date or ISO string)
            end_date: inclusive upper bound (date or ISO string)
            dimension: team, service or region

        Returns:
            CostSeries with one observation per day that has records
        """
        if dimension not in DIMENSION_COLUMNS:
            raise ValueError(f"Unknown grouping dimension: {dimension}")

        sliced = self._slice_period(df, start_date, end_date)
        key = grouping_key or ALL_ENTITIES
        if key != ALL_ENTITIES:
            sliced = sliced[sliced[dimension] == key]

        daily = sliced.groupby(sliced["date"].dt.normalize())["cost"].sum()
        logger.debug("Fetched %d days for %s=%r", len(daily), dimension, key)
        return CostSeries.from_pandas(key, daily)

    def aggregate_entities(self, df, axis, start_date=None, end_date=None):
        """
        Aggregate usage records into one EntityRow per team, service or region

        Returns:
            list of EntityRow in key order
        """
        axis = ComparisonAxis.parse(axis)
        group_col, derived_col = AXIS_COLUMNS[axis]

        sliced = self._slice_period(df, start_date, end_date)
        if sliced.empty:
            return []

        grouped = sliced.groupby(group_col).agg(
            total_cost=("cost", "sum"),
            avg_cost=("cost", "mean"),
            derived_count=(derived_col, "nunique"),
        )
        return [
            EntityRow(
                key=str(key),
                total_cost=float(row.total_cost),
                avg_cost=float(row.avg_cost),
                derived_count=int(row.derived_count),
            )
            for key, row in grouped.iterrows()
        ]

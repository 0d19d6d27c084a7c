"""
Cost forecasting and prediction analysis
"""

import logging

from ..errors import InvalidHorizon, NoHistoricalData
from ..models import ForecastMethod
from .base import BaseAnalyzer
from .forecast_models import (
    ExponentialSmoothingModel,
    GrowthModel,
    LinearTrendModel,
    SeasonalModel,
)

logger = logging.getLogger(__name__)


class ForecastingAnalyzer(BaseAnalyzer):
    """Dispatches a cost series to one of the forecasting strategies"""

    def __init__(self, config=None, models=None):
        super().__init__(config)
        self.models = models if models is not None else self.build_models(self.config)
        missing = set(ForecastMethod) - set(self.models)
        if missing:
            raise ValueError(
                f"No model registered for: {sorted(m.value for m in missing)}"
            )

    @staticmethod
    def build_models(config):
        """One strategy instance per ForecastMethod, parameterised from config"""
        return {
            ForecastMethod.LINEAR: LinearTrendModel(),
            ForecastMethod.EXPONENTIAL: ExponentialSmoothingModel(
                alpha=config.smoothing_alpha
            ),
            ForecastMethod.SEASONAL: SeasonalModel(
                season_length=config.season_length,
                trend_step=config.seasonal_trend_step,
                seasonal_weight=config.seasonal_weight,
            ),
            ForecastMethod.GROWTH: GrowthModel(annual_rate=config.annual_growth_rate),
        }

    def analyze(self, data):
        """Forecast with the configured default method and horizon"""
        return self.forecast(
            data, self.config.forecast_method, self.config.forecast_horizon
        )

    def forecast(self, series, method, horizon):
        """
        Forecast daily costs beyond the end of a series

        Args:
            series: CostSeries or sequence of CostObservation
            method: ForecastMethod or its name
            horizon: number of days to predict

        Returns:
            ForecastResult

        Raises:
            UnsupportedMethod: method is not a known strategy
            NoHistoricalData: series is empty
            InvalidHorizon: horizon is negative
        """
        method = ForecastMethod.parse(method)
        if horizon < 0:
            raise InvalidHorizon(horizon)

        series = self.prepare_series(series)
        if len(series) == 0:
            raise NoHistoricalData(series.key)

        logger.debug(
            "Forecasting %s for %r: %d points, horizon %d",
            method.value,
            series.key,
            len(series),
            horizon,
        )
        return self.models[method].fit_and_forecast(
            series.costs, series.last_date, horizon
        )


def forecast(series, method, horizon, config=None):
    """Forecast a series with a freshly configured analyzer"""
    return ForecastingAnalyzer(config).forecast(series, method, horizon)

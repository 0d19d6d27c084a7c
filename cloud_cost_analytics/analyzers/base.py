"""
Base analyzer class with common functionality
"""

from abc import ABC, abstractmethod

from ..config import Config
from ..models import as_cost_series


class BaseAnalyzer(ABC):
    """Base class for all analyzers"""

    def __init__(self, config=None):
        self.config = config if config is not None else Config()

    @abstractmethod
    def analyze(self, data):
        """
        Perform analysis on caller-supplied data

        Args:
            data: CostSeries (or list of EntityRow for comparison)

        Returns:
            The analyzer's result object
        """

    def prepare_series(self, series, key=""):
        """Wrap a plain sequence of observations into a sorted CostSeries"""
        return as_cost_series(series, key=key)

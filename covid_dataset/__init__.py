"""COVID time-series CSV normalization and reshaping."""

__version__ = "0.1.0"

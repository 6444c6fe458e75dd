"""I/O package for the taxi dispatch simulation."""

from .csv_writer import CSVWriter, METRIC_FIELDS, TAXI_FIELDS
from .reporter import Reporter

__all__ = ['CSVWriter', 'Reporter', 'TAXI_FIELDS', 'METRIC_FIELDS']

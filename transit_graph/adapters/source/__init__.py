"""Source adapters - Implementations of TabularSourcePort.

Available implementations:
- CsvTabularSource: Loads CSV rows from URLs or local files
"""

from .csv_parsing import infer_scalar, parse_csv
from .csv_source import CsvTabularSource

__all__ = ["CsvTabularSource", "infer_scalar", "parse_csv"]

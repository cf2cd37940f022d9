"""Error taxonomy for loading and filtering listening history"""
from typing import Optional


class StatsError(Exception):
    """Base class for every user-facing stats error"""


class FileReadError(StatsError):
    """A file in the batch could not be read"""

    def __init__(self, filename: str, reason: Optional[str] = None):
        self.filename = filename
        message = f"Failed to read {filename}"
        if reason:
            message = f"{filename} {reason}"
        super().__init__(message)


class ParseError(StatsError):
    """A file in the batch is not valid JSON"""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Failed to parse {filename}")


class FormatError(StatsError):
    """Payload is neither a raw event array nor a processed stats object"""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or (
            "Invalid data format. Please upload Spotify streaming history "
            "JSON files or a processed stats file."
        ))


class RangeError(StatsError):
    """Custom date range is incomplete or inverted"""


class FilterUnavailableError(StatsError):
    """Date filtering was requested on pre-aggregated input"""

    def __init__(self):
        super().__init__("Date filtering only works with raw streaming history data")

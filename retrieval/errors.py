"""Errors raised while loading the device dataset."""

from typing import Optional


class CatalogLoadError(Exception):
    """Base error for dataset loading failures."""


class SourceUnreachableError(CatalogLoadError):
    """None of the candidate locations returned the CSV file."""

    def __init__(self, attempted: list[str], last_error: Optional[str] = None):
        self.attempted = list(attempted)
        self.last_error = last_error
        super().__init__(
            f"Could not load CSV file, tried: {', '.join(self.attempted)}. "
            f"Last error: {last_error}"
        )


class EmptyDatasetError(CatalogLoadError):
    """The CSV parsed but contained no data rows."""

    def __init__(self, message: str = "CSV file contains no data rows"):
        super().__init__(message)

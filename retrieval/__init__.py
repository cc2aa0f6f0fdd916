"""Retrieval layer for the device catalog CSV."""

from .device_catalog import DeviceCatalog
from .device_type import classify_device_type
from .errors import CatalogLoadError, SourceUnreachableError, EmptyDatasetError

__all__ = [
    "DeviceCatalog",
    "classify_device_type",
    "CatalogLoadError",
    "SourceUnreachableError",
    "EmptyDatasetError",
]

"""Pydantic schemas for the device catalog."""

from .device import (
    DEFAULT_MODEL_KEY,
    DeviceType,
    DeviceRow,
    ParseIssue,
    LoadResult,
    Brand,
    Device,
    BrandDevice,
    BrandAbout,
    BrandTree,
)

__all__ = [
    "DEFAULT_MODEL_KEY",
    "DeviceType",
    "DeviceRow",
    "ParseIssue",
    "LoadResult",
    "Brand",
    "Device",
    "BrandDevice",
    "BrandAbout",
    "BrandTree",
]

"""Free-text device search."""

from typing import Optional
from retrieval.grouping import add_model_entry, build_codename
from schemas.device import Device, DeviceRow

# Grouping key: (brand, dtype, model_name)
DeviceKey = tuple[Optional[str], Optional[str], str]


class SearchIndex:
    """Match rows against a query and group them into devices."""

    SEARCH_FIELDS = ("model_name", "code", "code_alias", "ver_name")

    def _matches(self, row: DeviceRow, query: str) -> bool:
        """Case-insensitive substring match on any searchable field."""
        for field in self.SEARCH_FIELDS:
            value = getattr(row, field) or ""
            if query in value.lower():
                return True
        return False

    def search(self, rows: list[DeviceRow], query: str) -> list[Device]:
        """
        Search devices.

        An empty query matches every row with a model name.

        Args:
            rows: Valid dataset rows
            query: Free-text query

        Returns:
            Devices in first-match order
        """
        search_query = query.lower()
        devices: dict[DeviceKey, Device] = {}

        for row in rows:
            if not row.model_name:
                continue

            if not self._matches(row, search_query):
                continue

            key = (row.brand, row.dtype, row.model_name)
            device = devices.get(key)
            if device is None:
                device = Device(
                    brand_name=row.brand_title,
                    phone_name=row.model_name,
                    codename=build_codename(row.code, row.code_alias),
                    dtype=row.dtype,
                    brand=row.brand,
                )
                devices[key] = device

            add_model_entry(device.models, row)

        return list(devices.values())

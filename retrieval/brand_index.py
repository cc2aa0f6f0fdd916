"""Brand listing derived from the device dataset."""

from config.settings import CatalogConfig
from schemas.device import Brand, DeviceRow


class BrandIndex:
    """Deduplicated, display-named brand list."""

    def __init__(self, catalog_config: CatalogConfig):
        """
        Initialize brand index.

        Args:
            catalog_config: Static catalog config with the brand name table
        """
        self.catalog_config = catalog_config

    def build(self, rows: list[DeviceRow]) -> list[Brand]:
        """
        Build the brand list.

        Rows without brand or brand_title are skipped. A later row of the same
        brand replaces the earlier entry but keeps its position.

        Args:
            rows: Valid dataset rows

        Returns:
            Brands in first-seen order
        """
        brands: dict[str, Brand] = {}

        for row in rows:
            if not (row.brand and row.brand_title):
                continue

            brands[row.brand] = Brand(
                id=row.brand,
                name=self.catalog_config.display_name(row.brand, row.brand_title),
                brand=row.brand,
                brand_title=row.brand_title,
            )

        return list(brands.values())

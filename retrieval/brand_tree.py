"""Per-brand device tree."""

from typing import Optional
from retrieval.grouping import add_model_entry, build_codename
from schemas.device import BrandAbout, BrandDevice, BrandTree, DeviceRow

BRAND_TREE_TYPE = "phone"


class BrandTreeBuilder:
    """Group the rows of one brand by model name."""

    def build(self, rows: list[DeviceRow], brand_id: str) -> Optional[BrandTree]:
        """
        Build the device tree of a brand.

        Args:
            rows: Valid dataset rows
            brand_id: Brand code to select

        Returns:
            BrandTree, or None when no row has that brand
        """
        brand_rows = [row for row in rows if row.brand == brand_id]
        if not brand_rows:
            return None

        first = brand_rows[0]
        about = BrandAbout(
            brand=first.brand,
            brand_zh=first.brand_title,
            sub_brand=first.brand,
            sub_brand_zh=first.brand_title,
            type=BRAND_TREE_TYPE,
        )

        devices: dict[str, BrandDevice] = {}
        for row in brand_rows:
            if not row.model_name:
                continue

            device = devices.get(row.model_name)
            if device is None:
                device = BrandDevice(
                    codename=build_codename(row.code, row.code_alias),
                    dtype=row.dtype,
                )
                devices[row.model_name] = device

            add_model_entry(device.model, row)

        return BrandTree(
            about=about,
            phones=[{name: device} for name, device in devices.items()],
        )

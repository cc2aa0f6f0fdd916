"""Application settings."""

import os
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin
import yaml
from pydantic import BaseModel, Field

DEFAULT_CATALOG_CONFIG = Path(__file__).parent / "catalog.yaml"


class Settings(BaseModel):
    """Device catalog configuration settings."""

    # Remote source; when unset the candidates are read from data_root
    base_url: Optional[str] = None
    data_root: str = "."

    # Tried in order, first success wins
    candidate_paths: list[str] = Field(default_factory=lambda: [
        "/database/models.csv",
        "/src/database/models.csv",
        "./database/models.csv",
        "./src/database/models.csv",
    ])

    request_timeout: int = 10

    # More TooManyFields issues than this triggers the lenient re-parse
    lenient_threshold: int = 10

    catalog_config_path: Optional[str] = None

    # Logging
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load source location from environment if not provided
        if data.get("base_url") is None:
            data["base_url"] = os.environ.get("DEVICE_CATALOG_BASE_URL")

        if data.get("data_root") is None:
            data["data_root"] = os.environ.get("DEVICE_CATALOG_DATA_ROOT", ".")

        super().__init__(**data)

    def resolve_locations(self) -> list[str]:
        """
        Get the concrete URL or file path for every candidate, in priority order.

        With a base URL, "/x.csv" resolves against the origin and "./x.csv"
        against the base URL itself. Without one, both resolve under data_root.
        """
        locations = []
        for candidate in self.candidate_paths:
            if self.base_url:
                base = self.base_url if self.base_url.endswith("/") else f"{self.base_url}/"
                location = urljoin(base, candidate)
            else:
                relative = candidate.lstrip("/")
                if relative.startswith("./"):
                    relative = relative[2:]
                location = str(Path(self.data_root) / relative)

            if location not in locations:
                locations.append(location)

        return locations


class CatalogConfig(BaseModel):
    """Static catalog data: brand display names and expected CSV columns."""

    brand_names: dict[str, str] = Field(default_factory=dict)
    required_columns: list[str] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "CatalogConfig":
        """
        Load catalog config from YAML.

        Args:
            path: Path to catalog.yaml (defaults to the bundled config)

        Returns:
            Parsed CatalogConfig
        """
        if path is None:
            path = DEFAULT_CATALOG_CONFIG

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def display_name(self, brand: str, brand_title: str) -> str:
        """Get the localized brand name, falling back to the dataset title."""
        return self.brand_names.get(brand.lower()) or brand_title

"""Device catalog: cached dataset plus brand, search and brand-tree views."""

import logging
import threading
from typing import Optional
from config.settings import CatalogConfig, Settings
from retrieval.brand_index import BrandIndex
from retrieval.brand_tree import BrandTreeBuilder
from retrieval.csv_loader import CSVLoader
from retrieval.csv_source import CSVSource
from retrieval.device_type import classify_device_type
from retrieval.errors import CatalogLoadError
from retrieval.search_index import SearchIndex
from schemas.device import Brand, BrandTree, Device, DeviceRow, DeviceType, LoadResult

logger = logging.getLogger(__name__)


class DeviceCatalog:
    """
    Read-only device catalog over a CSV file.

    The dataset is fetched and parsed once per instance; concurrent first
    callers wait on a lock so only one fetch happens. The brand list is
    cached after its first computation. reset() drops both caches.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        source: Optional[CSVSource] = None,
        loader: Optional[CSVLoader] = None,
        catalog_config: Optional[CatalogConfig] = None
    ):
        """
        Initialize device catalog.

        Args:
            settings: Catalog settings (defaults read from the environment)
            source: CSV source (built from settings if omitted)
            loader: CSV loader (built from settings if omitted)
            catalog_config: Brand name table and required columns
        """
        self.settings = settings or Settings()
        self.catalog_config = catalog_config or CatalogConfig.load(self.settings.catalog_config_path)
        self.source = source or CSVSource(self.settings)
        self.loader = loader or CSVLoader(
            catalog_config=self.catalog_config,
            lenient_threshold=self.settings.lenient_threshold,
            verbose=self.settings.verbose,
        )

        self.brand_index = BrandIndex(self.catalog_config)
        self.search_index = SearchIndex()
        self.tree_builder = BrandTreeBuilder()

        self._lock = threading.Lock()
        self._dataset: Optional[list[DeviceRow]] = None
        self._brands: Optional[list[Brand]] = None
        self.load_result: Optional[LoadResult] = None

    def load_dataset(self) -> list[DeviceRow]:
        """
        Load the dataset, fetching and parsing only on the first call.

        Returns:
            Valid rows (model and brand present)

        Raises:
            SourceUnreachableError: If no candidate location could be read
            EmptyDatasetError: If the CSV contained no data rows
        """
        if self._dataset is not None:
            return self._dataset

        with self._lock:
            if self._dataset is not None:
                return self._dataset

            try:
                location, text = self.source.fetch()
                result = self.loader.parse(text, source=location)
            except CatalogLoadError as e:
                logger.error(f"Failed to load CSV data: {e}")
                raise

            self.load_result = result
            self._dataset = result.rows

        return self._dataset

    def list_brands(self) -> list[Brand]:
        """Get all brands, cached after the first call."""
        if self._brands is None:
            self._brands = self.brand_index.build(self.load_dataset())
        return self._brands

    def find_brand(self, brand_id: str) -> Optional[Brand]:
        """
        Get one brand from the brand list.

        Args:
            brand_id: Brand code

        Returns:
            Brand if found, None otherwise
        """
        for brand in self.list_brands():
            if brand.id == brand_id:
                return brand
        return None

    def search(self, query: str) -> list[Device]:
        """
        Search devices by model name, code, code alias or version name.

        Args:
            query: Free-text query (case-insensitive substring)

        Returns:
            Matching devices grouped by brand, dtype and model name
        """
        return self.search_index.search(self.load_dataset(), query)

    def get_brand_tree(self, brand_id: str) -> Optional[BrandTree]:
        """
        Get the device tree of one brand.

        Args:
            brand_id: Brand code

        Returns:
            BrandTree, or None if the brand has no rows
        """
        return self.tree_builder.build(self.load_dataset(), brand_id)

    def classify_device_type(self, device_name: str, dtype: Optional[str]) -> DeviceType:
        """Classify a device as pad or phone."""
        return classify_device_type(device_name, dtype)

    def reset(self) -> None:
        """Drop cached dataset and brands so the next call reloads."""
        with self._lock:
            self._dataset = None
            self._brands = None
            self.load_result = None

"""CSV source that tries several candidate locations in priority order."""

import logging
from pathlib import Path
from typing import Optional
import requests
from config.settings import Settings
from retrieval.errors import SourceUnreachableError

logger = logging.getLogger(__name__)


class CSVSource:
    """
    Fetch raw CSV text from the first reachable candidate location.

    Locations are URLs when a base URL is configured, otherwise file paths.
    A failing candidate is logged and skipped; only when every candidate
    fails is SourceUnreachableError raised.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize CSV source.

        Args:
            settings: Settings with base_url/data_root and candidate paths
        """
        self.settings = settings or Settings()
        self.timeout = self.settings.request_timeout
        self._last_error: Optional[str] = None

    def _get_headers(self) -> dict:
        """Build request headers."""
        return {
            "Accept": "text/csv, text/plain, */*",
            "User-Agent": "Device-Catalog/1.0",
        }

    def _fetch_url(self, url: str) -> Optional[str]:
        """Fetch one URL, returning None on a non-success status."""
        response = requests.get(url, headers=self._get_headers(), timeout=self.timeout)

        if not response.ok:
            logger.warning(f"Failed to load from {url}: {response.status_code} {response.reason}")
            return None

        # Servers often omit the charset for text/csv
        if "charset" not in response.headers.get("Content-Type", ""):
            response.encoding = "utf-8"

        return response.text

    def _read_file(self, path: str) -> Optional[str]:
        """Read one local file, returning None when it does not exist."""
        file_path = Path(path)
        if not file_path.is_file():
            logger.warning(f"Failed to load from {path}: file not found")
            return None

        return file_path.read_text(encoding="utf-8-sig")

    def fetch(self) -> tuple[str, str]:
        """
        Fetch CSV text.

        Returns:
            (location, text) for the first candidate that succeeded

        Raises:
            SourceUnreachableError: If every candidate failed
        """
        locations = self.settings.resolve_locations()
        self._last_error = None

        for location in locations:
            try:
                if self.settings.base_url:
                    text = self._fetch_url(location)
                else:
                    text = self._read_file(location)
            except requests.exceptions.RequestException as e:
                logger.warning(f"Failed to load from {location}: {e}")
                self._last_error = str(e)
                continue
            except OSError as e:
                logger.warning(f"Failed to load from {location}: {e}")
                self._last_error = str(e)
                continue

            if text is not None:
                logger.info(f"Loaded CSV file from {location}")
                return location, text

        raise SourceUnreachableError(locations, self._last_error)

    def get_last_error(self) -> Optional[str]:
        """Get the last transport error message."""
        return self._last_error

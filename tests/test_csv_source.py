"""Tests for CSVSource candidate resolution."""

import pytest
from unittest.mock import Mock, patch
import requests
from config.settings import Settings
from retrieval.csv_source import CSVSource
from retrieval.errors import SourceUnreachableError

CSV_TEXT = "model,brand\nM1,acme\n"


def _response(status_code: int, text: str = "", reason: str = "") -> Mock:
    """Build a fake requests response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    response.text = text
    response.headers = {"Content-Type": "text/csv"}
    return response


class TestCSVSourceFiles:
    """Test reading candidates from the filesystem."""

    def test_first_candidate_wins(self, tmp_path):
        """Test the highest priority existing file is used."""
        (tmp_path / "database").mkdir()
        (tmp_path / "database" / "models.csv").write_text(CSV_TEXT, encoding="utf-8")
        (tmp_path / "src" / "database").mkdir(parents=True)
        (tmp_path / "src" / "database" / "models.csv").write_text("other", encoding="utf-8")

        source = CSVSource(Settings(data_root=str(tmp_path), base_url=None))
        location, text = source.fetch()

        assert location == str(tmp_path / "database" / "models.csv")
        assert text == CSV_TEXT

    def test_falls_back_to_later_candidate(self, tmp_path):
        """Test a missing file falls through to the next candidate."""
        (tmp_path / "src" / "database").mkdir(parents=True)
        (tmp_path / "src" / "database" / "models.csv").write_text(CSV_TEXT, encoding="utf-8")

        source = CSVSource(Settings(data_root=str(tmp_path), base_url=None))
        location, text = source.fetch()

        assert location == str(tmp_path / "src" / "database" / "models.csv")
        assert text == CSV_TEXT

    def test_strips_utf8_bom(self, tmp_path):
        """Test a byte order mark is not part of the first header."""
        (tmp_path / "database").mkdir()
        (tmp_path / "database" / "models.csv").write_bytes(b"\xef\xbb\xbf" + CSV_TEXT.encode("utf-8"))

        source = CSVSource(Settings(data_root=str(tmp_path), base_url=None))
        _, text = source.fetch()

        assert text.startswith("model,")

    def test_no_candidate_raises(self, tmp_path):
        """Test every candidate missing raises SourceUnreachableError."""
        source = CSVSource(Settings(data_root=str(tmp_path), base_url=None))

        with pytest.raises(SourceUnreachableError) as exc_info:
            source.fetch()

        assert exc_info.value.attempted == [
            str(tmp_path / "database" / "models.csv"),
            str(tmp_path / "src" / "database" / "models.csv"),
        ]
        assert "database/models.csv" in str(exc_info.value)


class TestCSVSourceHTTP:
    """Test fetching candidates over HTTP."""

    def setup_method(self):
        """Set up test fixtures."""
        self.settings = Settings(base_url="https://devices.example.com/app")
        self.source = CSVSource(self.settings)

    @patch('requests.get')
    def test_fetch_success(self, mock_get):
        """Test the first successful response is used."""
        mock_get.return_value = _response(200, CSV_TEXT)

        location, text = self.source.fetch()

        assert location == "https://devices.example.com/database/models.csv"
        assert text == CSV_TEXT
        mock_get.assert_called_once()
        assert mock_get.call_args[1]["timeout"] == self.settings.request_timeout

    @patch('requests.get')
    def test_fetch_skips_error_status(self, mock_get):
        """Test a 404 falls through to the next candidate."""
        mock_get.side_effect = [
            _response(404, reason="Not Found"),
            _response(200, CSV_TEXT),
        ]

        location, text = self.source.fetch()

        assert location == "https://devices.example.com/src/database/models.csv"
        assert text == CSV_TEXT
        assert mock_get.call_count == 2

    @patch('requests.get')
    def test_fetch_skips_connection_error(self, mock_get):
        """Test a transport error falls through to the next candidate."""
        mock_get.side_effect = [
            requests.exceptions.ConnectionError("connection refused"),
            _response(200, CSV_TEXT),
        ]

        _, text = self.source.fetch()

        assert text == CSV_TEXT
        assert "connection refused" in self.source.get_last_error()

    @patch('requests.get')
    def test_all_candidates_fail(self, mock_get):
        """Test the aggregated error keeps attempted locations and last error."""
        mock_get.side_effect = requests.exceptions.Timeout("read timed out")

        with pytest.raises(SourceUnreachableError) as exc_info:
            self.source.fetch()

        error = exc_info.value
        assert error.attempted == self.settings.resolve_locations()
        assert len(error.attempted) == 4
        assert "read timed out" in error.last_error
        assert mock_get.call_count == len(error.attempted)

"""Tests for settings and catalog config."""

from config.settings import CatalogConfig, Settings


class TestSettings:
    """Test candidate location resolution."""

    def test_default_candidates(self):
        """Test the default candidate list and its priority."""
        settings = Settings(base_url=None, data_root=".")

        assert settings.candidate_paths[0] == "/database/models.csv"
        assert settings.request_timeout == 10
        assert settings.lenient_threshold == 10

    def test_resolve_file_locations(self, tmp_path):
        """Test candidates resolve under data_root without duplicates."""
        settings = Settings(base_url=None, data_root=str(tmp_path))

        assert settings.resolve_locations() == [
            str(tmp_path / "database" / "models.csv"),
            str(tmp_path / "src" / "database" / "models.csv"),
        ]

    def test_resolve_url_locations(self):
        """Test candidates resolve against the base URL."""
        settings = Settings(base_url="https://devices.example.com/", candidate_paths=["/a.csv", "./b/c.csv"])

        assert settings.resolve_locations() == [
            "https://devices.example.com/a.csv",
            "https://devices.example.com/b/c.csv",
        ]

    def test_resolve_url_locations_under_sub_path(self):
        """Test origin-absolute and page-relative candidates stay distinct."""
        settings = Settings(base_url="https://devices.example.com/app")

        assert settings.resolve_locations() == [
            "https://devices.example.com/database/models.csv",
            "https://devices.example.com/src/database/models.csv",
            "https://devices.example.com/app/database/models.csv",
            "https://devices.example.com/app/src/database/models.csv",
        ]

    def test_resolve_url_locations_at_origin_root(self):
        """Test candidates that meet at the origin root are tried once."""
        settings = Settings(base_url="https://devices.example.com")

        assert settings.resolve_locations() == [
            "https://devices.example.com/database/models.csv",
            "https://devices.example.com/src/database/models.csv",
        ]

    def test_environment_fallback(self, monkeypatch):
        """Test base URL and data root come from the environment when not given."""
        monkeypatch.setenv("DEVICE_CATALOG_BASE_URL", "https://cdn.example.com")
        monkeypatch.setenv("DEVICE_CATALOG_DATA_ROOT", "/srv/catalog")

        settings = Settings()

        assert settings.base_url == "https://cdn.example.com"
        assert settings.data_root == "/srv/catalog"

    def test_explicit_values_override_environment(self, monkeypatch):
        """Test explicit arguments beat the environment."""
        monkeypatch.setenv("DEVICE_CATALOG_BASE_URL", "https://cdn.example.com")

        settings = Settings(base_url="https://other.example.com")

        assert settings.base_url == "https://other.example.com"


class TestCatalogConfig:
    """Test static catalog config loading."""

    def test_bundled_config(self):
        """Test the bundled brand table and required columns."""
        config = CatalogConfig.load()

        assert len(config.brand_names) == 13
        assert config.brand_names["xiaomi"] == "小米"
        assert config.required_columns == [
            "model", "dtype", "brand", "brand_title", "code", "code_alias", "model_name", "ver_name",
        ]

    def test_display_name_fallback(self):
        """Test unknown brands fall back to the dataset title."""
        config = CatalogConfig(brand_names={"apple": "苹果(Apple)"})

        assert config.display_name("APPLE", "Apple Inc") == "苹果(Apple)"
        assert config.display_name("nokia", "Nokia") == "Nokia"

    def test_custom_config_file(self, tmp_path):
        """Test loading a config from another path."""
        path = tmp_path / "catalog.yaml"
        path.write_text("brand_names:\n  acme: Acme Corp\nrequired_columns: [model]\n", encoding="utf-8")

        config = CatalogConfig.load(str(path))

        assert config.brand_names == {"acme": "Acme Corp"}
        assert config.required_columns == ["model"]

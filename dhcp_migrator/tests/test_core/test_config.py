"""Тесты загрузчика config.yaml."""

import pytest

from dhcp_migrator.config import Config, load_config
from dhcp_migrator.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Без config.yaml в рабочей папке и без переменных окружения."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DHCP_SERVERS", raising=False)
    monkeypatch.delenv("DHCP_SITE", raising=False)
    monkeypatch.setattr("dhcp_migrator.config.SEARCH_PATHS", ["config.yaml", "config.yml"])


@pytest.mark.unit
class TestLoadConfig:
    """Тесты загрузки и слияния."""

    def test_defaults_without_file(self):
        config = load_config()
        assert config.config_file is None
        assert config.source.servers == []
        assert config.output.output_folder == "reports"

    def test_yaml_merged_over_defaults(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "source:\n  servers: [dhcp01]\nexport:\n  site: NYC\n",
            encoding="utf-8",
        )
        config = load_config(str(path))
        assert config.config_file == str(path)
        assert config.source.servers == ["dhcp01"]
        assert config.source.timeout == 120
        assert config.export.site == "NYC"
        assert config.validated.export.site == "NYC"

    def test_search_path(self, tmp_path):
        (tmp_path / "config.yaml").write_text("output:\n  csv_delimiter: ';'\n", encoding="utf-8")
        config = Config()
        assert config.config_file == "config.yaml"
        assert config.validated.output.csv_delimiter == ";"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(str(tmp_path / "absent.yaml"))
        assert "absent.yaml" in exc_info.value.config_file

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("source: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_dict_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("source:\n  max_workers: 100\n", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path))
        assert exc_info.value.key == "source.max_workers"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)).source.type == "powershell"


@pytest.mark.unit
class TestEnvironment:
    """Тесты переменных окружения."""

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "c.yaml"
        path.write_text("source:\n  servers: [dhcp01]\n", encoding="utf-8")
        monkeypatch.setenv("DHCP_SERVERS", "dhcp02, dhcp03")
        monkeypatch.setenv("DHCP_SITE", "LON")
        config = load_config(str(path))
        assert config.validated.source.servers == ["dhcp02", "dhcp03"]
        assert config.export.site == "LON"


@pytest.mark.unit
class TestSectionAccess:
    """Тесты доступа к секциям атрибутами."""

    def test_sections_from_schema(self):
        config = load_config()
        assert config.source is config.validated.source
        assert config.export.site is None

    def test_unknown_section(self):
        with pytest.raises(AttributeError):
            load_config().missing

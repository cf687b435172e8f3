"""Tests for configuration loading."""

from json_arranger.config import AppConfig, get_config_path, load_config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self, temp_dir, monkeypatch):
        monkeypatch.delenv("JSON_ARRANGER_FETCH_TIMEOUT", raising=False)
        config = load_config(temp_dir / "missing.toml")
        assert config.export_filename == "arranged.json"
        assert config.fetch_timeout == 10.0

    def test_file_values(self, temp_dir, monkeypatch):
        monkeypatch.delenv("JSON_ARRANGER_SOURCE_URL", raising=False)
        path = temp_dir / "config.toml"
        path.write_text('[arranger]\nsource_url = "https://example.test/coc.json"\nserver_port = 7861\n')
        config = load_config(path)
        assert config.source_url == "https://example.test/coc.json"
        assert config.server_port == 7861

    def test_env_overrides_file(self, temp_dir, monkeypatch):
        path = temp_dir / "config.toml"
        path.write_text('[arranger]\nfetch_timeout = 3\n')
        monkeypatch.setenv("JSON_ARRANGER_FETCH_TIMEOUT", "2.5")
        assert load_config(path).fetch_timeout == 2.5

    def test_bad_env_value_ignored(self, temp_dir, monkeypatch):
        monkeypatch.setenv("JSON_ARRANGER_SERVER_PORT", "not-a-port")
        assert load_config(temp_dir / "missing.toml").server_port is None

    def test_broken_file_falls_back(self, temp_dir, monkeypatch):
        monkeypatch.delenv("JSON_ARRANGER_LOG_LEVEL", raising=False)
        path = temp_dir / "config.toml"
        path.write_text("[arranger\n")
        assert load_config(path) == AppConfig()

    def test_config_path_respects_xdg(self, temp_dir, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        assert get_config_path() == temp_dir / "json-arranger" / "config.toml"

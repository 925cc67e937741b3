import os

from landing.config import ConfigManager, DEFAULTS


def test_defaults_without_config_file(tmp_path):
    config = ConfigManager(str(tmp_path)).load()
    assert config == DEFAULTS
    assert config is not DEFAULTS


def test_yaml_overrides_are_merged(tmp_path):
    (tmp_path / "config.yaml").write_text("web:\n  port: 8081\n", encoding="utf-8")
    config = ConfigManager(str(tmp_path)).load()

    assert config["web"] == {"port": 8081, "host": "0.0.0.0"}
    assert config["storage"] == DEFAULTS["storage"]


def test_corrupt_yaml_falls_back_to_defaults(tmp_path):
    (tmp_path / "config.yaml").write_text("web: [unclosed\n", encoding="utf-8")
    config = ConfigManager(str(tmp_path)).load()

    assert config["web"] == DEFAULTS["web"]
    assert "_config_error" in config


def test_non_mapping_yaml_is_an_error(tmp_path):
    (tmp_path / "config.yaml").write_text("- a\n- b\n", encoding="utf-8")
    config = ConfigManager(str(tmp_path)).load()
    assert "_config_error" in config


def test_port_env_overrides_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("web:\n  port: 8081\n", encoding="utf-8")
    monkeypatch.setenv("PORT", "9000")
    assert ConfigManager(str(tmp_path)).load()["web"]["port"] == 9000


def test_bad_port_env_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    config = ConfigManager(str(tmp_path)).load()
    assert config["web"]["port"] == DEFAULTS["web"]["port"]
    assert "PORT" in config["_config_error"]


def test_data_dir_resolution(tmp_path):
    manager = ConfigManager(str(tmp_path))
    assert manager.data_dir() == os.path.join(str(tmp_path), "data")

    absolute = str(tmp_path / "elsewhere")
    config = {"storage": {"data_dir": absolute, "public_dir": "site"}}
    assert manager.data_dir(config) == absolute
    assert manager.public_dir(config) == os.path.join(str(tmp_path), "site")


def test_file_locations(tmp_path):
    manager = ConfigManager(str(tmp_path))
    assert manager.config_path == os.path.join(str(tmp_path), "config.yaml")
    assert manager.env_path == os.path.join(str(tmp_path), ".env")

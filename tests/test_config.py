"""Tests for layered configuration."""

import json

from appforge.config import (
    AppforgeConfig,
    CreateConfig,
    configure,
    get_config,
    reset_config,
)


class TestDefaults:
    def test_default_values(self):
        config = AppforgeConfig()
        assert config.cli.mode == "human"
        assert config.create.resource_glob == "/resources/**/*"
        assert config.create.theme_library_type == "theme-library"
        assert config.create.project_file == "appforge.yaml"
        assert config.generator.target == ""

    def test_load_without_file(self):
        assert AppforgeConfig.load().to_dict() == AppforgeConfig().to_dict()


class TestLoad:
    def test_file_values_applied(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(
            json.dumps({"cli": {"mode": "agent"}, "create": {"default_webapp": "app"}})
        )
        config = AppforgeConfig.load()
        assert config.cli.mode == "agent"
        assert config.create.default_webapp == "app"

    def test_unknown_keys_ignored(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({"create": {"nope": 1}, "other": {}}))
        assert AppforgeConfig.load().create == CreateConfig()

    def test_corrupt_file_falls_back_to_defaults(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("{broken")
        assert AppforgeConfig.load().cli.mode == "human"

    def test_env_overrides_file(self, isolated_config, monkeypatch):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({"create": {"project_file": "a.yaml"}}))
        monkeypatch.setenv("APPFORGE_PROJECT_FILE", "b.yaml")
        monkeypatch.setenv("APPFORGE_THEME_LIBRARY_TYPE", "themelib")
        monkeypatch.setenv("APPFORGE_GENERATOR", "pkg.mod:Gen")

        config = AppforgeConfig.load()
        assert config.create.project_file == "b.yaml"
        assert config.create.theme_library_type == "themelib"
        assert config.generator.target == "pkg.mod:Gen"

    def test_invalid_mode_env_ignored(self, monkeypatch):
        monkeypatch.setenv("APPFORGE_MODE", "robot")
        assert AppforgeConfig.load().cli.mode == "human"


class TestSave:
    def test_save_then_load(self, isolated_config):
        config = AppforgeConfig()
        config.cli.mode = "agent"
        config.create.theme_library_type = "themelib"
        config.save()

        data = json.loads(isolated_config.read_text())
        assert data["cli"] == {"mode": "agent"}
        assert "generator" not in data
        assert AppforgeConfig.load().create.theme_library_type == "themelib"


class TestSingleton:
    def test_cached_until_reset(self):
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first

    def test_configure_installs_instance(self):
        config = AppforgeConfig(create=CreateConfig(default_webapp="web"))
        configure(config)
        assert get_config() is config

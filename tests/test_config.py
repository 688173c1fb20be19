"""Tests for configuration loading and logging set-up."""

import logging

import pytest

from ganymede_toolkit import logging_config
from ganymede_toolkit.config import ConfigManager
from ganymede_toolkit.core.models import ResourceLinks


class TestConfigManager:
    def test_singleton(self):
        assert ConfigManager() is ConfigManager()

    def test_packaged_defaults(self):
        cfg = ConfigManager()
        whitelist = cfg.get_whitelist()
        assert len(whitelist) == 33
        assert "https://dofusdb.fr" in whitelist
        assert cfg.get_resource_links()["path_segments"]["item"] == "object"
        assert cfg.get_resource_mapping() == {"quest": {}, "dungeon": {}, "item": {}}
        assert cfg.get_message("hidden_link") == "hidden link"
        assert cfg.get_message("parse_failed") == "The step content could not be read."
        assert cfg.get_logging_config()["version"] == 1

    def test_defaults_are_copied_to_user_dir(self, isolated_config):
        ConfigManager()
        assert sorted(p.name for p in isolated_config.iterdir()) == [
            "logging.yml",
            "messages.yml",
            "resource_links.yml",
            "resource_mapping.yml",
            "whitelist.yml",
        ]

    def test_user_whitelist_overrides(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "whitelist.yml").write_text(
            "origins:\n  - https://mine.example/\n", encoding="utf-8"
        )
        assert ConfigManager().get_whitelist() == frozenset({"https://mine.example"})

    def test_mapping_ids_are_strings(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "resource_mapping.yml").write_text(
            "dungeon:\n  12: https://www.dofuspourlesnoobs.com/d.html\n", encoding="utf-8"
        )
        mapping = ConfigManager().get_resource_mapping()
        assert mapping["dungeon"] == {"12": "https://www.dofuspourlesnoobs.com/d.html"}
        # Sections absent from the override keep their packaged value
        assert mapping["quest"] == {}

    def test_invalid_user_file_keeps_packaged_values(self, isolated_config, caplog):
        isolated_config.mkdir(parents=True)
        (isolated_config / "whitelist.yml").write_text("origins: [unclosed\n", encoding="utf-8")
        with caplog.at_level(logging.ERROR):
            whitelist = ConfigManager().get_whitelist()
        assert "https://dofusdb.fr" in whitelist
        assert "Could not parse user config" in caplog.text

    def test_unknown_message_default(self):
        assert ConfigManager().get_message("nope", "fallback") == "fallback"


def test_resource_links_from_config_merges_segments():
    links = ResourceLinks.from_config({"path_segments": {"monster": "creature"}, "image_proxy_hosts": ["cdn.example"]})
    assert links.path_segments["monster"] == "creature"
    assert links.path_segments["item"] == "object"
    assert links.image_proxy_hosts == frozenset({"cdn.example"})
    assert links.database_url_template == ResourceLinks().database_url_template


class TestLoggingSetup:
    def test_file_handler_points_to_log_dir(self, tmp_path, monkeypatch):
        applied = []
        monkeypatch.delenv("GANYMEDE_DEBUG_TRANSFORM", raising=False)
        monkeypatch.delenv("GANYMEDE_DEBUG_MODULES", raising=False)
        monkeypatch.setenv("GANYMEDE_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setattr(logging_config.logging.config, "dictConfig", applied.append)

        logging_config.setup_logging()

        (config,) = applied
        assert config["handlers"]["file"]["filename"] == str(tmp_path / "logs" / "app.log")
        assert (tmp_path / "logs").is_dir()

    def test_invalid_config_falls_back_to_minimal(self, tmp_path, monkeypatch):
        applied = []

        def fake_dict_config(config):
            if config.get("root", {}).get("handlers") == ["console", "file"]:
                raise ValueError("Unable to configure handler 'file'")
            applied.append(config)

        monkeypatch.delenv("GANYMEDE_DEBUG_TRANSFORM", raising=False)
        monkeypatch.delenv("GANYMEDE_DEBUG_MODULES", raising=False)
        monkeypatch.setenv("GANYMEDE_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setattr(logging_config.logging.config, "dictConfig", fake_dict_config)

        logging_config.setup_logging()

        (config,) = applied
        assert list(config["handlers"]) == ["console"]

    @pytest.mark.parametrize("env,value,target", [
        ("GANYMEDE_DEBUG_TRANSFORM", "true", "ganymede_toolkit.core.transform"),
        ("GANYMEDE_DEBUG_MODULES", "ganymede_toolkit.core.services, ", "ganymede_toolkit.core.services"),
    ])
    def test_debug_overrides(self, monkeypatch, env, value, target):
        monkeypatch.delenv("GANYMEDE_DEBUG_TRANSFORM", raising=False)
        monkeypatch.delenv("GANYMEDE_DEBUG_MODULES", raising=False)
        monkeypatch.setenv(env, value)
        logger = logging.getLogger(target)
        level, handlers = logger.level, list(logger.handlers)
        try:
            logging_config._apply_debug_overrides()
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(level)
            logger.handlers = handlers

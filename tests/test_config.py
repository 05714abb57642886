"""Tests for engine configuration loading."""

import logging

import pytest

from ddlschema_core import SchemaConfig


class TestSchemaConfig:
    """Defaults, YAML and environment loading."""

    def test_defaults(self) -> None:
        config = SchemaConfig()

        assert config.strict is False
        assert config.rejection_level == logging.DEBUG

    def test_from_yaml(self, tmp_path) -> None:
        path = tmp_path / "schema.yaml"
        path.write_text("strict: true\nrejection_log_level: info\n", encoding="utf-8")

        config = SchemaConfig.from_yaml(path)

        assert config.strict is True
        assert config.rejection_log_level == "INFO"
        assert config.rejection_level == logging.INFO

    def test_empty_yaml_gives_defaults(self, tmp_path) -> None:
        path = tmp_path / "schema.yaml"
        path.write_text("", encoding="utf-8")

        assert SchemaConfig.from_yaml(path) == SchemaConfig()

    def test_yaml_must_be_mapping(self, tmp_path) -> None:
        path = tmp_path / "schema.yaml"
        path.write_text("- strict\n", encoding="utf-8")

        with pytest.raises(ValueError):
            SchemaConfig.from_yaml(path)

    def test_unknown_keys_are_refused(self) -> None:
        with pytest.raises(ValueError, match="colour"):
            SchemaConfig.from_dict({"strict": False, "colour": "blue"})

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError):
            SchemaConfig(rejection_log_level="loud")

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("DDLSCHEMA_STRICT", "yes")
        monkeypatch.setenv("DDLSCHEMA_REJECTION_LOG_LEVEL", "warning")

        config = SchemaConfig.from_env()

        assert config.strict is True
        assert config.rejection_level == logging.WARNING

    def test_from_env_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("DDLSCHEMA_STRICT", raising=False)
        monkeypatch.delenv("DDLSCHEMA_REJECTION_LOG_LEVEL", raising=False)

        assert SchemaConfig.from_env() == SchemaConfig()

"""Tests for configuration loading."""

import json
import logging

import pytest

from formbuilder import FormBuilderConfig, FormHelper, load_config


def _write_module(path, content):
    path.mkdir(parents=True, exist_ok=True)
    (path / "formbuilder.conf").write_text(content)


class TestFormBuilderConfig:
    def test_module_file(self, tmp_path):
        _write_module(tmp_path, "custom_fields = {'markdown': 'myapp.fields.MarkdownType'}\n")

        config = FormBuilderConfig(tmp_path)

        assert config.path == tmp_path / "formbuilder.conf"
        assert config.custom_fields == {"markdown": "myapp.fields.MarkdownType"}

    def test_json_file(self, tmp_path):
        (tmp_path / "formbuilder.json").write_text(json.dumps({"defaults": {"wrapper": {"class": "row"}}}))

        config = FormBuilderConfig(tmp_path)

        assert config.settings.get_dotted("defaults.wrapper.class") == "row"
        assert config.custom_fields == {}

    def test_module_file_preferred(self, tmp_path):
        _write_module(tmp_path, "source = 'module'\n")
        (tmp_path / "formbuilder.json").write_text('{"source": "json"}')

        assert FormBuilderConfig(tmp_path).settings.source == "module"

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FormBuilderConfig(tmp_path)

    def test_settings_feed_the_helper(self, tmp_path, translator):
        _write_module(tmp_path, "custom_fields = {'bigtext': 'formbuilder.forms.fields.TextareaType'}\n")

        helper = FormHelper(None, translator, FormBuilderConfig(tmp_path).settings)

        assert helper.get_field_type("bigtext") == "formbuilder.forms.fields.TextareaType"


class TestLoadConfig:
    def test_home_from_environment(self, tmp_path, monkeypatch):
        _write_module(tmp_path / "home", "source = 'home'\n")
        monkeypatch.setenv("FORMBUILDER_HOME", str(tmp_path / "home"))

        assert load_config().settings.source == "home"

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        _write_module(tmp_path / "xdg" / "formbuilder", "source = 'xdg'\n")
        monkeypatch.setenv("FORMBUILDER_HOME", str(tmp_path / "empty"))
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        assert load_config().settings.source == "xdg"

    def test_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FORMBUILDER_HOME", str(tmp_path / "empty"))
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

        with pytest.raises(FileNotFoundError, match="no configuration file found"):
            load_config()


class TestHelperFromConfig:
    def test_logging_and_custom_fields(self, tmp_path, translator, fresh_logger):
        _write_module(tmp_path, (
            "custom_fields = {'bigtext': 'formbuilder.forms.fields.TextareaType'}\n"
            f"log_file = {str(tmp_path / 'logs' / '$name.log')!r}\n"
            "log_level = 'debug'\n"
        ))

        helper = FormHelper.from_config(FormBuilderConfig(tmp_path), None, translator)

        assert helper.get_field_type("bigtext") == "formbuilder.forms.fields.TextareaType"
        assert [handler.level for handler in fresh_logger.handlers] == [logging.DEBUG, logging.DEBUG]
        helper.add_custom_field("markdown", "myapp.Markdown")
        assert "registering custom field type 'markdown'" in (tmp_path / "logs" / "helper.log").read_text()

    def test_without_log_file(self, tmp_path, translator, fresh_logger):
        _write_module(tmp_path, "custom_fields = {}\n")

        FormHelper.from_config(FormBuilderConfig(tmp_path), None, translator)

        assert len(fresh_logger.handlers) == 1
        assert fresh_logger.handlers[0].level == logging.INFO

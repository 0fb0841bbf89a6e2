import logging

import pytest
from pydantic import ValidationError

from hephaestus import DFA, Settings, configure, load_settings, setup_logging


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HEPHAESTUS_CONFIG", raising=False)
    monkeypatch.delenv("HEPHAESTUS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("HEPHAESTUS_LOG_DIR", raising=False)
    settings = load_settings()
    assert settings == Settings()
    assert settings.log_level == "INFO"
    assert settings.epsilon == "_"
    assert settings.log_to_file is False


def test_load_from_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("HEPHAESTUS_LOG_LEVEL", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text("log_level: debug\nepsilon: '~'\nconsole_output: false\n")
    settings = load_settings(str(path))
    assert settings.log_level == "DEBUG"
    assert settings.epsilon == "~"
    assert settings.console_output is False


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("log_level: warning\n")
    monkeypatch.setenv("HEPHAESTUS_CONFIG", str(path))
    monkeypatch.delenv("HEPHAESTUS_LOG_LEVEL", raising=False)
    assert load_settings().log_level == "WARNING"


def test_environment_overrides(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text("log_level: info\n")
    monkeypatch.setenv("HEPHAESTUS_LOG_LEVEL", "error")
    monkeypatch.setenv("HEPHAESTUS_LOG_DIR", str(tmp_path / "logs"))
    settings = load_settings(str(path))
    assert settings.log_level == "ERROR"
    assert settings.log_dir == str(tmp_path / "logs")


def test_invalid_settings():
    with pytest.raises(ValidationError):
        Settings(log_level="loud")
    with pytest.raises(ValidationError):
        Settings(epsilon="eps")


def test_setup_logging_writes_json(tmp_path, reset_logging):
    setup_logging(log_dir=str(tmp_path), log_level="DEBUG", console_output=False)
    DFA.new(1, ["0"], [(0, "0", 0)], 0, [0])
    for handler in logging.getLogger().handlers:
        handler.flush()

    app_log = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert "dfa_constructed" in app_log
    assert (tmp_path / "error.log").exists()


def test_configure_applies_settings(tmp_path, reset_logging):
    settings = Settings(log_level="WARNING", log_dir=str(tmp_path / "out"), log_to_file=True, console_output=False)
    assert configure(settings) is settings
    assert logging.getLogger().level == logging.WARNING
    assert (tmp_path / "out" / "app.log").exists()

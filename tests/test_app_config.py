import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from mtg_set_builder.app_config import DEFAULT_CONFIG_FILE, AppConfig
from mtg_set_builder.utils.logging_config import LOG_FILE_NAME, get_log_level, setup_logging


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text(
        "[Logging]\n"
        "log_level = DEBUG\n"
        "\n"
        "[Matching]\n"
        "case_sensitive = yes\n"
        "\n"
        "[Paths]\n"
        "sets_dir = my_sets\n"
        "\n"
        "[Groups]\n"
        "names = lands, tokens ,,rares\n"
        "size = 5\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_defaults_without_file():
    config = AppConfig()
    assert config.get("Logging", "log_level") == "INFO"
    assert config.get_bool("Logging", "log_to_file") is False
    assert config.case_sensitive is False
    assert config.get("Nope", "missing", "fallback") == "fallback"
    assert config.get_int("Nope", "missing", 7) == 7
    assert config.get_list("Nope", "missing") == []


def test_values_from_file_override_defaults(settings_file):
    config = AppConfig(settings_file)
    assert config.log_level == "DEBUG"
    assert config.get_bool("Logging", "log_to_file") is False
    assert config.case_sensitive is True
    assert config.get_list("Groups", "names") == ["lands", "tokens", "rares"]
    assert config.get_int("Groups", "size") == 5
    assert config.get_path("sets_dir") == (settings_file.parent / "my_sets").resolve()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig(tmp_path / "missing.ini")


def test_get_path_unknown_key():
    with pytest.raises(KeyError):
        AppConfig().get_path("cards_dir")


def test_set_and_save(settings_file, tmp_path):
    config = AppConfig(settings_file)
    config.set("Matching", "case_sensitive", False)
    config.set("Export", "format", "json")
    config.save()

    reloaded = AppConfig(settings_file)
    assert reloaded.case_sensitive is False
    assert reloaded.get("Export", "format") == "json"

    with pytest.raises(ValueError):
        AppConfig().save()
    copy = tmp_path / "copy.ini"
    AppConfig().save(copy)
    assert AppConfig(copy).log_level == "INFO"


def test_packaged_default_file():
    assert DEFAULT_CONFIG_FILE.is_file()
    config = AppConfig.from_default_file()
    assert config.log_level == "INFO"
    assert config.get_path("sets_dir").name == "sets"


def test_get_log_level():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("WARNING") == logging.WARNING
    assert get_log_level("chatty") == logging.INFO


def test_setup_logging_reads_level_from_config(settings_file, restore_root_logger):
    root = setup_logging(AppConfig(settings_file))
    assert root is restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)


def test_setup_logging_to_file(tmp_path, restore_root_logger):
    log_dir = tmp_path / "logs"
    root = setup_logging(log_to_file=True, log_to_console=False, log_dir=log_dir)
    assert root.level == logging.INFO
    assert [type(h) for h in root.handlers] == [RotatingFileHandler]
    logging.getLogger("mtg_set_builder.test").info("written to file")
    root.handlers[0].flush()
    assert "written to file" in Path(log_dir, LOG_FILE_NAME).read_text(encoding="utf-8")

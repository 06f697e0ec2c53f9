from anchortoc import config
from anchortoc.toc import TocOptions


def test_defaults_without_config_file(tmp_path):
    assert config.load_toc_default(tmp_path) is False
    assert config.load_toc_options(tmp_path) == TocOptions(include_id=True)


def test_saved_settings_are_loaded(tmp_path):
    config.save_project_config(tmp_path, {"toc_default": True})
    config.save_project_config(tmp_path, {"include_id": False})
    assert config.load_toc_default(tmp_path) is True
    assert config.load_toc_options(tmp_path) == TocOptions(include_id=False)


def test_invalid_config_falls_back_to_defaults(tmp_path):
    config.project_config_path(tmp_path).write_text("{not json", encoding="utf-8")
    assert config.load_toc_default(tmp_path) is False
    assert config.load_include_id(tmp_path) is True


def test_non_object_config_is_ignored(tmp_path):
    config.project_config_path(tmp_path).write_text("[1, 2]", encoding="utf-8")
    assert config.load_toc_default(tmp_path) is False


def test_debug_flag(monkeypatch):
    monkeypatch.setenv("ANCHORTOC_DEBUG", "1")
    assert config.debug_logging_enabled()
    monkeypatch.setenv("ANCHORTOC_DEBUG", "false")
    assert not config.debug_logging_enabled()
    monkeypatch.delenv("ANCHORTOC_DEBUG")
    assert not config.debug_logging_enabled()

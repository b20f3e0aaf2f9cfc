from __future__ import annotations

import pytest

import project_config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    monkeypatch.setenv("GENSUDOKU_CONFIG", str(path))
    project_config.reload()
    yield path
    monkeypatch.delenv("GENSUDOKU_CONFIG")
    project_config.reload()


def test_env_override_is_loaded(config_file) -> None:
    config_file.write_text('[generator]\nextra_hints = 7\n\n[pdf.layout]\nrows = 3\n', "utf-8")
    project_config.reload()

    assert project_config.get_config()["generator"]["extra_hints"] == 7
    assert project_config.get_section("pdf.layout.rows") == 3
    assert project_config.get_section("pdf.layout.cols", 2) == 2
    with pytest.raises(KeyError):
        project_config.get_section("pdf.layout.cols")


def test_missing_file_yields_defaults(config_file) -> None:
    assert not config_file.exists()
    assert project_config.get_config() == {}
    assert project_config.get_section("logging.level", "WARNING") == "WARNING"


def test_config_is_cached_until_reload(config_file) -> None:
    config_file.write_text('[logging]\nlevel = "INFO"\n', "utf-8")
    project_config.reload()
    assert project_config.get_section("logging.level") == "INFO"

    config_file.write_text('[logging]\nlevel = "DEBUG"\n', "utf-8")
    assert project_config.get_section("logging.level") == "INFO"
    project_config.reload()
    assert project_config.get_section("logging.level") == "DEBUG"


def test_shipped_config_has_generator_defaults() -> None:
    project_config.reload()
    assert project_config.get_section("generator.extra_hints") == 0
    assert project_config.get_section("pdf.puzzles") == 4

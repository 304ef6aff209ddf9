import os

import pytest

import archive_config

def test_defaults(no_user_config, monkeypatch):
    monkeypatch.setenv("HOME", "/home/someone")
    settings = archive_config.make_settings(archive_config.load_config())
    assert settings.dev_home == "/home/someone/development"
    assert settings.output == "/home/someone/development/archive"
    assert settings.keep == 5
    assert settings.period == 'day'
    assert settings.item_type == 'project'
    assert settings.ignore_file == "./ignore"
    assert not settings.verbose
    assert not settings.strict

def test_dev_home_from_environment(no_user_config, monkeypatch):
    monkeypatch.setenv("DEV_HOME", "/srv/dev")
    settings = archive_config.make_settings(archive_config.load_config())
    assert settings.dev_home == "/srv/dev"
    assert settings.output == "/srv/dev/archive"

def test_yaml_files_merge_in_order(no_user_config, tmp_path):
    first = tmp_path / "first.yaml"
    first.write_text("archive:\n  keep: 9\n  period: week\n")
    second = tmp_path / "second.yaml"
    second.write_text("archive:\n  keep: 2\n  output: $HOME/archives\n")
    settings = archive_config.make_settings(
        archive_config.load_config([str(first), str(tmp_path / "missing.yaml"), str(second)]))
    assert settings.keep == 2
    assert settings.period == 'week'
    assert settings.output == os.path.expandvars("$HOME/archives")

def test_overrides_win_unless_none(no_user_config):
    settings = archive_config.make_settings(archive_config.load_config(),
                                            {'keep': 3, 'type': 'gist', 'period': None})
    assert settings.keep == 3
    assert settings.item_type == 'gist'
    assert settings.period == 'day'

def test_settings_are_immutable(no_user_config):
    settings = archive_config.make_settings(archive_config.load_config())
    with pytest.raises(AttributeError):
        settings.keep = 1

def test_defaults_are_not_shared(no_user_config):
    config = archive_config.load_config()
    config['archive']['keep'] = 99
    assert archive_config.HARDCODED_DEFAULT_CONFIG['archive']['keep'] == 5

@pytest.mark.parametrize("value", [0, -2, "0", "three", 2.5, True, None])
def test_keep_must_be_positive(value):
    with pytest.raises(ValueError):
        archive_config.positive_int(value)

def test_keep_accepts_numeric_string():
    assert archive_config.positive_int("7") == 7

@pytest.mark.parametrize("overrides", [{'type': 'widget'}, {'period': 'year'}, {'keep': 0}])
def test_bad_settings_rejected(no_user_config, overrides):
    with pytest.raises(ValueError):
        archive_config.make_settings(archive_config.load_config(), overrides)

def test_empty_archive_section_rejected(no_user_config, tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("archive:\n")
    with pytest.raises(ValueError):
        archive_config.make_settings(archive_config.load_config([str(empty)]))

def test_empty_archive_section_reported_by_cli(no_user_config, tmp_path, capsys):
    import dev_archive
    empty = tmp_path / "empty.yaml"
    empty.write_text("archive:\n")
    with pytest.raises(SystemExit) as exited:
        dev_archive.main(["-c", str(empty), "alpha"])
    assert exited.value.code == 2
    assert "mapping" in capsys.readouterr().err

def test_nested_sections_merge(no_user_config, tmp_path):
    partial = tmp_path / "partial.yaml"
    partial.write_text("archive:\n  type: gist\n")
    config = archive_config.load_config([str(partial)])
    assert config['archive']['type'] == 'gist'
    assert config['archive']['keep'] == 5

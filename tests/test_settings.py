from pathlib import Path

from timesince.shared.config.settings import Settings


def test_defaults_from_env():
    settings = Settings.from_env({"HOME": "/home/me"})

    assert settings.data_file == Path("/home/me/.config/timesince/data.json")
    assert settings.log_level == "WARNING"
    assert settings.log_dir is None
    assert settings.color is True


def test_environment_overrides():
    settings = Settings.from_env(
        {
            "TIMESINCE_DATA_FILE": "/tmp/events.json",
            "TIMESINCE_LOG_LEVEL": "info",
            "TIMESINCE_LOG_DIR": "/tmp/logs",
            "NO_COLOR": "1",
        }
    )

    assert settings.data_file == Path("/tmp/events.json")
    assert settings.log_level == "INFO"
    assert settings.log_dir == Path("/tmp/logs")
    assert settings.color is False


def test_cli_overrides():
    base = Settings.from_env({"HOME": "/home/me"})

    assert base.with_overrides() is base

    changed = base.with_overrides(data_file="/tmp/x.json", no_color=True, verbose=True)
    assert changed.data_file == Path("/tmp/x.json")
    assert changed.color is False
    assert changed.log_level == "DEBUG"


def test_dotenv_in_working_directory(tmp_path, monkeypatch):
    target = tmp_path / "from-dotenv.json"
    (tmp_path / ".env").write_text(f"TIMESINCE_DATA_FILE={target}\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    # register the variable so teardown removes what load_dotenv sets
    monkeypatch.setenv("TIMESINCE_DATA_FILE", "placeholder")
    monkeypatch.delenv("TIMESINCE_DATA_FILE")

    assert Settings.from_env().data_file == target


def test_dotenv_does_not_override_environment(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("TIMESINCE_DATA_FILE=/ignored.json\n", encoding="utf-8")
    monkeypatch.setenv("TIMESINCE_DATA_FILE", str(tmp_path / "kept.json"))
    monkeypatch.chdir(tmp_path)

    assert Settings.from_env().data_file == tmp_path / "kept.json"

from pathlib import Path

from pvpmidi import paths


def test_runtime_dir_prefers_xdg(monkeypatch):
    monkeypatch.setenv("XDG_RUNTIME_DIR", "/run/user/1000")
    assert paths.runtime_dir() == Path("/run/user/1000/pvpmidi")


def test_runtime_dir_without_xdg(monkeypatch):
    monkeypatch.delenv("XDG_RUNTIME_DIR", raising=False)
    monkeypatch.setattr(paths.os, "geteuid", lambda: 1000)
    assert paths.runtime_dir() == paths.user_temp_dir()

    monkeypatch.setattr(paths.os, "geteuid", lambda: 0)
    assert paths.runtime_dir() == Path("/run/pvpmidi")


def test_config_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert paths.config_dir() == tmp_path / "pvpmidi"

    monkeypatch.delenv("XDG_CONFIG_HOME")
    assert paths.config_dir() == Path.home() / ".config" / "pvpmidi"

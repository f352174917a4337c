from pathlib import Path

from pystrata import paths


def test_user_settings_file_uses_platform_dir(monkeypatch, tmp_path):
    monkeypatch.delenv(paths.APP_NAME_ENV, raising=False)
    monkeypatch.setattr(paths, "_uc", lambda appname: str(tmp_path / appname))
    assert paths.user_settings_file("demo") == (tmp_path / "demo" / "settings.xml").resolve()
    assert not (tmp_path / "demo").exists()


def test_app_name_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv(paths.APP_NAME_ENV, "other")
    monkeypatch.setattr(paths, "_uc", lambda appname: str(tmp_path / appname))
    assert paths.user_config_dir("demo") == Path(tmp_path / "other").resolve()

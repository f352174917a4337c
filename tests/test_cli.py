import json
import subprocess
import sys

from pystrata import cli


def test_show_merges_sources(write_file, monkeypatch, capsys):
    xml = write_file("settings.xml", "<settings><Server Port='80' Host='db'/></settings>")
    monkeypatch.setenv("CLITEST_Server__Host", "envhost")
    rc = cli.main(["show", "--file", str(xml), "--env", "CLITEST_", "--", "--Server:Port=9000"])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Server:Port = 9000", "Server:Host = envhost"]


def test_show_json(write_file, capsys):
    ini = write_file("app.ini", "[Logging]\nLevel=debug\n")
    assert cli.main(["show", "--json", "--file", str(ini)]) == 0
    assert json.loads(capsys.readouterr().out) == {"Logging:Level": "debug"}


def test_get_value_and_missing(write_file, capsys):
    ini = write_file("app.ini", "[Logging]\nLevel=debug\n")
    assert cli.main(["get", "logging:level", "--file", str(ini)]) == 0
    assert capsys.readouterr().out.strip() == "debug"
    assert cli.main(["get", "missing", "--file", str(ini)]) == 1


def test_app_user_file_is_lowest_layer(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "user_settings_file", lambda app: tmp_path / f"{app}.xml")
    (tmp_path / "myapp.xml").write_text("<settings><Color>red</Color><Size>L</Size></settings>")
    assert cli.main(["get", "Color", "--app", "myapp", "--", "--Color=blue"]) == 0
    assert capsys.readouterr().out.strip() == "blue"
    assert cli.main(["get", "Size", "--app", "myapp"]) == 0
    assert capsys.readouterr().out.strip() == "L"


def test_app_without_user_file(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "user_settings_file", lambda app: tmp_path / "absent.xml")
    assert cli.main(["get", "Color", "--app", "myapp"]) == 1


def test_format_error_exit_code(write_file, capsys):
    bad = write_file("bad.xml", "<settings xmlns:x='urn:x'><x:A>1</x:A></settings>")
    assert cli.main(["show", "--file", str(bad)]) == 2
    assert "namespaces are not supported" in capsys.readouterr().err


def test_undecodable_file_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.ini"
    bad.write_bytes(b"[A]\nKey=\xff\n")
    assert cli.main(["show", "--file", str(bad)]) == 2
    assert "not valid UTF-8" in capsys.readouterr().err


def test_missing_file_exit_code(tmp_path, capsys):
    assert cli.main(["show", "--file", str(tmp_path / "nope.ini")]) == 2
    assert capsys.readouterr().err


def test_module_entry_point_help():
    proc = subprocess.run([sys.executable, "-m", "pystrata", "--help"], capture_output=True, text=True)
    assert proc.returncode == 0
    assert "usage: pystrata" in proc.stdout

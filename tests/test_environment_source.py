from __future__ import annotations

from pystrata.sources import EnvironmentVariablesSource
from pystrata.sources.environment_source import read_env


def test_prefix_is_stripped_and_double_underscore_nests():
    env = {"APP_Logging__Level": "debug", "APP_Port": "80", "OTHER": "x"}
    source = EnvironmentVariablesSource("APP_", environ=env)
    source.load()
    assert dict(source.data) == {"Logging:Level": "debug", "Port": "80"}


def test_prefix_match_ignores_case():
    assert read_env("app_", {"APP_KEY": "1"}) == [("KEY", "1")]


def test_variable_equal_to_prefix_is_skipped():
    assert read_env("APP_", {"APP_": "1"}) == []


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("PYSTRATA_TEST_Section__Key", "value")
    source = EnvironmentVariablesSource("PYSTRATA_TEST_")
    source.load()
    assert source.try_get("section:key") == "value"


def test_without_prefix_every_variable_is_loaded():
    source = EnvironmentVariablesSource(environ={"A": "1", "B__C": "2"})
    source.load()
    assert dict(source.data) == {"A": "1", "B:C": "2"}

import logging

import pytest

from vptreex import config as vx_config
from cli.runtime import runtime_from_args


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in [
        "VPTREEX_METRIC",
        "VPTREEX_SEED",
        "VPTREEX_ENABLE_DIAGNOSTICS",
        "VPTREEX_LOG_LEVEL",
        "VPTREEX_SEARCH_ORDER",
    ]:
        monkeypatch.delenv(key, raising=False)


def test_runtime_config_defaults(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    vx_config.reset_runtime_config_cache()

    runtime = vx_config.runtime_config()

    assert runtime.metric == "euclidean"
    assert runtime.seed is None
    assert runtime.enable_diagnostics is True
    assert runtime.log_level == "INFO"
    assert runtime.search_order == "near-first"
    assert runtime.near_first is True


def test_runtime_config_reads_environment(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("VPTREEX_METRIC", " Levenshtein ")
    monkeypatch.setenv("VPTREEX_SEED", "42")
    monkeypatch.setenv("VPTREEX_ENABLE_DIAGNOSTICS", "off")
    monkeypatch.setenv("VPTREEX_LOG_LEVEL", "debug")
    monkeypatch.setenv("VPTREEX_SEARCH_ORDER", "LEFT-FIRST")

    runtime = vx_config.runtime_config()

    assert runtime.metric == "levenshtein"
    assert runtime.seed == 42
    assert runtime.enable_diagnostics is False
    assert runtime.log_level == "DEBUG"
    assert runtime.near_first is False
    assert logging.getLogger("vptreex").level == logging.DEBUG


def test_invalid_seed_raises(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("VPTREEX_SEED", "abc")

    with pytest.raises(ValueError, match="Invalid integer value 'abc'"):
        vx_config.runtime_config()


def test_invalid_search_order_raises(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("VPTREEX_SEARCH_ORDER", "random")

    with pytest.raises(ValueError, match="Unsupported search order"):
        vx_config.runtime_config()


def test_invalid_log_level_raises(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("VPTREEX_LOG_LEVEL", "chatty")

    with pytest.raises(ValueError, match="Unsupported log level"):
        vx_config.runtime_config()


def test_unrecognised_boolean_falls_back_to_default(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("VPTREEX_ENABLE_DIAGNOSTICS", "maybe")

    assert vx_config.runtime_config().enable_diagnostics is True


def test_configure_runtime_overrides_environment(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    config = vx_config.RuntimeConfig.from_env().replace(seed=7, search_order="left-first")

    vx_config.configure_runtime(config)

    assert vx_config.runtime_config().seed == 7
    assert vx_config.describe_runtime() == {
        "metric": "euclidean",
        "seed": 7,
        "enable_diagnostics": True,
        "log_level": "INFO",
        "search_order": "left-first",
    }


def test_runtime_from_args_maps_cli_fields(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    args = {
        "metric": "Manhattan",
        "seed": 3,
        "diagnostics": False,
        "log_level": "warning",
        "search_order": "left-first",
    }

    runtime = runtime_from_args(args)
    config = runtime.to_config()

    assert config.metric == "manhattan"
    assert config.seed == 3
    assert config.enable_diagnostics is False
    assert config.log_level == "WARNING"
    assert config.search_order == "left-first"

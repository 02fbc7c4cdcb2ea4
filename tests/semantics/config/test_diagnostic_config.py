"""Configuration model tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from memory_diagnostic.config.diagnostic_config import DiagnosticConfig
from memory_diagnostic.config.run_config import RunConfig


def test_defaults() -> None:
    cfg = DiagnosticConfig()

    assert cfg.refresh_interval_seconds == 10
    assert cfg.max_plugins == 10
    assert cfg.min_refresh_interval_seconds() == 10


@pytest.mark.parametrize(
    "data",
    [
        {"refresh_interval_seconds": 0},
        {"refresh_interval_seconds": 301},
        {"max_plugins": 0},
        {"max_plugins": 51},
        {"unknown_key": True},
    ],
)
def test_invalid_values_are_rejected(data: dict) -> None:
    with pytest.raises(ValidationError):
        DiagnosticConfig.from_json_obj(data)


def test_bounds_are_inclusive() -> None:
    low = DiagnosticConfig.from_json_obj({"refresh_interval_seconds": 1, "max_plugins": 1})
    high = DiagnosticConfig.from_json_obj({"refresh_interval_seconds": 300, "max_plugins": 50})

    assert (low.refresh_interval_seconds, low.max_plugins) == (1, 1)
    assert (high.refresh_interval_seconds, high.max_plugins) == (300, 50)


def test_run_config_collects_plugin_extras_into_params(tmp_path: Path) -> None:
    path = tmp_path / "run.json"
    path.write_text(
        json.dumps(
            {
                "diagnostic": {"refresh_interval_seconds": 5},
                "plugins": [
                    {"class_path": "collections:Counter", "name": "Counter", "a": 1},
                    {"class_path": "collections:deque", "enabled": False, "params": {"maxlen": 3}},
                ],
            }
        ),
        encoding="utf-8",
    )

    cfg = RunConfig.from_path(path)

    assert cfg.diagnostic.refresh_interval_seconds == 5
    assert cfg.diagnostic.max_plugins == 10

    counter, queue = cfg.plugins
    assert counter.name == "Counter"
    assert counter.enabled is True
    assert counter.to_init_params() == {"a": 1}
    assert queue.name is None
    assert queue.enabled is False
    assert queue.to_init_params() == {"maxlen": 3}


def test_run_config_rejects_malformed_class_path() -> None:
    with pytest.raises(ValidationError):
        RunConfig.from_json_obj({"plugins": [{"class_path": "no-colon-here"}]})


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        RunConfig.from_path(tmp_path / "absent.json")

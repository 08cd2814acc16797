# pylint: disable=redefined-outer-name
import logging

import pytest

from mlfq.config import Config
from mlfq.logging_setup import configure_logging


@pytest.fixture
def restore_config():
    saved = (Config._loaded, dict(Config._values))
    yield
    Config._loaded, Config._values = saved[0], saved[1]


def test_defaults_without_file():
    defaults = Config.scheduler_defaults()

    assert defaults == {
        "priority_levels": 3,
        "base_quantum": 10,
        "quantum_step": 20,
        "blocking_quantum": 50,
        "tick": 5,
        "preset": 1,
    }
    assert Config.get_log_level() == "INFO"


def test_yaml_file_and_env_override(tmp_path, monkeypatch, restore_config):
    path = tmp_path / "mlfq.yml"
    path.write_text("log_level: debug\npriority_levels: 4\nbase_quantum: 8\ntick: 2.5\n", encoding="utf-8")
    monkeypatch.setenv("MLFQ_CONFIG_PATH", str(path))
    monkeypatch.setenv("MLFQ_BASE_QUANTUM", "12")

    Config.load(force=True)

    assert Config.get_log_level() == "DEBUG"
    assert Config.get("priority_levels") == 4
    assert Config.get("base_quantum") == 12
    assert Config.get("tick") == 2.5
    assert Config.get("quantum_step") == 20


def test_non_mapping_file_is_rejected(tmp_path, monkeypatch, restore_config):
    path = tmp_path / "mlfq.yml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    monkeypatch.setenv("MLFQ_CONFIG_PATH", str(path))

    with pytest.raises(ValueError):
        Config.load(force=True)


def test_configure_logging_uses_level(monkeypatch):
    calls = {}

    def fake_basic_config(**kwargs):
        calls.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    configure_logging("warning")

    assert calls["level"] == logging.WARNING

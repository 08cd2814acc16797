# pylint: disable=wrong-import-position,redefined-outer-name
"""Root conftest for the simulator tests.

Points the config loader at a missing file and clears MLFQ_* overrides
before any mlfq module is imported, so every test starts from the defaults.
"""
import os
import tempfile

os.environ["MLFQ_CONFIG_PATH"] = os.path.join(tempfile.gettempdir(), "mlfq-tests-missing.yml")
for _name in list(os.environ):
    if _name.startswith("MLFQ_") and _name != "MLFQ_CONFIG_PATH":
        del os.environ[_name]

import pytest

from helpers import RecordingScheduler
from mlfq import session
from mlfq.config import Config


@pytest.fixture
def recorder():
    return RecordingScheduler()


@pytest.fixture(autouse=True)
def fresh_session():
    Config.load(force=True)
    session.scheduler = None
    session.processes = []
    session.base_processes = []
    session.event_log = []
    session.settings.clear()
    session.settings.update(Config.scheduler_defaults())
    yield


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from main import app

    return TestClient(app)

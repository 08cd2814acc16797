import pytest

from mlfq import session
from mlfq.engine import InvalidTimeSliceError, load_preset


def _queue_pids(state):
    return [q["pids"] for q in state["queues"]]


def test_state_before_init_is_default():
    state = session.get_state()

    assert state["done"] is True
    assert state["running"] == "IDLE"
    assert len(state["queues"]) == 3
    assert session.tick_session()["time"] == 0
    assert session.run_session(5)["time"] == 0


def test_init_with_preset():
    state = session.init_session({"preset": 2})

    assert _queue_pids(state)[0] == [p.pid for p in load_preset(2)]
    assert state["queues"][0]["quantum"] == 10
    assert state["blocking_queue"]["quantum"] == 50
    assert state["running"] == "P1"
    assert state["event_log"][-1].startswith("Initialized")


def test_demotion_through_session():
    session.init_session({"processes": [{"pid": "A", "cpu_time": 25}], "tick": 10})

    state = session.tick_session()
    assert _queue_pids(state) == [[], ["A"], []]

    state = session.tick_session(10)
    assert state["queues"][1]["quantum_clock"] == 10

    state = session.tick_session(5)
    assert state["finished"] == ["A"]
    assert state["done"] is True
    assert state["processes"][0]["queue"] == "FINISHED"


def test_negative_elapsed_is_rejected():
    session.init_session({"processes": [{"pid": "A", "cpu_time": 25}]})

    with pytest.raises(InvalidTimeSliceError):
        session.tick_session(-5)


def test_run_session_to_completion():
    session.init_session({"preset": 3, "tick": 5})

    state = session.run_session(1000)

    assert state["done"] is True
    assert sorted(state["finished"]) == sorted(p.pid for p in load_preset(3))
    assert state["event_log"][-1].startswith("Run steps=")


@pytest.mark.parametrize(
    "item",
    [
        {"cpu_time": 5},
        {"pid": "X", "cpu_time": -1},
        {"pid": "X", "cpu_time": 0, "blocking_time": 0},
        {"pid": "X", "cpu_time": "lots"},
    ],
)
def test_add_process_rejects_bad_payloads(item):
    with pytest.raises(ValueError):
        session.add_process(item)


def test_add_process_bootstraps_session_and_rejects_duplicates():
    state = session.add_process({"pid": "A", "cpu_time": 5})
    assert _queue_pids(state)[0] == ["A"]

    with pytest.raises(ValueError):
        session.add_process({"pid": "A", "cpu_time": 9})


def test_init_rejects_duplicate_pids_without_touching_settings():
    with pytest.raises(ValueError):
        session.init_session(
            {"priority_levels": 5, "processes": [{"pid": "A", "cpu_time": 1}, {"pid": "A", "cpu_time": 2}]}
        )
    assert session.get_settings()["priority_levels"] == 3


def test_block_process_removes_exact_entry():
    session.init_session(
        {"processes": [{"pid": "A", "cpu_time": 100}, {"pid": "B", "cpu_time": 100}, {"pid": "C", "cpu_time": 100}]}
    )

    state = session.block_process("B", 20)

    assert _queue_pids(state)[0] == ["A", "C"]
    assert state["blocking_queue"]["pids"] == ["B"]
    row = next(r for r in state["processes"] if r["pid"] == "B")
    assert row["blocking_time_needed"] == 20
    assert row["queue"] == "BLOCKING"


def test_block_process_errors():
    with pytest.raises(ValueError):
        session.block_process("A", 5)

    session.init_session({"processes": [{"pid": "A", "cpu_time": 100}]})
    with pytest.raises(ValueError):
        session.block_process("missing", 5)
    with pytest.raises(ValueError):
        session.block_process("A", 0)

    session.block_process("A", 5)
    with pytest.raises(ValueError):
        session.block_process("A", 5)


def test_set_config_rebuilds_layout():
    session.init_session({"processes": [{"pid": "A", "cpu_time": 100}]})
    session.tick_session(10)

    result = session.set_config({"priority_levels": 4, "base_quantum": 5, "quantum_step": 5})

    assert result["ok"] is True
    assert result["config"]["priority_levels"] == 4
    state = session.get_state()
    assert [q["quantum"] for q in state["queues"]] == [5, 10, 15, 20]
    assert _queue_pids(state)[0] == ["A"]
    assert state["processes"][0]["cpu_time_needed"] == 100


@pytest.mark.parametrize(
    "payload",
    [{"priority_levels": 0}, {"base_quantum": -3}, {"quantum_step": -1}, {"tick": 0}, {"blocking_quantum": "x"}],
)
def test_set_config_rejects_invalid_values(payload):
    with pytest.raises(ValueError):
        session.set_config(payload)
    assert session.get_settings()["priority_levels"] == 3


def test_reset_restores_initial_workload():
    session.init_session({"preset": 1})
    session.run_session(4)

    state = session.reset_session()

    assert _queue_pids(state)[0] == [p.pid for p in load_preset(1)]
    assert state["time"] == 0
    assert state["event_log"] == ["Session reset"]


def test_event_log_keeps_repeated_entries():
    session.init_session({"processes": [{"pid": "A", "cpu_time": 25}]})

    session.run_session(0)
    state = session.run_session(0)

    assert state["event_log"][-2:] == ["Run steps=0 -> t=0", "Run steps=0 -> t=0"]


def test_event_log_is_in_time_order():
    session.init_session({"processes": [{"pid": "A", "cpu_time": 25}]})
    session.add_process({"pid": "B", "cpu_time": 5})

    state = session.tick_session(10)

    assert state["event_log"][0].startswith("Initialized")
    assert state["event_log"][1:] == ["Added B cpu=5 blocking=0", "t=10: A CPU0 -> CPU1 (LOWER_PRIORITY)"]


def test_event_log_survives_config_change():
    session.init_session({"processes": [{"pid": "A", "cpu_time": 25}]})
    session.tick_session(10)

    session.set_config({"tick": 2})
    log = session.get_state()["event_log"]

    assert log[0].startswith("Initialized")
    assert log[1] == "t=10: A CPU0 -> CPU1 (LOWER_PRIORITY)"
    assert log[-1].startswith("Config levels=")


def test_reset_without_session_returns_default():
    assert session.reset_session()["done"] is True

import logging
from threading import Lock
from typing import Any, Dict, List, Optional

from mlfq.config import Config
from mlfq.engine import (
    Process,
    QueueType,
    Scheduler,
    SchedulerInterrupt,
    SimulatedClock,
    clone_processes,
    load_preset,
)
from mlfq.serializers import default_state, serialize_state

logger = logging.getLogger(__name__)

_session_lock = Lock()

scheduler: Optional[Scheduler] = None
# Runtime processes admitted in this session (finished ones included)
processes: List[Process] = []
# Pristine copies used to rebuild the scheduler on reset/config
base_processes: List[Process] = []
settings: Dict[str, Any] = Config.scheduler_defaults()
event_log: List[str] = []
EVENT_LOG_LIMIT = 200


def _safe_int(value: Any, default: int) -> int:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return int(default)
        try:
            return int(text, 10)
        except ValueError:
            return int(default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number") from None
    if number != number:
        raise ValueError(f"{name} must be a number")
    return int(number) if number.is_integer() else number


def _apply_settings(data: Dict[str, Any]) -> None:
    updated = dict(settings)

    if "priority_levels" in data:
        levels = _safe_int(data["priority_levels"], 0)
        if levels < 1:
            raise ValueError("priority_levels must be >= 1")
        updated["priority_levels"] = levels

    for key in ("base_quantum", "blocking_quantum", "tick"):
        if key in data:
            value = _number(data[key], key)
            if value <= 0:
                raise ValueError(f"{key} must be > 0")
            updated[key] = value

    if "quantum_step" in data:
        step = _number(data["quantum_step"], "quantum_step")
        if step < 0:
            raise ValueError("quantum_step must be >= 0")
        updated["quantum_step"] = step

    if "preset" in data:
        updated["preset"] = _safe_int(data["preset"], settings.get("preset", 1))

    settings.update(updated)


def _build_process(item: Dict[str, Any]) -> Process:
    if not isinstance(item, dict):
        raise ValueError("process must be an object")
    pid = str(item.get("pid", "")).strip()
    if not pid:
        raise ValueError("pid is required")

    cpu = _number(item.get("cpu_time", item.get("cpu_time_needed", 0)), "cpu_time")
    blocking = _number(item.get("blocking_time", item.get("blocking_time_needed", 0)), "blocking_time")
    if cpu < 0 or blocking < 0:
        raise ValueError("cpu_time and blocking_time must be >= 0")
    if cpu == 0 and blocking == 0:
        raise ValueError(f"process '{pid}' has no work")

    return Process(pid, cpu_time_needed=cpu, blocking_time_needed=blocking)


def _build_process_list(payload_processes: Any) -> List[Process]:
    out: List[Process] = []
    seen = set()
    for item in payload_processes:
        process = _build_process(item)
        if process.pid in seen:
            raise ValueError(f"pid '{process.pid}' already exists")
        seen.add(process.pid)
        out.append(process)
    return out


def _new_scheduler() -> Scheduler:
    return Scheduler(
        priority_levels=int(settings["priority_levels"]),
        base_quantum=settings["base_quantum"],
        quantum_step=settings["quantum_step"],
        blocking_quantum=settings["blocking_quantum"],
        clock=SimulatedClock(step=settings["tick"]),
    )


def _restart(workload: List[Process]) -> None:
    global scheduler, processes, base_processes, event_log
    if scheduler is not None:
        # Keep the outgoing scheduler's transitions ahead of anything new
        event_log = (event_log + scheduler.event_log)[-EVENT_LOG_LIMIT:]
    base_processes = clone_processes(workload)
    processes = clone_processes(workload)
    scheduler = _new_scheduler()
    for process in processes:
        scheduler.add_new_process(process)


def _log(msg: str) -> None:
    global event_log
    logger.info(msg)
    if scheduler is not None:
        # One log, in the order things happened
        scheduler._log_event(msg)
        return
    event_log.append(msg)
    if len(event_log) > EVENT_LOG_LIMIT:
        event_log = event_log[-EVENT_LOG_LIMIT:]


def _state() -> Dict[str, Any]:
    return serialize_state(scheduler, settings, processes, event_log)


def _state_or_default() -> Dict[str, Any]:
    return _state() if scheduler is not None else default_state(settings)


def reset_session() -> Dict[str, Any]:
    global scheduler, processes, event_log
    with _session_lock:
        if base_processes:
            _restart(base_processes)
            event_log = []
            _log("Session reset")
            return _state()

        scheduler = None
        processes = []
        event_log = []
        return default_state(settings)


def init_session(payload: Dict[str, Any]) -> Dict[str, Any]:
    global event_log
    data = payload or {}
    with _session_lock:
        payload_processes = data.get("processes")
        workload = _build_process_list(payload_processes) if isinstance(payload_processes, list) else None
        _apply_settings(data)
        if workload is None:
            workload = load_preset(int(settings["preset"]))

        _restart(workload)
        event_log = []
        _log(f"Initialized levels={settings['priority_levels']} processes={len(processes)}")
        return _state()


def set_config(payload: Dict[str, Any]) -> Dict[str, Any]:
    data = payload or {}
    with _session_lock:
        _apply_settings(data)
        if scheduler is not None:
            # Queue layout is fixed per scheduler, so start over with the same workload
            _restart(base_processes)

        _log(
            f"Config levels={settings['priority_levels']} base={settings['base_quantum']} "
            f"step={settings['quantum_step']} blocking={settings['blocking_quantum']} tick={settings['tick']}"
        )
        return {"ok": True, "config": dict(settings)}


def tick_session(elapsed: Any = None) -> Dict[str, Any]:
    with _session_lock:
        if scheduler is None:
            return default_state(settings)

        if scheduler.has_work():
            if elapsed is None:
                scheduler.run(max_iterations=1)
            else:
                scheduler.tick(_number(elapsed, "elapsed"))

        return _state()


def run_session(steps: Any) -> Dict[str, Any]:
    with _session_lock:
        if scheduler is None:
            return default_state(settings)

        count = max(0, _safe_int(steps, 0))
        done = scheduler.run(max_iterations=count)
        _log(f"Run steps={done} -> t={scheduler.time}")
        return _state()


def add_process(item: Dict[str, Any]) -> Dict[str, Any]:
    global scheduler
    with _session_lock:
        process = _build_process(item)
        if any(p.pid == process.pid for p in processes):
            raise ValueError(f"pid '{process.pid}' already exists")

        if scheduler is None:
            scheduler = _new_scheduler()

        base_processes.extend(clone_processes([process]))
        processes.append(process)
        scheduler.add_new_process(process)
        _log(f"Added {process.pid} cpu={process.cpu_time_needed} blocking={process.blocking_time_needed}")
        return _state()


def block_process(pid: str, blocking_time: Any) -> Dict[str, Any]:
    """External I/O request for a process waiting on a CPU queue."""
    with _session_lock:
        if scheduler is None:
            raise ValueError("no active session")

        amount = _number(blocking_time, "blocking_time")
        if amount <= 0:
            raise ValueError("blocking_time must be > 0")

        process = scheduler.find_process(str(pid))
        if process is None:
            raise ValueError(f"pid '{pid}' is not queued")
        queue = scheduler.locate(process)
        if queue is None or queue.queue_type != QueueType.CPU_QUEUE:
            raise ValueError(f"pid '{pid}' is not waiting for the CPU")

        process.blocking_time_needed += amount
        queue.emit_interrupt(process, SchedulerInterrupt.PROCESS_BLOCKED)
        _log(f"Blocked {process.pid} for {amount}")
        return _state()


def get_state() -> Dict[str, Any]:
    with _session_lock:
        return _state_or_default()


def get_settings() -> Dict[str, Any]:
    with _session_lock:
        return dict(settings)

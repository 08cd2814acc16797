from typing import Any, Dict, List, Optional

from mlfq.engine import Process, Queue, Scheduler


def _safe_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _number(value: Any) -> Any:
    # Keep integral floats readable in JSON
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _serialize_queue(queue: Queue) -> Dict[str, Any]:
    return {
        "label": queue.label,
        "level": queue.priority_level,
        "type": queue.queue_type.value,
        "quantum": _number(queue.quantum),
        "quantum_clock": _number(queue.quantum_clock),
        "pids": queue.pids(),
    }


def _running_pid(scheduler: Scheduler) -> str:
    for queue in scheduler.running_queues:
        head = queue.peek()
        if head is not None:
            return head.pid
    return "IDLE"


def _process_row(process: Process, scheduler: Scheduler) -> Dict[str, Any]:
    owner = scheduler.locate(process)
    finished = process.is_finished() and owner is None
    return {
        "pid": process.pid,
        "cpu_time_needed": _number(process.cpu_time_needed),
        "blocking_time_needed": _number(process.blocking_time_needed),
        "cpu_time_used": _number(process.cpu_time_used),
        "blocking_time_used": _number(process.blocking_time_used),
        "queue": owner.label if owner is not None else ("FINISHED" if finished else "NONE"),
        "finished": finished,
    }


def default_state(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    cfg = settings or {}
    levels = max(1, _safe_int(cfg.get("priority_levels", 0), 0))
    return {
        "time": 0,
        "tick": _number(cfg.get("tick", 0)),
        "running": "IDLE",
        "done": True,
        "queues": [
            {"label": f"CPU{i}", "level": i, "type": "CPU_QUEUE", "quantum": 0, "quantum_clock": 0, "pids": []}
            for i in range(levels)
        ],
        "blocking_queue": {
            "label": "BLOCKING",
            "level": 0,
            "type": "BLOCKING_QUEUE",
            "quantum": 0,
            "quantum_clock": 0,
            "pids": [],
        },
        "finished": [],
        "processes": [],
        "event_log": [],
    }


def serialize_state(
    scheduler: Optional[Scheduler],
    settings: Dict[str, Any],
    processes: List[Process],
    event_log: Optional[List[str]] = None,
) -> Dict[str, Any]:
    state = default_state(settings)
    if scheduler is None:
        if event_log:
            state["event_log"] = [str(x) for x in event_log]
        return state

    rows = [_process_row(p, scheduler) for p in processes]

    # Earlier history first; repeated entries are separate events
    merged_log = [str(x) for x in (event_log or [])] + [str(x) for x in scheduler.event_log]

    state.update(
        {
            "time": _number(scheduler.time),
            "running": _running_pid(scheduler),
            "done": not scheduler.has_work(),
            "queues": [_serialize_queue(q) for q in scheduler.running_queues],
            "blocking_queue": _serialize_queue(scheduler.blocking_queue),
            "finished": [row["pid"] for row in rows if row["finished"]],
            "processes": rows,
            "event_log": merged_log,
        }
    )
    return state

import json
import os
from typing import List

from .models import Process


def _script_dir() -> str:
    return os.path.dirname(os.path.abspath(__file__))


# Helper: clone process list (no runtime fields)
def clone_processes(procs: List[Process]) -> List[Process]:
    return [
        Process(
            p.pid,
            cpu_time_needed=p.cpu_time_needed,
            blocking_time_needed=p.blocking_time_needed,
        )
        for p in procs
    ]


# ------------------------------
# Dataset loaders: presets + JSON
# ------------------------------
def load_preset(preset_id: int) -> List[Process]:
    # CPU-bound only: every process walks down the levels
    if preset_id == 1:
        return [
            Process("P1", cpu_time_needed=25),
            Process("P2", cpu_time_needed=60),
            Process("P3", cpu_time_needed=8),
        ]

    # Mixed: some processes need I/O before their CPU burst
    if preset_id == 2:
        return [
            Process("P1", cpu_time_needed=40),
            Process("P2", cpu_time_needed=15, blocking_time_needed=20),
            Process("P3", cpu_time_needed=30),
            Process("P4", cpu_time_needed=5, blocking_time_needed=60),
        ]

    # I/O heavy
    if preset_id == 3:
        return [
            Process("IO1", cpu_time_needed=5, blocking_time_needed=30),
            Process("IO2", cpu_time_needed=10, blocking_time_needed=80),
            Process("IO3", cpu_time_needed=3, blocking_time_needed=10),
            Process("C1", cpu_time_needed=20),
        ]

    # One long runner sinking to the floor while short jobs keep arriving
    if preset_id == 4:
        return [
            Process("LONG", cpu_time_needed=400),
            Process("S1", cpu_time_needed=4),
            Process("S2", cpu_time_needed=6),
            Process("S3", cpu_time_needed=9),
        ]

    return load_preset(1)


def load_processes_json(path: str = "processes.json") -> List[Process]:
    # Always resolve relative paths from the directory of this module
    if not os.path.isabs(path):
        path = os.path.join(_script_dir(), path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError("process file must contain a JSON array")

    processes: List[Process] = []
    for item in data:
        if not isinstance(item, dict) or "pid" not in item:
            raise ValueError(f"invalid process entry: {item!r}")
        processes.append(Process.from_dict(item))

    return processes

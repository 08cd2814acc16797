from .constants import (
    BASE_QUANTUM,
    BLOCKING_QUANTUM,
    PRIORITY_LEVELS,
    QUANTUM_STEP,
    QueueType,
    SchedulerInterrupt,
    cpu_quantum,
)
from .datasets import clone_processes, load_preset, load_processes_json
from .errors import InvalidTimeSliceError, SchedulerError, UnknownQueueError
from .models import Process
from .process_queue import Queue
from .scheduler import Scheduler, SimulatedClock, wall_clock

__all__ = [
    "BASE_QUANTUM",
    "BLOCKING_QUANTUM",
    "PRIORITY_LEVELS",
    "QUANTUM_STEP",
    "QueueType",
    "SchedulerInterrupt",
    "cpu_quantum",
    "clone_processes",
    "load_preset",
    "load_processes_json",
    "InvalidTimeSliceError",
    "SchedulerError",
    "UnknownQueueError",
    "Process",
    "Queue",
    "Scheduler",
    "SimulatedClock",
    "wall_clock",
]

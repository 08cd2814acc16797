from enum import Enum

# Number of CPU queues; level 0 is the highest priority
PRIORITY_LEVELS = 3

# CPU queue i runs with quantum BASE_QUANTUM + i * QUANTUM_STEP (10, 30, 50)
BASE_QUANTUM = 10
QUANTUM_STEP = 20
BLOCKING_QUANTUM = 50


class QueueType(str, Enum):
    CPU_QUEUE = "CPU_QUEUE"
    BLOCKING_QUEUE = "BLOCKING_QUEUE"


class SchedulerInterrupt(str, Enum):
    PROCESS_BLOCKED = "PROCESS_BLOCKED"
    PROCESS_READY = "PROCESS_READY"
    LOWER_PRIORITY = "LOWER_PRIORITY"


def cpu_quantum(level: int, base: int = BASE_QUANTUM, step: int = QUANTUM_STEP) -> int:
    return base + level * step

import logging
from typing import Iterator, List, Optional

from .constants import QueueType, SchedulerInterrupt
from .errors import validate_time
from .models import Process

logger = logging.getLogger(__name__)


class Queue:
    """
    FIFO holding area for processes at one priority level.

    A queue is either a CPU queue (one per priority level) or the scheduler's
    single blocking queue. It runs its head process, keeps track of how much of
    the quantum that process has used, and hands the process back to the
    scheduler through an interrupt once it has to leave.
    """

    def __init__(self, scheduler, quantum: float, priority_level: int, queue_type: QueueType):
        self.processes: List[Process] = []
        # Lower number = higher priority; meaningless for the blocking queue
        self.priority_level = priority_level
        self.scheduler = scheduler
        # Total time the head process may run before it is moved on,
        # possibly spread over several scheduler iterations
        self.quantum = quantum
        # Time accumulated by the current head during this turn
        self.quantum_clock: float = 0
        self.queue_type = queue_type

    def __len__(self) -> int:
        return len(self.processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(list(self.processes))

    def __contains__(self, process: object) -> bool:
        return any(p is process for p in self.processes)

    def __repr__(self) -> str:
        return f"Queue({self.label}, quantum={self.quantum}, pids={self.pids()})"

    @property
    def label(self) -> str:
        if self.queue_type == QueueType.BLOCKING_QUEUE:
            return "BLOCKING"
        return f"CPU{self.priority_level}"

    def pids(self) -> List[str]:
        return [p.pid for p in self.processes]

    # -------- Holding sequence --------
    def enqueue(self, process: Process) -> None:
        process.queue = self
        self.processes.append(process)

    def dequeue(self) -> Optional[Process]:
        if not self.processes:
            return None
        # New head starts a fresh turn
        self.quantum_clock = 0
        return self.processes.pop(0)

    def peek(self) -> Optional[Process]:
        if not self.processes:
            return None
        return self.processes[0]

    def is_empty(self) -> bool:
        return len(self.processes) == 0

    def remove(self, process: Process) -> bool:
        # Match by identity; pids are labels, not positions
        for idx, item in enumerate(self.processes):
            if item is process:
                del self.processes[idx]
                if idx == 0:
                    self.quantum_clock = 0
                return True
        return False

    # -------- Work --------
    def do_cpu_work(self, time: float) -> None:
        validate_time(time)
        if self.queue_type != QueueType.CPU_QUEUE or time == 0:
            return
        current = self.peek()
        if current is None:
            return

        current.execute_process(time)
        self.manage_time_slice(current, time)

    def do_blocking_work(self, time: float) -> None:
        validate_time(time)
        if time == 0:
            return
        current = self.peek()
        if current is None:
            return

        current.execute_blocking_process(time)
        self.manage_time_slice(current, time)

    def manage_time_slice(self, current: Process, time: float) -> None:
        # Blocked, unblocked or out of CPU need: the process leaves this queue
        if current.state_changed or current.cpu_time_needed <= 0:
            self.quantum_clock = 0
            self.remove(current)

            if current.is_finished():
                logger.debug("%s: %s finished", self.label, current.pid)
                return

            if self.queue_type == QueueType.BLOCKING_QUEUE and current.blocking_time_needed <= 0:
                self.emit_interrupt(current, SchedulerInterrupt.PROCESS_READY)
            else:
                self.emit_interrupt(current, SchedulerInterrupt.LOWER_PRIORITY)
            return

        # Used up the whole quantum without finishing or blocking
        if self.quantum_clock + time >= self.quantum:
            self.quantum_clock = 0
            self.remove(current)
            self.emit_interrupt(current, SchedulerInterrupt.LOWER_PRIORITY)
            return

        self.quantum_clock += time

    def emit_interrupt(self, source: Process, interrupt: SchedulerInterrupt) -> None:
        if interrupt == SchedulerInterrupt.PROCESS_BLOCKED:
            self.remove(source)

        self.scheduler.handle_interrupt(self, source, interrupt)

import logging
import time
from typing import Callable, Dict, Iterator, List, Optional

from .constants import (
    BASE_QUANTUM,
    BLOCKING_QUANTUM,
    PRIORITY_LEVELS,
    QUANTUM_STEP,
    QueueType,
    SchedulerInterrupt,
    cpu_quantum,
)
from .errors import SchedulerError, UnknownQueueError, validate_time
from .models import Process
from .process_queue import Queue

logger = logging.getLogger(__name__)


def wall_clock() -> int:
    """Milliseconds from a monotonic clock."""
    return int(time.monotonic() * 1000)


class SimulatedClock:
    """Deterministic time source: each read returns the time, then advances by `step`."""

    def __init__(self, step: float = 1, start: float = 0):
        # A zero step would make every run() iteration a zero-time no-op
        if step <= 0:
            raise ValueError("clock step must be > 0")
        self.step = step
        self.now = start

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value

    def advance(self, amount: float) -> None:
        validate_time(amount)
        self.now += amount


class Scheduler:
    """
    Multi-level feedback queue scheduler.

    Holds one blocking queue and `priority_levels` CPU queues:
      - new and newly ready processes enter CPU queue 0 (highest priority)
      - a process that uses its whole quantum drops one level, down to the last queue
      - a process that needs blocking time moves to the blocking queue
      - only the highest-priority non-empty CPU queue runs on each iteration
    """

    def __init__(
        self,
        priority_levels: int = PRIORITY_LEVELS,
        base_quantum: float = BASE_QUANTUM,
        quantum_step: float = QUANTUM_STEP,
        blocking_quantum: float = BLOCKING_QUANTUM,
        clock: Optional[Callable[[], float]] = None,
    ):
        if priority_levels < 1:
            raise ValueError("priority_levels must be >= 1")
        if base_quantum <= 0 or blocking_quantum <= 0 or quantum_step < 0:
            raise ValueError("quanta must be positive")

        self.clock_source: Callable[[], float] = clock or wall_clock
        self.clock = self.clock_source()
        # Total simulated time handed out so far
        self.time: float = 0

        self.blocking_queue = Queue(self, blocking_quantum, 0, QueueType.BLOCKING_QUEUE)
        self.running_queues: List[Queue] = [
            Queue(self, cpu_quantum(i, base_quantum, quantum_step), i, QueueType.CPU_QUEUE)
            for i in range(priority_levels)
        ]

        # Transition log for inspecting queue moves
        self.event_log: List[str] = []
        self.event_log_limit: int = 120

        self._handlers: Dict[SchedulerInterrupt, Callable[[Queue, Process], Queue]] = {
            SchedulerInterrupt.PROCESS_BLOCKED: self._handle_blocked,
            SchedulerInterrupt.PROCESS_READY: self._handle_ready,
            SchedulerInterrupt.LOWER_PRIORITY: self._handle_lower_priority,
        }

    # -------- Introspection --------
    @property
    def cpu_queues(self) -> List[Queue]:
        return list(self.running_queues)

    def get_cpu_queue(self, priority_level: int) -> Queue:
        return self.running_queues[priority_level]

    def get_blocking_queue(self) -> Queue:
        return self.blocking_queue

    def queues(self) -> Iterator[Queue]:
        yield self.blocking_queue
        yield from self.running_queues

    def locate(self, process: Process) -> Optional[Queue]:
        # Queue contents are authoritative; process.queue is only a hint
        for queue in self.queues():
            if process in queue:
                return queue
        return None

    def find_process(self, pid: str) -> Optional[Process]:
        for queue in self.queues():
            for process in queue:
                if process.pid == pid:
                    return process
        return None

    def all_queues_empty(self) -> bool:
        return all(queue.is_empty() for queue in self.running_queues)

    def has_work(self) -> bool:
        return not (self.all_queues_empty() and self.blocking_queue.is_empty())

    def _log_event(self, msg: str):
        logger.debug(msg)
        self.event_log.append(msg)
        if len(self.event_log) > self.event_log_limit:
            self.event_log = self.event_log[-self.event_log_limit:]

    # -------- Simulation loop --------
    def tick(self, elapsed: float) -> Optional[Queue]:
        """Run one scheduler iteration for `elapsed` time units.

        Blocking work happens first, then CPU work on the highest-priority
        non-empty CPU queue. Returns the CPU queue that ran, if any.
        """
        validate_time(elapsed)
        if elapsed == 0:
            return None
        self.time += elapsed

        if not self.blocking_queue.is_empty():
            self.blocking_queue.do_blocking_work(elapsed)

        for queue in self.running_queues:
            if not queue.is_empty():
                queue.do_cpu_work(elapsed)
                return queue
        return None

    def run(self, max_iterations: Optional[int] = None) -> int:
        """Iterate until every queue is empty (or `max_iterations` is reached)."""
        iterations = 0
        while self.has_work():
            if max_iterations is not None and iterations >= max_iterations:
                break
            now = self.clock_source()
            elapsed = now - self.clock
            self.clock = now
            self.tick(elapsed)
            iterations += 1
        return iterations

    def add_new_process(self, process: Process) -> None:
        self.running_queues[0].enqueue(process)

    # -------- Interrupts --------
    def handle_interrupt(self, queue: Queue, process: Process, interrupt) -> Queue:
        """Move `process` out of `queue` according to `interrupt`; returns its new queue."""
        try:
            kind = SchedulerInterrupt(interrupt)
        except ValueError:
            raise SchedulerError(f"unknown interrupt {interrupt!r}") from None

        # Outstanding blocking work wins over demotion
        if kind == SchedulerInterrupt.LOWER_PRIORITY and process.blocking_time_needed > 0:
            kind = SchedulerInterrupt.PROCESS_BLOCKED

        destination = self._handlers[kind](queue, process)
        self._log_event(f"t={self.time}: {process.pid} {queue.label} -> {destination.label} ({kind.value})")
        return destination

    def _handle_blocked(self, queue: Queue, process: Process) -> Queue:
        self.blocking_queue.enqueue(process)
        return self.blocking_queue

    def _handle_ready(self, queue: Queue, process: Process) -> Queue:
        self.add_new_process(process)
        return self.running_queues[0]

    def _handle_lower_priority(self, queue: Queue, process: Process) -> Queue:
        if queue is self.blocking_queue:
            return self._handle_ready(queue, process)

        index = self._index_of(queue)
        # The last queue is the floor: cycle within it
        target = self.running_queues[min(index + 1, len(self.running_queues) - 1)]
        target.enqueue(process)
        return target

    def _index_of(self, queue: Queue) -> int:
        for idx, candidate in enumerate(self.running_queues):
            if candidate is queue:
                return idx
        raise UnknownQueueError(f"queue {queue!r} does not belong to this scheduler")

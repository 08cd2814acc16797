from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class Process:
    """A simulated workload: some CPU time, optionally preceded by blocking time.

    A process that still needs blocking time blocks as soon as it is dispatched
    on a CPU queue; once its blocking work completes it is ready for the CPU again.
    Equality is identity so two processes with the same numbers stay distinct
    inside a queue.
    """

    pid: str
    cpu_time_needed: float = 0
    blocking_time_needed: float = 0

    # Set only by execute_* when something other than plain CPU progress happened
    state_changed: bool = False

    # Owning queue back-reference, written by Queue.enqueue
    queue: Optional[Any] = field(default=None, repr=False)

    cpu_time_used: float = 0
    blocking_time_used: float = 0

    def execute_process(self, time: float) -> None:
        self.state_changed = False

        if self.blocking_time_needed > 0:
            # Needs I/O first: give the CPU back without consuming it
            self.state_changed = True
            return

        # May go negative when the slice overshoots the remaining need
        self.cpu_time_needed -= time
        self.cpu_time_used += time

    def execute_blocking_process(self, time: float) -> None:
        self.state_changed = False

        self.blocking_time_needed -= time
        self.blocking_time_used += time

        if self.blocking_time_needed <= 0:
            self.blocking_time_needed = 0
            self.state_changed = True

    def is_finished(self) -> bool:
        return self.cpu_time_needed <= 0 and self.blocking_time_needed <= 0

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "Process":
        cpu = item.get("cpu_time", item.get("cpu_time_needed", 0))
        blocking = item.get("blocking_time", item.get("blocking_time_needed", 0))
        return cls(
            pid=str(item["pid"]),
            cpu_time_needed=float(cpu) if isinstance(cpu, float) else int(cpu),
            blocking_time_needed=float(blocking) if isinstance(blocking, float) else int(blocking),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pid": self.pid,
            "cpu_time": self.cpu_time_needed,
            "blocking_time": self.blocking_time_needed,
        }

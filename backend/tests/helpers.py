from mlfq.engine import Process


class RecordingScheduler:
    """Stands in for Scheduler when a Queue is tested on its own."""

    def __init__(self):
        self.interrupts = []

    def handle_interrupt(self, queue, process, interrupt):
        self.interrupts.append((queue, process, interrupt))


class CpuFirstProcess(Process):
    """Runs its CPU need first and only then asks for blocking time."""

    def execute_process(self, time):
        self.state_changed = False
        self.cpu_time_needed -= time
        self.cpu_time_used += time

class SchedulerError(Exception):
    """Base class for scheduler contract violations."""


class InvalidTimeSliceError(SchedulerError, ValueError):
    """Elapsed time handed to the scheduler was negative or not a number."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"time slice must be a non-negative number, got {value!r}")


class UnknownQueueError(SchedulerError):
    """An interrupt named a queue the scheduler does not own."""


def validate_time(value):
    # bool is an int subclass but never a meaningful duration
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidTimeSliceError(value)
    if value != value or value < 0:
        raise InvalidTimeSliceError(value)
    return value

from enum import StrEnum


class StreamLifecycle(StrEnum):
    """
    Lifecycle of a single pausable stream.

    unstarted: no subscriber is attached, nothing has been pulled yet
    running:   the pump is pulling from the producer
    paused:    the gate is closed, the producer is not invoked
    ended:     the sentinel was delivered or the producer failed
    """
    unstarted = "unstarted"
    running = "running"
    paused = "paused"
    ended = "ended"

from typing import Protocol

from pausestream.core.models.pull import PullResult


class Producer(Protocol):
    """
    Defines the interface the pump uses to obtain events.

    Implementations must:
    - return exactly one classified event per call
    - keep their own position (closure state, iterator state)
    - let exceptions escape, the pump turns them into stream errors
    """

    def pull(self) -> PullResult:
        """Advance the producer by one step and classify the result."""

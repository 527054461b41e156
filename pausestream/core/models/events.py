from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class End:
    """
    End-of-stream sentinel.

    A producer returns (or yields) an End instance to signal that no more
    events will follow. All End instances compare equal, so the sentinel can
    be created freshly wherever it is needed.
    """


@dataclass(frozen=True)
class Error:
    """
    Marker that routes an exception to the error channel of a stream
    instead of delivering it as an ordinary value.
    """
    exception: BaseException
    """
    The exception observed by error subscribers.
    """


def is_end(value: Any) -> bool:
    return isinstance(value, End)


def is_error(value: Any) -> bool:
    return isinstance(value, Error)


Sink = Callable[[Any], None]
"""
Callable receiving every event of a stream: plain values as well as
the End and Error markers.
"""


Unsubscribe = Callable[[], None]
"""
Callable detaching a previously registered observer. Calling it more
than once has no effect.
"""

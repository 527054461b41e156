from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pausestream.core.models.events import End


class PullKind(StrEnum):
    next = "next"
    last = "last"
    end = "end"


@dataclass(frozen=True)
class PullResult:
    """
    Classification of a single pull from a producer.

    Both producer variants report through this type so the pump applies
    one rule to all of them:
    - next: forward the value and keep pumping
    - last: forward the value, then forward a synthetic End
    - end: the value is the sentinel itself, forward it once and stop
    """
    kind: PullKind
    value: Any = None

    @classmethod
    def of(cls, value: Any) -> "PullResult":
        return cls(PullKind.next, value)

    @classmethod
    def last(cls, value: Any) -> "PullResult":
        return cls(PullKind.last, value)

    @classmethod
    def end(cls, sentinel: End) -> "PullResult":
        return cls(PullKind.end, sentinel)

    @property
    def terminal(self) -> bool:
        return self.kind is not PullKind.next

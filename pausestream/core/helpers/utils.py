import logging
import reprlib

_repr = reprlib.Repr()
_repr.maxstring = 60
_repr.maxother = 60


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )


def short_repr(value: object) -> str:
    """Bounded repr used when events are written to debug logs."""
    return _repr.repr(value)

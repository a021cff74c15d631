"""Driver ID logging context for tracing planning operations across modules.

Every log record created while a driver ID is set carries it as
``record.driver_id``, so one driver's calendar mutations can be followed
through the tool layer, the engine, and the store. ``LOG_FORMAT`` shows
it in the output.

Usage:
    from vtc_planner.logging_context import configure_logging, set_driver_id

    configure_logging("INFO")
    set_driver_id("driver-42")
    logging.getLogger(__name__).info("Booking added")  # [driver-42] in the line
"""

import logging
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s [%(name)s] [%(driver_id)s] %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_driver_id: ContextVar[str] = ContextVar("driver_id", default="NO_DRIVER")


def set_driver_id(driver_id: str) -> None:
    """Set the driver ID for the current context."""
    _driver_id.set(driver_id)


def get_driver_id() -> str:
    """Retrieve the current driver ID."""
    return _driver_id.get()


def install_record_factory() -> None:
    """Wrap the log record factory so every record gets ``driver_id``.

    Safe to call more than once; the factory is only wrapped the first time.
    """
    current = logging.getLogRecordFactory()
    if getattr(current, "_adds_driver_id", False):
        return

    def factory(*args, **kwargs) -> logging.LogRecord:
        record = current(*args, **kwargs)
        record.driver_id = _driver_id.get()  # type: ignore[attr-defined]
        return record

    factory._adds_driver_id = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(factory)


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging with the driver-aware format."""
    install_record_factory()
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )

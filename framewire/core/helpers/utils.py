import asyncio
import contextlib
import logging
import sys
import signal
import threading
from types import FrameType
from typing import Generator

SHUTDOWN_SIGNALS = (
    signal.SIGINT,
    signal.SIGTERM,
)

if sys.platform == "win32":
    SHUTDOWN_SIGNALS += (signal.SIGBREAK,)


@contextlib.contextmanager
def setup_signal_handler() -> Generator[asyncio.Event, None, None]:
    stop_event = asyncio.Event()

    if threading.current_thread() is not threading.main_thread():
        yield stop_event
        return

    captured_signals: list[signal.Signals | int] = []

    def handle(sig: int, frame: FrameType | None) -> None:
        captured_signals.append(sig)
        stop_event.set()

    # Install temporary handlers
    original_handlers = {
        sig: signal.signal(sig, handle)
        for sig in SHUTDOWN_SIGNALS
    }

    try:
        yield stop_event
    finally:
        # Restore original handlers
        for sig, old in original_handlers.items():
            signal.signal(sig, old)

        # Now replay signals with the real handler
        for sig in reversed(captured_signals):
            if original_handlers[sig] is not handle:
                signal.raise_signal(sig)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )

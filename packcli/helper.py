"""Small helpers: title casing and interrupt-aware cancellation."""

from __future__ import annotations

import re
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

_WORD = re.compile(r"[^\W_]+(?:['\u2019][^\W_]+)*")


def title(text: str) -> str:
    """Return ``text`` in title case: each word capitalised, the rest lower case."""
    return _WORD.sub(lambda m: m[0][:1].upper() + m[0][1:].lower(), text)


@contextmanager
def with_interrupt(event: Optional[threading.Event] = None) -> Iterator[threading.Event]:
    """Yield an event that is set on SIGINT or when ``event`` is set.

    While the context is active, SIGINT sets the yielded event instead of
    raising KeyboardInterrupt. On exit the previous handler is restored and
    the yielded event is set.
    """
    cancelled = threading.Event()

    def _on_interrupt(signum, frame):
        cancelled.set()

    previous = signal.signal(signal.SIGINT, _on_interrupt)

    watcher = None
    if event is not None:

        def _watch() -> None:
            while not cancelled.is_set():
                if event.wait(0.05):
                    cancelled.set()
                    return

        watcher = threading.Thread(target=_watch, daemon=True)
        watcher.start()

    try:
        yield cancelled
    finally:
        signal.signal(signal.SIGINT, previous)
        cancelled.set()
        if watcher is not None:
            watcher.join()
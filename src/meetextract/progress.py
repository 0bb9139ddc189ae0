"""Progress indicator for the blocking model call."""

from __future__ import annotations

import itertools
import sys
import threading
import time

_BRAILLE = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
_INTERVAL = 0.1


class Spinner:
    """Indeterminate spinner shown on stderr while waiting on the model."""

    def __init__(self, label: str) -> None:
        self._label = label
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._stderr = sys.stderr

    def __enter__(self) -> Spinner:
        self._stderr = sys.stderr
        self._stop.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()
        return self

    def __exit__(self, exc_type, *_exc) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join()
        if exc_type is None:
            self._stderr.write(f"\r  ✔ {self._label} done.\033[K\n")
        else:
            self._stderr.write(f"\r  ✘ {self._label} failed.\033[K\n")
        self._stderr.flush()

    def _spin(self) -> None:
        for frame in itertools.cycle(_BRAILLE):
            if self._stop.is_set():
                break
            self._stderr.write(f"\r  {frame} {self._label}\033[K")
            self._stderr.flush()
            time.sleep(_INTERVAL)

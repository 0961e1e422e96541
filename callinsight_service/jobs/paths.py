from __future__ import annotations

import threading
import time
from pathlib import Path

from ..shared.fs__shared_util import safe_path_component


class StoragePathFactory:
    """Builds ``<prefix>/<millis>-<filename>`` destinations.

    The millisecond stamp strictly increases across calls, so two files with
    the same name submitted in the same millisecond still get distinct paths.
    """

    def __init__(self, prefix: str, *, clock=None):
        self.prefix = prefix.strip("/")
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0
        self._lock = threading.Lock()

    def _next_stamp(self) -> int:
        with self._lock:
            stamp = max(int(self._clock()), self._last + 1)
            self._last = stamp
            return stamp

    def destination(self, filename: str) -> str:
        name = safe_path_component(filename, max_len=120)
        path = f"{self._next_stamp()}-{name}"
        return f"{self.prefix}/{path}" if self.prefix else path


class CaseStudyPaths:
    def __init__(self, root: Path, artifact_id: str):
        self.root = Path(root)
        self.artifact_id = artifact_id
        self.artifact_dir = self.root / artifact_id

    def document(self, filename: str) -> Path:
        return self.artifact_dir / filename

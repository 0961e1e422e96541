from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path


class JobLogger:
    def __init__(self, log_path: Path):
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, message: str) -> None:
        ts = datetime.now(timezone.utc).isoformat()
        line = f"[{ts}] {message}"
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")


class ArtifactLogs:
    """Hands out one append-only log file per artifact."""

    def __init__(self, logs_dir: Path):
        self.logs_dir = Path(logs_dir)

    def path_for(self, artifact_id: str) -> Path:
        return self.logs_dir / "artifacts" / f"{artifact_id}.log"

    def for_artifact(self, artifact_id: str) -> JobLogger:
        return JobLogger(self.path_for(artifact_id))

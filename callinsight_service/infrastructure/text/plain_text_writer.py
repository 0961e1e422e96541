from __future__ import annotations

from pathlib import Path

from ...domain.ports.case_study_writer_port import CaseStudyWriterPort


class PlainTextCaseStudyWriter(CaseStudyWriterPort):
    extension = "txt"
    media_type = "text/plain"

    def write(self, path: Path, *, title: str, body: str) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

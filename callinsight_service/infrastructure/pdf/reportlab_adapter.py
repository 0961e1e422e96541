from __future__ import annotations

from pathlib import Path

from ...domain.ports.case_study_writer_port import CaseStudyWriterPort
from ...shared.fs__shared_util import remove_diacritics_to_ascii


def _wrap_text(c, text: str, max_width: float) -> list[str]:
    words = (text or "").split()
    if not words:
        return [""]

    lines: list[str] = []
    cur: list[str] = []

    for w in words:
        test = (" ".join(cur + [w])).strip()
        if c.stringWidth(test) <= max_width or not cur:
            cur.append(w)
        else:
            lines.append(" ".join(cur))
            cur = [w]

    if cur:
        lines.append(" ".join(cur))
    return lines


def _iter_body_lines(body: str):
    last_was_blank = False
    for raw in (body or "").splitlines():
        s = raw.rstrip()
        if not s.strip():
            if last_was_blank:
                continue
            last_was_blank = True
            yield ""
        else:
            last_was_blank = False
            yield s


def _is_heading(line: str) -> bool:
    s = line.strip()
    return s.startswith("#") or (s.startswith("**") and s.endswith("**"))


class ReportLabCaseStudyWriter(CaseStudyWriterPort):
    extension = "pdf"
    media_type = "application/pdf"

    def write(self, path: Path, *, title: str, body: str) -> Path:
        from reportlab.lib.pagesizes import LETTER
        from reportlab.pdfgen import canvas

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        c = canvas.Canvas(str(path), pagesize=LETTER)
        page_w, page_h = LETTER

        margin_x = 50
        max_width = page_w - 2 * margin_x

        body_font = "Helvetica"
        body_size = 10
        leading = 14

        top_y = page_h - 60
        bottom_y = 50

        y = page_h - 50
        c.setFont("Helvetica-Bold", 14)
        for line in _wrap_text(c, remove_diacritics_to_ascii(title), max_width=max_width):
            c.drawString(margin_x, y, line)
            y -= 18
        y -= 4
        c.setLineWidth(1)
        c.line(margin_x, y, page_w - margin_x, y)
        y -= 18

        def next_page():
            nonlocal y
            c.showPage()
            y = top_y

        for raw in _iter_body_lines(body):
            if raw == "":
                y -= 8
                if y < bottom_y:
                    next_page()
                continue

            heading = _is_heading(raw)
            # Base-14 fonts only cover latin-1.
            text = raw.strip().strip("#* ") if heading else raw
            text = text.encode("latin-1", errors="replace").decode("latin-1")
            font = ("Helvetica-Bold", 11) if heading else (body_font, body_size)

            c.setFont(*font)
            for wl in _wrap_text(c, text, max_width=max_width):
                if y < bottom_y:
                    next_page()
                    c.setFont(*font)
                c.drawString(margin_x, y, wl)
                y -= leading

        c.save()
        return path

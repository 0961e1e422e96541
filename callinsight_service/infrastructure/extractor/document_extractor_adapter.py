from __future__ import annotations

import asyncio
import io

from ...domain.entities.artifact import RawFile
from ...domain.ports.extractor_port import TextExtractorPort
from ...shared.fs__shared_util import decode_text

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def extract_pdf(data: bytes) -> str:
    import fitz  # PyMuPDF

    pages: list[str] = []
    with fitz.open(stream=data, filetype="pdf") as doc:
        for page in doc:
            page_text = page.get_text("text")
            if page_text.strip():
                pages.append(page_text.strip())
    return "\n\n".join(pages)


def extract_docx(data: bytes) -> str:
    from docx import Document

    document = Document(io.BytesIO(data))
    return "\n".join(p.text for p in document.paragraphs if p.text.strip())


class DocumentTextExtractorAdapter(TextExtractorPort):
    """PDF through PyMuPDF, DOCX through python-docx, everything else decoded as text."""

    def _extract_sync(self, raw_file: RawFile) -> str:
        media_type = (raw_file.content_type or "").lower()
        ext = raw_file.extension

        if ext == "pdf" or media_type == "application/pdf":
            text = extract_pdf(raw_file.data)
        elif ext == "docx" or media_type == DOCX_MEDIA_TYPE:
            text = extract_docx(raw_file.data)
        else:
            text = decode_text(raw_file.data)

        text = text.strip()
        if not text:
            raise ValueError(f"no text could be extracted from {raw_file.name}")
        return text

    async def extract_text(self, raw_file: RawFile) -> str:
        return await asyncio.to_thread(self._extract_sync, raw_file)

from __future__ import annotations

from typing import Iterable

from ..domain.entities.artifact import RawFile, Track

AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "m4a", "aac", "ogg", "flac"})
TRANSCRIPT_EXTENSIONS = frozenset({"doc", "docx", "txt", "pdf", "rtf", "gdoc"})
TRANSCRIPT_MEDIA_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


def is_audio(raw: RawFile) -> bool:
    media_type = (raw.content_type or "").lower()
    return media_type.startswith("audio/") or raw.extension in AUDIO_EXTENSIONS


def is_transcript(raw: RawFile) -> bool:
    media_type = (raw.content_type or "").lower()
    if "document" in media_type or "text" in media_type:
        return True
    if media_type in TRANSCRIPT_MEDIA_TYPES:
        return True
    return raw.extension in TRANSCRIPT_EXTENSIONS


def classify(candidates: Iterable[RawFile], track: Track) -> list[RawFile]:
    # Rejected files are dropped without an error.
    if track == "audio":
        return [raw for raw in candidates if is_audio(raw)]
    if track == "transcript":
        return [raw for raw in candidates if is_transcript(raw)]
    raise ValueError(f"unknown track: {track}")


def accept_types(track: Track) -> str:
    if track == "audio":
        return "audio/*," + ",".join(f".{ext}" for ext in sorted(AUDIO_EXTENSIONS))
    exts = ",".join(f".{ext}" for ext in sorted(TRANSCRIPT_EXTENSIONS))
    return exts + "," + ",".join(sorted(TRANSCRIPT_MEDIA_TYPES))

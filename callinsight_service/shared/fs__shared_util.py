from __future__ import annotations

import re
import unicodedata
from pathlib import Path

_WIN_BAD = re.compile(r'[<>:"/\\|?*\x00-\x1F]')
_WIN_TRAILING = re.compile(r"[ .]+$")


def ensure_directory(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def remove_diacritics_to_ascii(s: str) -> str:
    if not s:
        return ""
    s = unicodedata.normalize("NFKD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.replace("\r", " ").replace("\n", " ").replace("\t", " ")
    s = "".join(ch for ch in s if 32 <= ord(ch) <= 126)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def safe_path_component(name: str, *, max_len: int = 80) -> str:
    name = remove_diacritics_to_ascii(name or "")
    name = _WIN_BAD.sub("_", name)
    name = _WIN_TRAILING.sub("", name).strip()

    if not name:
        name = "item"

    if len(name) > max_len:
        name = name[:max_len].rstrip("_- .")
        if not name:
            name = "item"

    return name


def decode_text(data: bytes) -> str:
    for encoding in ("utf-8-sig", "utf-8", "cp1252", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="ignore")

from .fs__shared_util import (
    decode_text,
    ensure_directory,
    remove_diacritics_to_ascii,
    safe_path_component,
)

__all__ = [
    "decode_text",
    "ensure_directory",
    "remove_diacritics_to_ascii",
    "safe_path_component",
]

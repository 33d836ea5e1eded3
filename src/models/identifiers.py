"""Helpers for the 24-hex identifier format used by catalog records."""

import re
import secrets
import time

OBJECT_ID_LENGTH = 24
_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def new_object_id() -> str:
    """Return a new identifier: epoch seconds (8 hex) + 16 random hex digits."""

    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_object_id(value: str) -> bool:
    return _OBJECT_ID_RE.fullmatch(value) is not None

"""Input normalisation for entity rows and settings blobs.

Everything written to the entity table passes through these helpers, and
:func:`encode_settings` / :func:`decode_settings` are the only places the
settings mapping crosses the text-blob storage boundary.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any
from typing import Dict
from typing import List
from typing import Mapping
from typing import Union

from boostkit.models.enums import EntityStatus

logger = logging.getLogger(__name__)

# Recursive value stored inside a settings mapping
SettingValue = Union[str, int, float, bool, List["SettingValue"], Dict[str, "SettingValue"]]
Settings = Dict[str, SettingValue]

_KEY_STRIP_RE = re.compile(r"[^a-z0-9_\-]")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE_RE = re.compile(r"\s+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def sanitize_key(key: Any) -> str:
    """Lower-case *key* and keep only ``[a-z0-9_-]``."""
    return _KEY_STRIP_RE.sub("", str(key).lower())


def sanitize_text_field(value: Any) -> str:
    """Reduce *value* to a single line of plain text.

    Tags are removed (script/style together with their body), percent-encoded
    octets dropped and runs of whitespace collapsed.
    """
    if value is None:
        return ""
    text = str(value)
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _OCTET_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def _sanitize_value(value: Any) -> SettingValue:
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    if isinstance(value, Mapping):
        return sanitize_settings(value)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item) for item in value]
    return sanitize_text_field(value)


def sanitize_settings(settings: Mapping[Any, Any]) -> Settings:
    """Recursively sanitise a settings mapping (keys and values)."""
    return {sanitize_key(key): _sanitize_value(value) for key, value in settings.items()}


def sanitize_status(status: Any) -> str:
    """Return *status* when it is an allowed entity status, else ``active``."""
    for member in EntityStatus:
        if status == member.value:
            return member.value
    return EntityStatus.ACTIVE.value


def _within_column_range(value: int, default: int) -> int:
    return value if INT64_MIN <= value <= INT64_MAX else default


def coerce_int(value: Any, default: int = 0) -> int:
    """Best-effort integer conversion; *default* when *value* is not numeric.

    Values outside the signed 64-bit range of an integer column also fall
    back to *default*.
    """
    if isinstance(value, int):
        return _within_column_range(int(value), default)
    if isinstance(value, str):
        value = value.strip()
        try:
            return _within_column_range(int(value), default)
        except ValueError:
            pass
    if isinstance(value, (float, str)):
        try:
            return _within_column_range(int(float(value)), default)
        except (ValueError, OverflowError):
            return default
    return default


# ---------------------------------------------------------------------------
# Storage boundary
# ---------------------------------------------------------------------------


def encode_settings(settings: Mapping[str, Any]) -> str:
    return json.dumps(settings, ensure_ascii=False)


def decode_settings(raw: Any) -> Settings:
    """Decode a stored blob; anything but a JSON object decodes to ``{}``."""
    if not raw:
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Discarding undecodable settings blob")
        return {}
    return value if isinstance(value, dict) else {}


__all__ = [
    "SettingValue",
    "Settings",
    "sanitize_key",
    "sanitize_text_field",
    "sanitize_settings",
    "sanitize_status",
    "coerce_int",
    "encode_settings",
    "decode_settings",
]

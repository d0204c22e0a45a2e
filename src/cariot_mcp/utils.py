"""Small helpers shared by the API and tool layers."""

import re
from typing import Any

DEVICE_UID_PATTERN = re.compile(r"^\w+-\w+$", re.ASCII)


def drop_none(params: dict[str, Any]) -> dict[str, Any]:
    """Remove entries whose value is None (httpx would send them as empty)."""
    return {key: value for key, value in params.items() if value is not None}


def split_device_uids(device_uids: str) -> list[str]:
    """Split a comma-separated device UID list, dropping blanks.

    Raises:
        ValueError: If the list is empty or an entry does not look like a
            device UID (``<word>-<word>``).
    """
    uids = [uid.strip() for uid in device_uids.split(",")]
    uids = [uid for uid in uids if uid]
    if not uids:
        raise ValueError("At least one device UID is required")

    invalid = [uid for uid in uids if not DEVICE_UID_PATTERN.fullmatch(uid)]
    if invalid:
        raise ValueError(
            f"Each device UID must match ^\\w+-\\w+$ (invalid: {', '.join(invalid)})"
        )
    return uids


def en_ja(en: str, ja: str) -> str:
    """Join an English and a Japanese text the way tool descriptions show them."""
    return f"{en} / {ja}"

# src/utils/id_helpers.py
"""
ID Format Helpers

The database stores every id as 32 lowercase hex characters
(d4bc569e090acbbc17354bd3657adb4d). Clients may send the hyphenated
36-character UUID form; both are accepted and normalized here.
"""

import logging
import re
import uuid
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_UUID_V4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_HEX32_RE = re.compile(r"^[0-9a-fA-F]{32}$")

EXPECTED_FORMAT = "d4bc569e090acbbc17354bd3657adb4d"


def generate_id() -> str:
    """New random id in storage format"""
    return uuid.uuid4().hex


def normalize_id(value: Any) -> Optional[str]:
    """
    Normalize an id to storage format

    Args:
        value: 32-char or hyphenated 36-char id

    Returns:
        32-character lowercase hex id, or None if the value cannot be one
    """
    if not value or not isinstance(value, str):
        return None

    clean = value.strip().replace("-", "")

    if len(clean) != 32:
        logger.warning(
            f"Invalid ID length: {len(clean)} (expected 32). ID: {value!r}"
        )
        return None

    if not _HEX32_RE.match(clean):
        logger.warning(f"Invalid ID format (not hex): {value!r}")
        return None

    return clean.lower()


def require_valid_id(value: Any, field_name: str = "ID") -> str:
    """
    Normalize an id or raise ValidationError naming the field

    Raises:
        ValidationError: value is empty or not a valid id
    """
    from src.services.exceptions import ValidationError

    if not value:
        raise ValidationError(f"{field_name} required", field=field_name)

    normalized = normalize_id(value)
    if normalized is None:
        raise ValidationError(
            f"{field_name} is invalid. Expected 32-character format.",
            field=field_name,
            details={
                "received": value,
                "length": len(value) if isinstance(value, str) else 0,
                "expected_format": EXPECTED_FORMAT,
            },
        )
    return normalized


def is_valid_uuid(value: Any) -> bool:
    """True for a hyphenated UUID v4"""
    return isinstance(value, str) and bool(_UUID_V4_RE.match(value))


def looks_like_uuid(value: Any) -> bool:
    """Looser check: 32 hex digits once hyphens are removed"""
    if not value or not isinstance(value, str):
        return False
    return bool(_HEX32_RE.match(value.replace("-", "")))


def add_hyphens(value: Any) -> Optional[str]:
    """550e8400e29b41d4a716446655440000 -> 550e8400-e29b-41d4-a716-446655440000"""
    if not value or not isinstance(value, str):
        return None

    clean = value.replace("-", "")
    if not _HEX32_RE.match(clean):
        logger.warning(f"Invalid UUID format: {value!r}")
        return None

    return f"{clean[:8]}-{clean[8:12]}-{clean[12:16]}-{clean[16:20]}-{clean[20:]}"


def remove_hyphens(value: Any) -> Optional[str]:
    if not value or not isinstance(value, str):
        return None
    return value.replace("-", "")


def normalize_uuid(value: Any) -> Optional[str]:
    """Normalize to the hyphenated 36-character form used by clients"""
    if is_valid_uuid(value):
        return value
    if looks_like_uuid(value):
        return add_hyphens(value)
    return None


def get_id_info(value: Any) -> Dict[str, Any]:
    """Describe an id for debugging format problems"""
    if not value or not isinstance(value, str):
        return {
            "value": None,
            "length": 0,
            "has_hyphens": False,
            "is_valid": False,
            "expected_format": EXPECTED_FORMAT,
        }

    return {
        "value": value,
        "length": len(value),
        "has_hyphens": "-" in value,
        "is_valid": normalize_id(value) is not None,
        "expected_format": EXPECTED_FORMAT,
    }

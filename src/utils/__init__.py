"""
Shared utilities
"""

from .id_helpers import (
    generate_id,
    normalize_id,
    require_valid_id,
    is_valid_uuid,
    looks_like_uuid,
    add_hyphens,
    remove_hyphens,
    normalize_uuid,
    get_id_info,
)

__all__ = [
    "generate_id",
    "normalize_id",
    "require_valid_id",
    "is_valid_uuid",
    "looks_like_uuid",
    "add_hyphens",
    "remove_hyphens",
    "normalize_uuid",
    "get_id_info",
]

# Utilities package

from .helpers import (
    generate_scan_id,
    sanitize_brand_name,
    truncate_text,
    title_case,
    dedupe_names,
    round_half_up,
    percent
)

__all__ = [
    "generate_scan_id",
    "sanitize_brand_name",
    "truncate_text",
    "title_case",
    "dedupe_names",
    "round_half_up",
    "percent"
]

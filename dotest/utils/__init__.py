"""Utility modules."""
from dotest.utils.question_ids import (
    derive_set_key,
    derive_set_number,
    matches_set,
    set_key_for,
)
from dotest.utils.page_refs import extract_page_references, page_numbers
from dotest.utils.time_utils import isoformat, utc_now
from dotest.utils.validation import split_id_list, validate_id

__all__ = [
    "derive_set_key",
    "derive_set_number",
    "matches_set",
    "set_key_for",
    "extract_page_references",
    "page_numbers",
    "isoformat",
    "utc_now",
    "split_id_list",
    "validate_id",
]

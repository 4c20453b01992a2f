"""Helpers for question ids shaped like E01-C00-01-002."""


def _id_parts(question_id: str | None) -> list[str]:
    if not question_id or "-" not in question_id:
        return []
    return question_id.strip().split("-")


def derive_set_number(question_id: str | None) -> str | None:
    """Third dash-separated part of a question id ("01" for E01-C00-01-002)."""
    parts = _id_parts(question_id)
    if len(parts) < 3 or not parts[2]:
        return None
    return parts[2]


def derive_set_key(question_id: str | None) -> str | None:
    """Set prefix of a question id ("E01-C00-01" for E01-C00-01-002)."""
    parts = _id_parts(question_id)
    if len(parts) < 3 or not parts[2]:
        return None
    return "-".join(parts[:3])


def set_key_for(question_id: str, stored_set_id: str | None) -> str | None:
    """Stored set id when present, otherwise the one derived from the id."""
    if stored_set_id and stored_set_id.strip():
        return stored_set_id.strip()
    return derive_set_key(question_id)


def matches_set(question_id: str, stored_set_id: str | None, set_id: str) -> bool:
    """True if `set_id` names the set this question belongs to.

    Accepts the stored set id, the derived set key or the bare set number.
    """
    wanted = set_id.strip()
    if not wanted:
        return False
    candidates = {
        (stored_set_id or "").strip(),
        derive_set_key(question_id),
        derive_set_number(question_id),
    }
    return wanted in candidates

"""Validation utilities."""
from fastapi import HTTPException


def validate_id(name: str, value: str | None) -> str:
    """Validate a required content identifier."""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if "/" in cleaned or "\\" in cleaned or len(cleaned) > 64:
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned


def split_id_list(name: str, raw: str | None) -> list[str]:
    """Split a comma-separated id list, dropping blanks."""
    if raw is None:
        return []
    return [validate_id(name, part) for part in raw.split(",") if part.strip()]

"""Page references embedded in explanations ("P12", "P16-P18")."""
import re

PAGE_REF_PATTERN = re.compile(r"P\d+(?:-P\d+)?")
PAGE_NUMBER_PATTERN = re.compile(r"\d+")


def extract_page_references(text: str | None) -> tuple[str, ...]:
    """Unique page references in first-seen order."""
    if not text:
        return ()
    return tuple(dict.fromkeys(PAGE_REF_PATTERN.findall(text)))


def page_numbers(page_ref: str | None) -> list[str]:
    """Page numbers mentioned in a reference, e.g. ["16", "18"] for "P16-P18"."""
    if not page_ref:
        return []
    return PAGE_NUMBER_PATTERN.findall(page_ref)

import re

from plate_lookup.scraper.labels import is_ignored_label, normalize_field

CURRENCY_PREFIX = "r$"
# Whole-value match with at least one separator, so plain counts like "5" or "2020" pass.
THOUSANDS_DECIMAL_RE = re.compile(r"^\d{1,3}(?:(?:\.\d{3})+(?:,\d{2})?|,\d{2})$")


def looks_like_currency(candidate: str | None) -> bool:
    if not candidate:
        return False
    text = candidate.strip().lower()
    if text.startswith(CURRENCY_PREFIX):
        return True
    return bool(THOUSANDS_DECIMAL_RE.match(text))


def is_acceptable_value(candidate: str | None) -> bool:
    if candidate is None or not candidate.strip():
        return False
    if normalize_field(candidate) is not None:
        return False
    if looks_like_currency(candidate):
        return False
    return not is_ignored_label(candidate)

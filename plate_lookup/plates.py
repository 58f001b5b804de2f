import re

SEPARATORS_RE = re.compile(r"[-\s]")
# Legacy ABC1234 and Mercosul ABC1D23; the fifth character may be a letter or digit.
PLATE_RE = re.compile(r"[A-Z]{3}[0-9][A-Z0-9][0-9]{2}", re.ASCII)


def clean_plate(plate: str) -> str:
    return SEPARATORS_RE.sub("", plate).upper()


def is_valid_plate_format(text: str) -> bool:
    stripped = SEPARATORS_RE.sub("", text)
    # str.upper() folds some non-ASCII letters (e.g. "ı" -> "I") into the plate alphabet.
    if not stripped.isascii():
        return False
    return PLATE_RE.fullmatch(stripped.upper()) is not None

import logging
import re

from bs4 import BeautifulSoup, Tag

from plate_lookup.models import CANONICAL_FIELDS, VehicleRecord
from plate_lookup.scraper.classifier import is_acceptable_value, looks_like_currency
from plate_lookup.scraper.labels import is_ignored_label, normalize_field


logger = logging.getLogger(__name__)

SPACE_RE = re.compile(r"\s+")
CELL_TAGS = ("td", "th")
# Label/value pairs for every canonical field laid out in a single table.
POSITIONAL_MIN_CELLS = len(CANONICAL_FIELDS) * 2


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    text = SPACE_RE.sub(" ", value.replace("\xa0", " ")).strip()
    return text or None


def _node_text(node: Tag | None) -> str | None:
    if node is None:
        return None
    return _clean_text(node.get_text(" ", strip=True))


def _cell_texts(root: Tag) -> list[str | None]:
    return [_node_text(cell) for cell in root.find_all(CELL_TAGS)]


def _scan_label_pairs(cells: list[str | None]) -> dict[str, str]:
    found: dict[str, str] = {}
    idx = 0
    while idx < len(cells) - 1:
        label = cells[idx]
        if is_ignored_label(label):
            # Valuation tables come after the vehicle attributes; nothing past this point is read.
            break

        field_name = normalize_field(label)
        value = cells[idx + 1]
        if field_name is None or not is_acceptable_value(value):
            idx += 1
            continue

        if field_name not in found:
            found[field_name] = value.strip()
        idx += 2

    return found


def _read_positional_table(cells: list[str | None]) -> dict[str, str] | None:
    if len(cells) < POSITIONAL_MIN_CELLS:
        return None

    values = [cells[idx] for idx in range(1, POSITIONAL_MIN_CELLS, 2)]
    brand = values[0]
    if not brand or looks_like_currency(brand):
        return None
    return {name: value for name, value in zip(CANONICAL_FIELDS, values) if value}


def extract_by_labels(soup: BeautifulSoup) -> dict[str, str]:
    return _scan_label_pairs(_cell_texts(soup))


def extract_by_position(soup: BeautifulSoup) -> dict[str, str] | None:
    for idx, table in enumerate(soup.find_all("table")):
        values = _read_positional_table(_cell_texts(table))
        if values is not None:
            logger.debug("Positional layout matched table #%s", idx)
            return values
    return None


def extract_vehicle_html(html: str) -> VehicleRecord | None:
    """Extract a vehicle from a lookup page.

    Label/value cell pairs are scanned first. When they give no brand, the
    first table laid out as fourteen label/value rows is read by position.
    Returns ``None`` when neither approach finds a brand.
    """
    soup = BeautifulSoup(html, "html.parser")

    values = extract_by_labels(soup)
    if "brand" in values:
        return VehicleRecord.from_values(values)

    positional = extract_by_position(soup)
    if positional is not None:
        return VehicleRecord.from_values(positional)

    logger.debug("No vehicle table found (label matches: %s)", sorted(values))
    return None

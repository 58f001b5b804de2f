from dataclasses import dataclass, fields
from typing import Any, Mapping


# Positional order used by the tabular layout of the lookup sites.
CANONICAL_FIELDS = (
    "brand",
    "model",
    "imported",
    "year",
    "model_year",
    "color",
    "displacement",
    "power",
    "fuel",
    "chassis",
    "engine",
    "seats",
    "state",
    "municipality",
)


def clean_value(value: Any) -> str | None:
    if value is None:
        return None
    text = " ".join(str(value).replace("\xa0", " ").split())
    return text or None


@dataclass
class VehicleRecord:
    """Vehicle data resolved from a plate.

    ``None`` means the source did not provide the field; empty strings are
    never stored.
    """

    brand: str | None = None
    model: str | None = None
    imported: str | None = None
    year: str | None = None
    model_year: str | None = None
    color: str | None = None
    displacement: str | None = None
    power: str | None = None
    fuel: str | None = None
    chassis: str | None = None
    engine: str | None = None
    seats: str | None = None
    state: str | None = None
    municipality: str | None = None

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "VehicleRecord":
        known = {item.name for item in fields(cls)}
        return cls(**{name: clean_value(value) for name, value in values.items() if name in known})

    @property
    def is_valid(self) -> bool:
        return self.brand is not None

    def present_fields(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in CANONICAL_FIELDS if getattr(self, name) is not None}

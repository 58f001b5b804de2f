import pytest

from plate_lookup.plates import clean_plate, is_valid_plate_format


@pytest.mark.parametrize("plate", ["ABC1234", "abc-1234", "ABC 1234", "ABC1D23", "abc1d23", "PWX-4B21", " abc1234 "])
def test_is_valid_plate_format_accepts_legacy_and_mercosul(plate: str) -> None:
    assert is_valid_plate_format(plate)


@pytest.mark.parametrize(
    "plate",
    ["ABC12D3", "AB123", "", "ABCD123", "1234ABC", "ABC12345", "ABC-12-D", "İBC1234", "ıbc1234", "\u212aBC1234"],
)
def test_is_valid_plate_format_rejects_other_shapes(plate: str) -> None:
    assert not is_valid_plate_format(plate)


def test_clean_plate_strips_separators_and_uppercases() -> None:
    assert clean_plate("abc-1d23") == "ABC1D23"
    assert clean_plate(" pwx 4b21 ") == "PWX4B21"

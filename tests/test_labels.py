import pytest

from plate_lookup.scraper.classifier import is_acceptable_value, looks_like_currency
from plate_lookup.scraper.labels import LABEL_FIELD_MAP, is_ignored_label, normalize_field, normalize_label


def test_normalize_label_lowercases_strips_colons_and_collapses_spaces() -> None:
    assert normalize_label("  Ano   Modelo: ") == "ano modelo"
    assert normalize_label("MUNICÍPIO:") == "município"
    assert normalize_label(None) == ""


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Marca:", "brand"),
        ("Modelo", "model"),
        ("Ano Modelo:", "model_year"),
        ("Ano de Fabricação", "year"),
        ("Potencia", "power"),
        ("Potência:", "power"),
        ("Municipio", "municipality"),
        ("Município:", "municipality"),
        ("UF", "state"),
        ("Passageiros:", "seats"),
    ],
)
def test_normalize_field_maps_synonyms(label: str, expected: str) -> None:
    assert normalize_field(label) == expected


def test_normalize_field_is_exact_match_only() -> None:
    assert normalize_field("Marca do carro") is None
    assert normalize_field("Marc") is None
    assert normalize_field("Quilometragem") is None
    assert normalize_field("") is None


def test_label_map_targets_only_canonical_fields() -> None:
    from plate_lookup.models import CANONICAL_FIELDS

    assert set(LABEL_FIELD_MAP.values()) == set(CANONICAL_FIELDS)
    assert all(label == normalize_label(label) for label in LABEL_FIELD_MAP)


def test_is_ignored_label_matches_substrings() -> None:
    assert is_ignored_label("Valor FIPE")
    assert is_ignored_label("Código Fipe:")
    assert is_ignored_label("IPVA 2024")
    assert is_ignored_label("Seguro estimado")
    assert not is_ignored_label("Marca")


@pytest.mark.parametrize("value", ["R$ 45.000,00", "45.000,00", "r$50.000", "1.234.567", "99,90"])
def test_currency_shaped_values_are_rejected(value: str) -> None:
    assert looks_like_currency(value)
    assert not is_acceptable_value(value)


@pytest.mark.parametrize("value", ["RENAULT", "2020", "5", "999", "82cv", "Alcool / Gasolina", "1.6"])
def test_plain_values_are_accepted(value: str) -> None:
    assert is_acceptable_value(value)


@pytest.mark.parametrize("value", ["", "   ", None, "Modelo:", "Ano Modelo", "Tabela FIPE", "Valor médio"])
def test_empty_labels_and_valuation_text_are_rejected(value: str | None) -> None:
    assert not is_acceptable_value(value)

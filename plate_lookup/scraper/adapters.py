import logging
from typing import Any, Mapping

from plate_lookup.models import VehicleRecord, clean_value


logger = logging.getLogger(__name__)

# Keys are tried in order and case-sensitively; the first non-empty value wins.
GATEWAY_KEYS: dict[str, tuple[str, ...]] = {
    "brand": ("MARCA", "marca"),
    "model": ("MODELO", "modelo"),
    "imported": ("IMPORTADO", "importado", "procedencia"),
    "year": ("ANO", "ano", "anoFabricacao"),
    "model_year": ("ANO_MODELO", "anoModelo", "ano_modelo"),
    "color": ("COR", "cor"),
    "displacement": ("CILINDRADA", "cilindradas", "cilindrada"),
    "power": ("POTENCIA", "potencia"),
    "fuel": ("COMBUSTIVEL", "combustivel"),
    "chassis": ("CHASSI", "chassi"),
    "engine": ("MOTOR", "motor"),
    "seats": ("PASSAGEIROS", "passageiros", "quantidade_passageiro"),
    "state": ("UF", "uf"),
    "municipality": ("MUNICIPIO", "municipio"),
}

API_KEYS: dict[str, tuple[str, ...]] = {
    "brand": ("marca", "Marca", "MARCA", "fabricante"),
    "model": ("modelo", "Modelo", "MODELO", "versao"),
    "imported": ("importado", "Importado", "nacionalidade"),
    "year": ("ano_fabricacao", "anoFabricacao", "ano", "Ano"),
    "model_year": ("ano_modelo", "anoModelo", "AnoModelo"),
    "color": ("cor", "Cor"),
    "displacement": ("cilindradas", "cilindrada", "Cilindrada"),
    "power": ("potencia", "Potencia"),
    "fuel": ("combustivel", "Combustivel", "tipo_combustivel"),
    "chassis": ("chassi", "Chassi"),
    "engine": ("motor", "numero_motor", "Motor"),
    "seats": ("passageiros", "capacidade_passageiros", "lugares"),
    "state": ("uf", "UF", "estado"),
    "municipality": ("municipio", "Municipio", "cidade"),
}

API_ENVELOPE_KEYS = ("data", "veiculo", "result", "dados")


def _pick_value(item: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = item.get(key)
        # Nested objects and flags are never field values.
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            continue
        cleaned = clean_value(value)
        if cleaned is not None:
            return cleaned
    return None


def _adapt_mapping(item: Any, key_map: dict[str, tuple[str, ...]]) -> VehicleRecord | None:
    if not isinstance(item, Mapping):
        return None

    record = VehicleRecord(**{name: _pick_value(item, keys) for name, keys in key_map.items()})
    if not record.is_valid:
        return None
    return record


def adapt_gateway_payload(payload: Any) -> VehicleRecord | None:
    """Flat object with upper- or lower-case keys; some gateways nest the fields under ``extra``."""
    record = _adapt_mapping(payload, GATEWAY_KEYS)
    if record is None and isinstance(payload, Mapping):
        record = _adapt_mapping(payload.get("extra"), GATEWAY_KEYS)
    return record


def adapt_api_payload(payload: Any) -> VehicleRecord | None:
    if not isinstance(payload, Mapping):
        return None

    for key in API_ENVELOPE_KEYS:
        record = _adapt_mapping(payload.get(key), API_KEYS)
        if record is not None:
            return record

    return _adapt_mapping(payload, API_KEYS)

from plate_lookup.models import VehicleRecord
from plate_lookup.scraper.adapters import adapt_api_payload, adapt_gateway_payload


def test_adapt_gateway_payload_upper_case_keys() -> None:
    payload = {
        "MARCA": "VW",
        "MODELO": "GOL 1.0",
        "ano": 2014,
        "anoModelo": "2015",
        "cor": "Prata",
        "chassi": "*****12345",
        "uf": "PR",
        "municipio": "Curitiba",
        "situacao": "Sem restrição",
    }

    record = adapt_gateway_payload(payload)

    assert record == VehicleRecord(
        brand="VW",
        model="GOL 1.0",
        year="2014",
        model_year="2015",
        color="Prata",
        chassis="*****12345",
        state="PR",
        municipality="Curitiba",
    )


def test_adapt_gateway_payload_prefers_first_non_empty_key() -> None:
    record = adapt_gateway_payload({"MARCA": "  ", "marca": "FIAT", "MODELO": "", "modelo": "UNO"})

    assert record is not None
    assert record.brand == "FIAT"
    assert record.model == "UNO"


def test_adapt_gateway_payload_reads_nested_extra() -> None:
    record = adapt_gateway_payload({"codigoRetorno": "0", "extra": {"marca": "KIA", "modelo": "SOUL"}})

    assert record is not None
    assert record.brand == "KIA"


def test_adapt_gateway_payload_without_brand_is_no_record() -> None:
    assert adapt_gateway_payload({"MODELO": "GOL", "cor": "Azul"}) is None
    assert adapt_gateway_payload({"Marca": "VW"}) is None
    assert adapt_gateway_payload([{"MARCA": "VW"}]) is None
    assert adapt_gateway_payload(None) is None


def test_adapt_api_payload_unwraps_data_envelope() -> None:
    payload = {
        "error": False,
        "data": {
            "marca": "CITROEN",
            "modelo": "C3",
            "ano_fabricacao": "2012",
            "ano_modelo": "2013",
            "combustivel": "Flex",
            "passageiros": 5,
            "uf": "BA",
        },
    }

    record = adapt_api_payload(payload)

    assert record is not None
    assert record.present_fields() == {
        "brand": "CITROEN",
        "model": "C3",
        "year": "2012",
        "model_year": "2013",
        "fuel": "Flex",
        "seats": "5",
        "state": "BA",
    }


def test_adapt_api_payload_flat_object() -> None:
    record = adapt_api_payload({"Marca": "NISSAN", "Modelo": "MARCH"})

    assert record is not None
    assert record.brand == "NISSAN"
    assert record.model == "MARCH"
    assert record.color is None


def test_adapt_api_payload_error_shapes_return_none() -> None:
    assert adapt_api_payload({"error": True, "message": "Placa não encontrada"}) is None
    assert adapt_api_payload({"data": {"modelo": "C3"}}) is None
    assert adapt_api_payload("not found") is None


def test_nested_values_are_not_field_values() -> None:
    assert adapt_gateway_payload({"MARCA": {"nome": "FIAT"}, "MODELO": "UNO"}) is None
    assert adapt_api_payload({"marca": ["FIAT"], "modelo": "UNO"}) is None

    record = adapt_gateway_payload({"MARCA": {"nome": "VW"}, "marca": "VW", "IMPORTADO": False, "ano": 2014.0})

    assert record is not None
    assert record.brand == "VW"
    assert record.imported is None
    assert record.year == "2014.0"


def test_adapt_api_payload_falls_back_past_envelope_without_brand() -> None:
    record = adapt_api_payload({"data": {"status": "ok"}, "veiculo": {"marca": "JAC", "modelo": "J3"}})

    assert record is not None
    assert record.brand == "JAC"

    flat = adapt_api_payload({"data": {"status": "ok"}, "marca": "FIAT"})

    assert flat is not None
    assert flat.brand == "FIAT"

import re

SPACE_RE = re.compile(r"\s+")

LABEL_FIELD_MAP: dict[str, str] = {
    "marca": "brand",
    "fabricante": "brand",
    "modelo": "model",
    "modelo/versão": "model",
    "modelo/versao": "model",
    "importado": "imported",
    "procedência": "imported",
    "procedencia": "imported",
    "ano": "year",
    "ano fabricação": "year",
    "ano fabricacao": "year",
    "ano de fabricação": "year",
    "ano de fabricacao": "year",
    "ano fab.": "year",
    "ano fab": "year",
    "ano modelo": "model_year",
    "ano do modelo": "model_year",
    "ano mod.": "model_year",
    "ano mod": "model_year",
    "cor": "color",
    "cor predominante": "color",
    "cilindrada": "displacement",
    "cilindradas": "displacement",
    "potência": "power",
    "potencia": "power",
    "pot.": "power",
    "combustível": "fuel",
    "combustivel": "fuel",
    "chassi": "chassis",
    "chassis": "chassis",
    "n° chassi": "chassis",
    "motor": "engine",
    "n° motor": "engine",
    "número do motor": "engine",
    "numero do motor": "engine",
    "passageiros": "seats",
    "capacidade de passageiros": "seats",
    "lugares": "seats",
    "uf": "state",
    "estado": "state",
    "município": "municipality",
    "municipio": "municipality",
    "cidade": "municipality",
}

# Markers of valuation/financial tables that share the page with vehicle data.
IGNORED_LABELS = frozenset(
    {
        "valor",
        "fipe",
        "seguro",
        "ipva",
        "preço",
        "preco",
    }
)


def normalize_label(raw_label: str | None) -> str:
    if not raw_label:
        return ""
    return SPACE_RE.sub(" ", raw_label.lower().replace(":", "").replace("\xa0", " ")).strip()


def normalize_field(raw_label: str | None) -> str | None:
    """Map a source label like ``"Ano Modelo:"`` to its canonical field name."""
    return LABEL_FIELD_MAP.get(normalize_label(raw_label))


def is_ignored_label(raw_label: str | None) -> bool:
    label = normalize_label(raw_label)
    return any(marker in label for marker in IGNORED_LABELS)

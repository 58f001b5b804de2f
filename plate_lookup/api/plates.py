import logging
import time
from datetime import datetime, timezone

import psutil
from fastapi import APIRouter, Depends, Request, Response, status

from plate_lookup.api.deps import enforce_rate_limit, get_resolver
from plate_lookup.models import VehicleRecord
from plate_lookup.plates import clean_plate, is_valid_plate_format
from plate_lookup.resolver import PlateResolver
from plate_lookup.schemas import HealthOut, MemoryOut, ResultOut, VehicleOut


logger = logging.getLogger(__name__)

router = APIRouter(tags=["plates"])

INVALID_PLATE_MESSAGE = "Formato de placa inválido. Use o formato ABC1234 (antiga) ou ABC1D23 (Mercosul)."
NOT_FOUND_MESSAGE = "Carro não encontrado. Verifique o número da placa."
INTERNAL_ERROR_MESSAGE = "Erro interno ao consultar a placa. Tente novamente."
RATE_LIMITED_MESSAGE = "Limite de consultas excedido. Aguarde 1 minuto."


def _to_vehicle_out(record: VehicleRecord) -> VehicleOut:
    return VehicleOut(
        marca=record.brand,
        modelo=record.model,
        importado=record.imported,
        ano=record.year,
        anoModelo=record.model_year,
        cor=record.color,
        cilindrada=record.displacement,
        potencia=record.power,
        combustivel=record.fuel,
        chassi=record.chassis,
        motor=record.engine,
        passageiros=record.seats,
        uf=record.state,
        municipio=record.municipality,
    )


def _memory_usage() -> MemoryOut:
    info = psutil.Process().memory_info()
    return MemoryOut(
        used=f"{round(info.rss / 1024 / 1024)}MB",
        total=f"{round(info.vms / 1024 / 1024)}MB",
    )


@router.get("/health", response_model=HealthOut)
def health(request: Request) -> HealthOut:
    return HealthOut(
        status="online",
        uptime=int(time.monotonic() - request.app.state.started_at),
        timestamp=datetime.now(timezone.utc).isoformat(),
        memory=_memory_usage(),
    )


@router.get("/{placa}", response_model=ResultOut, dependencies=[Depends(enforce_rate_limit)])
def lookup_plate(
    placa: str,
    response: Response,
    resolver: PlateResolver = Depends(get_resolver),
) -> ResultOut:
    if not is_valid_plate_format(placa):
        response.status_code = status.HTTP_400_BAD_REQUEST
        return ResultOut(erros=[INVALID_PLATE_MESSAGE])

    cleaned = clean_plate(placa)
    started = time.monotonic()
    logger.info("Lookup: %s", cleaned)
    try:
        record = resolver.resolve(cleaned)
    except Exception:
        logger.exception("Lookup failed for %s", cleaned)
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return ResultOut(erros=[INTERNAL_ERROR_MESSAGE])

    duration_ms = int((time.monotonic() - started) * 1000)
    if record is None:
        logger.info("Not found: %s (%sms)", cleaned, duration_ms)
        response.status_code = status.HTTP_404_NOT_FOUND
        return ResultOut(erros=[NOT_FOUND_MESSAGE])

    logger.info("OK: %s %s %s (%sms)", cleaned, record.brand, record.model or "", duration_ms)
    return ResultOut(data=_to_vehicle_out(record))

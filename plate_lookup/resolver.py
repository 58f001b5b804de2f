import logging
import time
from typing import Sequence

from plate_lookup.config import SETTINGS, Settings
from plate_lookup.errors import InvalidPlateFormat, MalformedPayload
from plate_lookup.models import VehicleRecord
from plate_lookup.plates import clean_plate, is_valid_plate_format
from plate_lookup.scraper.client import HttpClient, HttpRequestError
from plate_lookup.sources import Strategy, build_strategies


logger = logging.getLogger(__name__)


class PlateResolver:
    """Walks the strategies in order and returns the first record with a brand.

    Transport errors, bad payloads and pages without a vehicle table only end
    the current step.
    """

    def __init__(self, strategies: Sequence[Strategy]) -> None:
        self._strategies = tuple(strategies)

    @property
    def strategy_names(self) -> list[str]:
        return [strategy.name for strategy in self._strategies]

    def resolve(self, plate: str) -> VehicleRecord | None:
        if not is_valid_plate_format(plate):
            raise InvalidPlateFormat(plate)

        cleaned = clean_plate(plate)
        for strategy in self._strategies:
            record = self._attempt(strategy, cleaned)
            if record is not None:
                return record

        logger.info("All %s sources exhausted for %s", len(self._strategies), cleaned)
        return None

    def _attempt(self, strategy: Strategy, plate: str) -> VehicleRecord | None:
        logger.info("Querying %s for %s", strategy.name, plate)
        started = time.monotonic()
        try:
            record = strategy.run(plate)
        except HttpRequestError as exc:
            logger.warning("%s failed (%s): %s", strategy.name, exc.error_kind or "unknown", exc)
            return None
        except MalformedPayload as exc:
            logger.warning("%s returned a malformed payload: %s", strategy.name, exc)
            return None

        elapsed_ms = int((time.monotonic() - started) * 1000)
        if record is None or not record.is_valid:
            logger.info("%s returned no vehicle data (%sms)", strategy.name, elapsed_ms)
            return None

        logger.info("Vehicle found via %s (%sms)", strategy.name, elapsed_ms)
        return record


def build_resolver(settings: Settings = SETTINGS, client: HttpClient | None = None) -> PlateResolver:
    if client is None:
        client = HttpClient(
            max_retries=settings.http_max_retries,
            backoff_seconds=settings.http_backoff_seconds,
            max_redirects=settings.max_redirects,
        )
    return PlateResolver(build_strategies(settings, client))

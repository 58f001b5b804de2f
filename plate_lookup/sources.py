import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal
from urllib.parse import urlencode

from plate_lookup.config import Settings
from plate_lookup.models import VehicleRecord
from plate_lookup.scraper.adapters import adapt_api_payload, adapt_gateway_payload
from plate_lookup.scraper.client import HttpClient
from plate_lookup.scraper.parser import extract_vehicle_html


logger = logging.getLogger(__name__)

SourceKind = Literal["json", "html"]


@dataclass(frozen=True)
class SourceRequest:
    url: str
    method: Literal["GET", "POST"] = "GET"
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class SourceDescriptor:
    name: str
    kind: SourceKind
    build_request: Callable[[str], SourceRequest]
    adapt: Callable[[Any], VehicleRecord | None]


@dataclass(frozen=True)
class Strategy:
    """One step of the fallback chain: a named callable from cleaned plate to record."""

    name: str
    run: Callable[[str], VehicleRecord | None]


HTML_SOURCES = (
    SourceDescriptor(
        name="PlacaIPVA",
        kind="html",
        build_request=lambda plate: SourceRequest(url=f"https://placaipva.com.br/placa/{plate}"),
        adapt=extract_vehicle_html,
    ),
    SourceDescriptor(
        name="Keplaca",
        kind="html",
        build_request=lambda plate: SourceRequest(url=f"https://www.keplaca.com/placa/{plate}"),
        adapt=extract_vehicle_html,
    ),
    SourceDescriptor(
        name="PlacaFipe",
        kind="html",
        build_request=lambda plate: SourceRequest(url=f"https://placafipe.com/{plate}"),
        adapt=extract_vehicle_html,
    ),
)


def json_sources(settings: Settings) -> tuple[SourceDescriptor, ...]:
    return (
        SourceDescriptor(
            name="PlateGateway",
            kind="json",
            build_request=lambda plate: SourceRequest(url=settings.plate_gateway_url.format(plate=plate)),
            adapt=adapt_gateway_payload,
        ),
        SourceDescriptor(
            name="PlateApi",
            kind="json",
            build_request=lambda plate: SourceRequest(
                url=settings.plate_api_url,
                method="POST",
                body={"placa": plate},
            ),
            adapt=adapt_api_payload,
        ),
    )


def build_egress_url(target_url: str, *, api_key: str, endpoint: str) -> str:
    query = urlencode({"api_key": api_key, "url": target_url, "country_code": "br"})
    return f"{endpoint}?{query}"


def fetch_source(
    client: HttpClient,
    source: SourceDescriptor,
    plate: str,
    *,
    timeout: float,
    route: Callable[[str], str] | None = None,
) -> VehicleRecord | None:
    request = source.build_request(plate)
    url = route(request.url) if route is not None else request.url

    if source.kind == "html":
        payload = client.get_text(url, timeout=timeout)
    elif request.method == "POST":
        payload = client.post_json(url, request.body or {}, timeout=timeout)
    else:
        payload = client.get_json(url, timeout=timeout)

    return source.adapt(payload)


def _strategy(
    client: HttpClient,
    source: SourceDescriptor,
    *,
    timeout: float,
    name: str | None = None,
    route: Callable[[str], str] | None = None,
) -> Strategy:
    def run(plate: str) -> VehicleRecord | None:
        return fetch_source(client, source, plate, timeout=timeout, route=route)

    return Strategy(name=name or source.name, run=run)


def build_strategies(settings: Settings, client: HttpClient) -> list[Strategy]:
    """Fallback order: JSON APIs, direct page fetches, then page fetches through the scraping proxy."""
    strategies = [_strategy(client, source, timeout=settings.json_timeout_seconds) for source in json_sources(settings)]
    strategies.extend(_strategy(client, source, timeout=settings.html_timeout_seconds) for source in HTML_SOURCES)

    if settings.scraper_api_key is None:
        logger.info("SCRAPER_API_KEY not set; proxy fallback disabled.")
        return strategies

    api_key = settings.scraper_api_key

    def route(url: str) -> str:
        return build_egress_url(url, api_key=api_key, endpoint=settings.scraper_api_url)

    strategies.extend(
        _strategy(
            client,
            source,
            timeout=settings.egress_timeout_seconds,
            name=f"{source.name} (proxy)",
            route=route,
        )
        for source in HTML_SOURCES
    )
    return strategies

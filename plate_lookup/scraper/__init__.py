from plate_lookup.scraper.adapters import adapt_api_payload, adapt_gateway_payload
from plate_lookup.scraper.classifier import is_acceptable_value, looks_like_currency
from plate_lookup.scraper.client import HttpClient, HttpRequestError
from plate_lookup.scraper.labels import normalize_field, normalize_label
from plate_lookup.scraper.parser import extract_vehicle_html

__all__ = [
    "HttpClient",
    "HttpRequestError",
    "adapt_api_payload",
    "adapt_gateway_payload",
    "extract_vehicle_html",
    "is_acceptable_value",
    "looks_like_currency",
    "normalize_field",
    "normalize_label",
]

from fastapi import Request

from plate_lookup.rate_limit import RateLimitStore
from plate_lookup.resolver import PlateResolver


class RateLimitExceeded(Exception):
    def __init__(self, client_key: str) -> None:
        super().__init__(f"Rate limit exceeded for {client_key}")
        self.client_key = client_key


def get_resolver(request: Request) -> PlateResolver:
    return request.app.state.resolver


def get_rate_limiter(request: Request) -> RateLimitStore:
    return request.app.state.rate_limiter


def enforce_rate_limit(request: Request) -> None:
    client_key = request.client.host if request.client else "unknown"
    if not get_rate_limiter(request).hit(client_key):
        raise RateLimitExceeded(client_key)

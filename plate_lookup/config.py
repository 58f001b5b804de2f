import os
from dataclasses import dataclass


def _env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise RuntimeError(f"Missing required env var: {name}")
    return value


def _optional_secret(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value and value.strip() and value.strip().lower() != "change_me":
            return value.strip()
    return None


def _csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    port: int
    allowed_origins: tuple[str, ...]
    rate_limit: int
    rate_window_seconds: float
    rate_sweep_seconds: float
    json_timeout_seconds: float
    html_timeout_seconds: float
    egress_timeout_seconds: float
    max_redirects: int
    http_max_retries: int
    http_backoff_seconds: float
    plate_gateway_url: str
    plate_api_url: str
    scraper_api_key: str | None
    scraper_api_url: str
    log_level: str

    @property
    def egress_enabled(self) -> bool:
        return self.scraper_api_key is not None


def load_settings() -> Settings:
    return Settings(
        port=int(_env("PORT", "3001")),
        allowed_origins=_csv(_env("ALLOWED_ORIGINS", "*")) or ("*",),
        rate_limit=int(_env("RATE_LIMIT", "30")),
        rate_window_seconds=float(_env("RATE_WINDOW_SECONDS", "60")),
        rate_sweep_seconds=float(_env("RATE_SWEEP_SECONDS", "300")),
        json_timeout_seconds=float(_env("JSON_TIMEOUT_SECONDS", "12")),
        html_timeout_seconds=float(_env("HTML_TIMEOUT_SECONDS", "10")),
        egress_timeout_seconds=float(_env("EGRESS_TIMEOUT_SECONDS", "30")),
        max_redirects=int(_env("MAX_REDIRECTS", "5")),
        http_max_retries=max(1, int(_env("HTTP_MAX_RETRIES", "1"))),
        http_backoff_seconds=float(_env("HTTP_BACKOFF_SECONDS", "0.5")),
        plate_gateway_url=_env("PLATE_GATEWAY_URL", "https://apicarros.com/v1/consulta/{plate}/json"),
        plate_api_url=_env("PLATE_API_URL", "https://api.placaapi.com.br/v1/consulta"),
        scraper_api_key=_optional_secret("SCRAPER_API_KEY", "PROXY_API_KEY"),
        scraper_api_url=_env("SCRAPER_API_URL", "https://api.scraperapi.com/"),
        log_level=_env("LOG_LEVEL", "INFO").strip().upper(),
    )


SETTINGS = load_settings()

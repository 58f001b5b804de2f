import logging
import random
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

import requests
from bs4 import UnicodeDammit

from plate_lookup.errors import MalformedPayload


logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
    "Referer": "https://www.google.com/",
}

JSON_HEADERS = {
    "User-Agent": BROWSER_HEADERS["User-Agent"],
    "Accept": "application/json",
}

BACKOFF_JITTER_SECONDS = 0.25


class HttpRequestError(Exception):
    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
        retryable: bool = False,
        error_kind: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.retryable = retryable
        self.error_kind = error_kind


class HttpClient:
    """Blocking HTTP client; ``timeout`` bounds each attempt, body included.

    Attempts run on a worker thread and the caller stops waiting at the
    deadline. A late response is closed once it arrives.
    """

    def __init__(
        self,
        *,
        max_retries: int = 1,
        backoff_seconds: float = 0.5,
        jitter_seconds: float = BACKOFF_JITTER_SECONDS,
        max_redirects: int = 5,
        max_workers: int = 8,
        session: requests.Session | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._session.max_redirects = max_redirects
        self._max_retries = max(1, max_retries)
        self._backoff_seconds = backoff_seconds
        self._jitter_seconds = jitter_seconds
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="plate-http")

    def get_text(self, url: str, *, timeout: float) -> str:
        response = self._request_with_retries("GET", url, timeout=timeout, headers=BROWSER_HEADERS)
        return UnicodeDammit(response.content, is_html=True).unicode_markup or response.text

    def get_json(self, url: str, *, timeout: float) -> Any:
        response = self._request_with_retries("GET", url, timeout=timeout, headers=JSON_HEADERS)
        return _decode_json(response)

    def post_json(self, url: str, body: dict[str, Any], *, timeout: float) -> Any:
        response = self._request_with_retries("POST", url, timeout=timeout, headers=JSON_HEADERS, json_body=body)
        return _decode_json(response)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._session.close()

    def _send(
        self,
        method: str,
        url: str,
        *,
        timeout: float,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
    ) -> requests.Response:
        response = self._session.request(
            method,
            url,
            headers=headers,
            json=json_body,
            timeout=timeout,
            allow_redirects=True,
        )
        # Pull the whole body on the worker thread so the deadline covers it.
        _ = response.content
        return response

    def _send_with_deadline(
        self,
        method: str,
        url: str,
        *,
        timeout: float,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
    ) -> requests.Response:
        future = self._executor.submit(
            self._send, method, url, timeout=timeout, headers=headers, json_body=json_body
        )
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            future.cancel()
            future.add_done_callback(_close_late_response)
            raise HttpRequestError(
                f"No complete response within {timeout:.1f}s",
                url=url,
                retryable=True,
                error_kind="timeout",
            ) from None

    def _request_with_retries(
        self,
        method: str,
        url: str,
        *,
        timeout: float,
        headers: dict[str, str],
        json_body: dict[str, Any] | None = None,
    ) -> requests.Response:
        last_error: HttpRequestError | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._send_with_deadline(
                    method, url, timeout=timeout, headers=headers, json_body=json_body
                )

                if response.status_code >= 500:
                    raise HttpRequestError(
                        f"HTTP {response.status_code}",
                        url=url,
                        status_code=response.status_code,
                        retryable=True,
                        error_kind="http_5xx",
                    )

                if response.status_code >= 400:
                    raise HttpRequestError(
                        f"HTTP {response.status_code}",
                        url=url,
                        status_code=response.status_code,
                        retryable=False,
                        error_kind="http_4xx",
                    )

                return response

            except HttpRequestError as exc:
                last_error = exc
            except requests.Timeout as exc:
                last_error = HttpRequestError(str(exc), url=url, retryable=True, error_kind="timeout")
            except requests.TooManyRedirects as exc:
                last_error = HttpRequestError(str(exc), url=url, retryable=False, error_kind="redirects")
            except requests.ConnectionError as exc:
                last_error = HttpRequestError(str(exc), url=url, retryable=True, error_kind="connection")
            except requests.RequestException as exc:
                last_error = HttpRequestError(str(exc), url=url, retryable=False, error_kind="request")

            if not last_error.retryable or attempt >= self._max_retries:
                break
            self._backoff(url, attempt, last_error)

        if last_error is None:
            raise HttpRequestError("Unknown HTTP error", url=url, retryable=False)
        raise last_error

    def _backoff(self, url: str, attempt: int, exc: HttpRequestError) -> None:
        delay = self._backoff_seconds * (2 ** (attempt - 1))
        if self._jitter_seconds > 0:
            delay += random.uniform(0.0, self._jitter_seconds)
        logger.warning(
            "%s for %s (attempt %s/%s): %s. Next attempt in %.2fs",
            exc.error_kind or "error",
            url,
            attempt,
            self._max_retries,
            exc,
            delay,
        )
        time.sleep(delay)


def _close_late_response(future: Future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


def _decode_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedPayload(f"Invalid JSON from {response.url}: {exc}") from exc

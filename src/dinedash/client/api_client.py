"""HTTP client for the dashboard API.

Network failures and 5xx answers are retried up to ``MAX_RETRIES`` times with
exponential backoff (1s, 2s, 4s). 4xx answers are raised at once as
``ApiResponseError`` since repeating them cannot succeed.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable, Mapping

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT_SECONDS = 10.0
MAX_RETRIES = 3


class TransientIOError(Exception):
    """Raised once the retry budget is spent on network errors or 5xx answers."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class ApiResponseError(Exception):
    def __init__(self, status_code: int, payload: Any) -> None:
        super().__init__(f"API answered {status_code}")
        self.status_code = status_code
        self.payload = payload

    @property
    def messages(self) -> dict[str, list[str]]:
        if isinstance(self.payload, dict):
            return self.payload.get("messages") or {}
        return {}


def backoff_delay(retry: int) -> float:
    return float(2 ** (retry - 1))


def _configured_base_url() -> str:
    return os.getenv("DINEDASH_API_URL", DEFAULT_BASE_URL)


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class AnalyticsApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = MAX_RETRIES,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = httpx.Client(
            base_url=(base_url or _configured_base_url()).rstrip("/"),
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )
        self._max_retries = max_retries
        self._sleep = sleep

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> AnalyticsApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        retries = 0
        while True:
            try:
                response = self._client.request(method, path, params=params, json=json)
            except httpx.TransportError as exc:
                failure = f"{method} {path} failed: {exc}"
            else:
                if response.status_code < 500:
                    payload = _decode(response)
                    if response.is_error:
                        raise ApiResponseError(response.status_code, payload)
                    return payload
                failure = f"{method} {path} answered {response.status_code}"

            if retries >= self._max_retries:
                raise TransientIOError(failure, attempts=retries + 1)
            retries += 1
            delay = backoff_delay(retries)
            logger.warning(
                "api_request_retry",
                extra={"path": path, "retry": retries, "delay_seconds": delay},
            )
            self._sleep(delay)

    @staticmethod
    def _data(payload: Any) -> Any:
        return payload["data"]

    def list_restaurants(
        self,
        *,
        search: str | None = None,
        location: str | None = None,
        cuisine: str | None = None,
        sort: str = "name",
        order: str = "asc",
    ) -> dict[str, Any]:
        params = {
            "search": search,
            "location": location,
            "cuisine": cuisine,
            "sort": sort,
            "order": order,
        }
        return self._request(
            "GET",
            "/restaurants",
            params={key: value for key, value in params.items() if value is not None},
        )

    def restaurant_meta(self) -> dict[str, Any]:
        return self._data(self._request("GET", "/restaurants/meta"))

    def get_restaurant(self, restaurant_id: int) -> dict[str, Any]:
        return self._data(self._request("GET", f"/restaurants/{restaurant_id}"))

    def order_trends(self, restaurant_id: int, start_date: str, end_date: str) -> dict[str, Any]:
        params = {"restaurant_id": restaurant_id, "start_date": start_date, "end_date": end_date}
        return self._data(self._request("GET", "/analytics/trends", params=params))

    def top_restaurants(self, start_date: str, end_date: str, limit: int = 3) -> dict[str, Any]:
        params = {"start_date": start_date, "end_date": end_date, "limit": limit}
        return self._data(self._request("GET", "/analytics/top-restaurants", params=params))

    def filtered_analytics(self, filters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self._data(self._request("POST", "/analytics/filter", json=dict(filters or {})))

    def filter_meta(self) -> dict[str, Any]:
        return self._data(self._request("GET", "/analytics/meta"))

"""USDA FoodData Central API client."""

from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from recipe_nutrition.adapters.throttle import RequestThrottle
from recipe_nutrition.domain.fdc import FdcSearchPayload
from recipe_nutrition.domain.nutrition import SearchResponse

MAX_PAGE_SIZE = 200
USER_AGENT = "recipe-nutrition/0.1"

_STATUS_MESSAGES = {
    401: "Invalid FDC API key. Please check your configuration.",
    404: "Food item not found in FDC database.",
    429: "FDC API rate limit exceeded. Please wait before retrying.",
}


class FdcApiError(Exception):
    """Failed FDC request; status_code is None for network failures."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body

    @property
    def is_auth_error(self) -> bool:
        return self.status_code == 401

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions."""

    async def search_foods(
        self,
        query: str,
        *,
        data_types: list[str] | tuple[str, ...] | None = None,
        brand_owner: str | None = None,
        page_size: int | None = None,
        page_number: int | None = None,
    ) -> SearchResponse:
        """Search foods by query."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by FDC id and return raw API data."""

    async def get_foods(self, fdc_ids: list[int]) -> list[dict[str, object]]:
        """Fetch several foods by FDC id and return raw API data."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client with a shared request throttle."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    throttle: RequestThrottle = field(default_factory=RequestThrottle)
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("FDC API key is required")

    @classmethod
    def create(
        cls,
        api_key: str,
        base_url: str,
        throttle: RequestThrottle | None = None,
        timeout_seconds: float | None = None,
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            throttle=throttle or RequestThrottle(),
            timeout_seconds=timeout_seconds,
        )

    async def search_foods(
        self,
        query: str,
        *,
        data_types: list[str] | tuple[str, ...] | None = None,
        brand_owner: str | None = None,
        page_size: int | None = None,
        page_number: int | None = None,
    ) -> SearchResponse:
        """Search foods by query, sorted by relevance score."""
        params: dict[str, str] = {
            "query": query.strip(),
            "sortBy": "score",
            "sortOrder": "desc",
        }
        if data_types:
            params["dataType"] = ",".join(data_types)
        if brand_owner:
            params["brandOwner"] = brand_owner
        if page_size:
            params["pageSize"] = str(min(page_size, MAX_PAGE_SIZE))
        if page_number:
            params["pageNumber"] = str(page_number)

        payload = await self._request("/foods/search", params)
        try:
            return FdcSearchPayload.model_validate(payload).to_domain()
        except ValidationError as exc:
            raise FdcApiError(
                f"Malformed FDC search response: {exc}", response_body=payload
            ) from exc

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by FDC id."""
        return await self._request(f"/food/{fdc_id}")

    async def get_foods(self, fdc_ids: list[int]) -> list[dict[str, object]]:
        """Fetch several foods in one request."""
        if not fdc_ids:
            return []
        return await self._request(
            "/foods", {"fdcIds": ",".join(str(fdc_id) for fdc_id in fdc_ids)}
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> Any:
        """Issue a throttled GET and translate failures into FdcApiError."""
        await self.throttle.wait()
        try:
            response = await self.http_client.get(
                f"{self.base_url}{endpoint}",
                params={"api_key": self.api_key, **(params or {})},
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise FdcApiError(f"Network error accessing FDC API: {exc}") from exc

        if not response.is_success:
            message = _STATUS_MESSAGES.get(
                response.status_code,
                f"FDC API request failed: {response.status_code} "
                f"{response.reason_phrase}",
            )
            raise FdcApiError(message, response.status_code, _response_body(response))

        try:
            return response.json()
        except ValueError as exc:
            raise FdcApiError(
                "FDC API returned invalid JSON", response.status_code, response.text
            ) from exc


def _response_body(response: httpx.Response) -> object:
    """Return the JSON error body, or raw text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text

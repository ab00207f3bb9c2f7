"""HTTP client for the store API."""

import logging
from typing import Mapping, Optional

import httpx

from ..models import FAQEntry, Product

logger = logging.getLogger(__name__)


class StorefrontRequestError(Exception):
    """Raised when a request fails, either by status code or in transport."""
    pass


class StoreApiClient:
    """Async client for the store endpoints.

    Supports the async context manager pattern for proper resource cleanup.
    """

    def __init__(
        self,
        base_url: str,
        api_base: str = "/guitar/",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        """Initialize the client.

        Args:
            base_url: Scheme and host of the store, e.g. http://localhost:8000
            api_base: Shared prefix of the API routes
            transport: Optional httpx transport (e.g. ASGITransport in tests)
            timeout: Request timeout in seconds
        """
        self._api_base = api_base
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "StoreApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False

    async def _request(self, method: str, path: str, data: Optional[Mapping[str, str]] = None) -> httpx.Response:
        url = self._api_base + path
        try:
            response = await self._client.request(method, url, data=data)
        except httpx.HTTPError as e:
            raise StorefrontRequestError(f"Request error: {e}") from e
        if not response.is_success:
            raise StorefrontRequestError(f"Request error: {response.reason_phrase}")
        return response

    async def _get_json(self, path: str, parse):
        """GET ``path`` and parse its JSON body, reporting a malformed body as a request error."""
        response = await self._request("GET", path)
        try:
            return parse(response.json())
        except (ValueError, TypeError, LookupError) as e:
            logger.warning(f"Malformed response body from {path}: {e}")
            raise StorefrontRequestError("Request error: malformed response") from e

    async def get_category(self, category: str) -> list[Product]:
        """List the products of ``category`` ("all" for every product)."""
        return await self._get_json(category, lambda body: [Product.model_validate(item) for item in body])

    async def get_product(self, product_id: int) -> Product:
        """Fetch a single product; the API answers with a one-element array."""
        return await self._get_json(f"product/{product_id}", lambda body: Product.model_validate(body[0]))

    async def get_faq(self) -> list[FAQEntry]:
        return await self._get_json("faq", lambda body: [FAQEntry.model_validate(item) for item in body])

    async def post_diy(self, fields: Mapping[str, str]) -> str:
        response = await self._request("POST", "diy", data=fields)
        return response.text

    async def post_feedback(self, fields: Mapping[str, str]) -> str:
        response = await self._request("POST", "feedback", data=fields)
        return response.text

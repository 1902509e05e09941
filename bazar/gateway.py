# bazar/gateway.py
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from bazar import config
from bazar.errors import GatewayUnreachable, NotFound

logger = logging.getLogger(__name__)


class ProductGateway:
    """
    Async client for the product API (see app/main.py).

    One call is one round trip: no retries, no caching. Transport errors and
    non-2xx answers raise GatewayUnreachable, except a 404 on an id-addressed
    call, which raises NotFound.
    """

    def __init__(
        self,
        base_url: str = config.API_URL,
        timeout: float = config.TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ProductGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, *, product_id: Optional[str] = None, **kwargs) -> httpx.Response:
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            r = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise GatewayUnreachable(f"{method} {path} failed: {e!r}") from e
        if r.status_code == 404 and product_id is not None:
            raise NotFound(product_id)
        if not r.is_success:
            raise GatewayUnreachable(f"{method} {path} returned HTTP {r.status_code}", status_code=r.status_code)
        return r

    @staticmethod
    def _json(r: httpx.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise GatewayUnreachable(f"invalid JSON from {r.request.url}", status_code=r.status_code) from e

    @classmethod
    def _record(cls, r: httpx.Response) -> Dict[str, Any]:
        body = cls._json(r)
        if not isinstance(body, dict):
            raise GatewayUnreachable(f"expected a JSON object from {r.request.url}", status_code=r.status_code)
        return body

    async def list(self) -> List[Dict[str, Any]]:
        body = self._json(await self._request("GET", "/api/products"))
        if not isinstance(body, list):
            raise GatewayUnreachable("expected a JSON array of products")
        return body

    async def get(self, product_id: str) -> Dict[str, Any]:
        r = await self._request("GET", f"/api/products/{product_id}", product_id=product_id)
        return self._record(r)

    async def create(self, draft: Mapping[str, Any]) -> Dict[str, Any]:
        r = await self._request("POST", "/api/products", json=dict(draft))
        return self._record(r)

    async def update(self, product_id: str, draft: Mapping[str, Any]) -> Dict[str, Any]:
        r = await self._request("PUT", f"/api/products/{product_id}", product_id=product_id, json=dict(draft))
        return self._record(r)

    async def delete(self, product_id: str) -> None:
        await self._request("DELETE", f"/api/products/{product_id}", product_id=product_id)

    async def list_categories(self) -> List[Dict[str, Any]]:
        body = self._json(await self._request("GET", "/api/categories"))
        if not isinstance(body, list):
            raise GatewayUnreachable("expected a JSON array of categories")
        return body

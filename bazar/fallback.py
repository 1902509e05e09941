# bazar/fallback.py
import logging
import random
from typing import Any, Dict, List, Optional

import httpx

from bazar import config
from bazar.errors import GatewayUnreachable

logger = logging.getLogger(__name__)


def synthesize_stock(record: Dict[str, Any], max_stock: int = config.FALLBACK_MAX_STOCK) -> Dict[str, Any]:
    """Fill a display-only ``stock`` for a catalog record that has none.

    The value is seeded from the record's identity, so the same product
    always shows the same number.
    """
    if record.get("stock") is not None or record.get("quantity") is not None:
        return record
    identity = record.get("id", record.get("_id", record.get("title", "")))
    rng = random.Random(str(identity))
    return {**record, "stock": rng.randint(0, max_stock)}


class FallbackCatalog:
    """Read-only public catalog used while the product API is down."""

    def __init__(
        self,
        base_url: str = config.FALLBACK_URL,
        timeout: float = config.TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "FallbackCatalog":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get_list(self, path: str) -> List[Any]:
        try:
            r = await self.client.get(path)
            r.raise_for_status()
            body = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GatewayUnreachable(f"fallback catalog {path} failed: {e!r}") from e
        if not isinstance(body, list):
            raise GatewayUnreachable(f"fallback catalog {path} did not return a list")
        return body

    async def list(self) -> List[Dict[str, Any]]:
        records = await self._get_list("/products")
        logger.debug("fallback catalog returned %d products", len(records))
        return [synthesize_stock(r) for r in records if isinstance(r, dict)]

    async def list_categories(self) -> List[Dict[str, Any]]:
        names = await self._get_list("/products/categories")
        out = []
        for n in names:
            if isinstance(n, dict):
                out.append({"id": str(n.get("id", n.get("name", ""))), "name": str(n.get("name", ""))})
            else:
                out.append({"id": str(n), "name": str(n)})
        return out

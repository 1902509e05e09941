# bazar/client.py
import requests
from typing import Any, Dict, Optional

from bazar import config


class StoreClient:
    """Blocking client for scripts and demos. The warehouse UI uses InventorySync."""

    def __init__(self, base_url: str = config.API_URL, api_key: Optional[str] = None,
                 timeout: float = config.TIMEOUT, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def reset(self):
        r = self.session.post(f"{self.base_url}/reset", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products
    def list_products(self):
        r = self.session.get(f"{self.base_url}/api/products", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, fields: Dict[str, Any]):
        r = self.session.post(f"{self.base_url}/api/products", json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, fields: Dict[str, Any]):
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()

    # Categories
    def list_categories(self):
        r = self.session.get(f"{self.base_url}/api/categories", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_category(self, name: str):
        r = self.session.post(f"{self.base_url}/api/categories", json={"name": name}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Payment
    def pay(self, token_id: str, amount: int):
        r = self.session.post(f"{self.base_url}/pay", json={"token": {"id": token_id}, "amount": amount}, timeout=self.timeout)
        # no raise_for_status(): callers inspect {"error": ...} on 500
        return r

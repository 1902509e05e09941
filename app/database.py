from typing import Dict, Any

# This file holds the in-memory data stores (insertion ordered).

PRODUCTS: Dict[str, Dict[str, Any]] = {}
CATEGORIES: Dict[str, Dict[str, Any]] = {}


def reset_stores() -> None:
    PRODUCTS.clear()
    CATEGORIES.clear()

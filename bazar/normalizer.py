"""Maps heterogeneous product records onto the canonical :class:`Product`.

Records reach the client from the product API, from older payloads that
say ``title``/``quantity`` instead of ``name``/``stock``, and from the public
fallback catalog, which embeds categories. ``normalize`` is the single
adapter between all of those and the canonical shape, and it is idempotent.
"""

import math
from collections.abc import Mapping
from typing import Any, Optional, Union

from bazar.models import Product

__all__ = ["normalize"]

RawRecord = Union[Mapping, Product]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _opt_text(value: Any) -> Optional[str]:
    return None if value is None else _text(value)


def _finite(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return f if math.isfinite(f) else None


def _number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    f = _finite(value)
    return default if f is None else max(0.0, f)


def _count(value: Any) -> int:
    f = _finite(value)
    return 0 if f is None else max(0, int(f))


def _category_ref(raw: Mapping) -> str:
    if raw.get("categoryId") is not None:
        return _text(raw["categoryId"])
    category = raw.get("category")
    if isinstance(category, Mapping):
        ref = category.get("id", category.get("_id"))
        return _text(ref)
    return ""


def normalize(raw: RawRecord) -> Product:
    """Return the canonical product for ``raw``.

    Any subset of the documented fields may be missing. Unknown fields are
    carried through untouched.
    """
    if isinstance(raw, Product):
        raw = raw.to_wire()

    data = dict(raw)
    legacy_id = data.pop("_id", None)
    quantity = data.pop("quantity", None)

    product_id = data.get("id")
    if product_id is None or product_id == "":
        product_id = legacy_id
    data["id"] = _text(product_id)

    name, title = data.get("name"), data.get("title")
    data["name"] = _text(name) if _text(name) else _text(title)
    data["title"] = _text(title) if title is not None else _text(name)

    stock = data.get("stock")
    data["stock"] = _count(stock if stock is not None else quantity)

    data["categoryId"] = _category_ref(data)

    images = data.get("images")
    data["images"] = [_text(i) for i in images] if isinstance(images, (list, tuple)) else []

    data["price"] = _number(data.get("price"))
    if "oldPrice" in data:
        data["oldPrice"] = _number(data["oldPrice"], default=None)
    data["description"] = _text(data.get("description"))
    for key in ("image", "createdAt", "updatedAt"):
        if key in data:
            data[key] = _opt_text(data[key])
    for key in ("isNew", "isFeatured"):
        if key in data:
            data[key] = bool(data[key])

    return Product.model_validate(data)

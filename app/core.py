from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict
from typing import Optional, Dict, Any, List

class ProductIn(BaseModel):
    # Unknown fields are stored as given; the storefront tolerates schema drift.
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    title: Optional[str] = None
    price: Optional[float] = None
    oldPrice: Optional[float] = None
    stock: Optional[int] = None
    description: Optional[str] = None
    categoryId: Optional[str] = None
    image: Optional[str] = None
    images: Optional[List[str]] = None
    isNew: Optional[bool] = None
    isFeatured: Optional[bool] = None

class CategoryIn(BaseModel):
    name: str

class ChargeToken(BaseModel):
    id: str

class ChargeIn(BaseModel):
    token: ChargeToken
    amount: int

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

def _fields(p: ProductIn) -> Dict[str, Any]:
    # Only what the caller actually sent; clients own the shape of their records.
    extra = p.model_extra or {}
    return {k: v for k, v in p.model_dump().items() if k in p.model_fields_set or k in extra}

def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    fields = _fields(p)
    fields.pop("id", None)
    fields.pop("_id", None)
    return {**fields, "id": product_id, "createdAt": _now()}

def _merge_product_dict(existing: Dict[str, Any], p: ProductIn) -> Dict[str, Any]:
    fields = _fields(p)
    fields.pop("id", None)
    fields.pop("_id", None)
    fields.pop("createdAt", None)
    return {**existing, **fields, "id": existing["id"], "updatedAt": _now()}

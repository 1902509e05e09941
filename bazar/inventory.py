"""The inventory sync layer behind the warehouse screen.

``InventorySync`` owns the product list the UI renders. Reads go to the
product API first and fall back to the public catalog. Writes go to the
product API and, when it cannot be reached, are applied locally anyway
(optimistic update). Observers get one :class:`InventoryEvent` per change.

All state lives on one asyncio loop. Network awaits are the only suspension
points, and every completion handler re-reads the current list and applies a
prepend/replace/remove keyed by id, so interleaved operations on distinct ids
don't lose each other's results.
"""

import logging
import math
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

from bazar.errors import AccessDenied, GatewayUnreachable, NotFound, ValidationError
from bazar.fallback import FallbackCatalog
from bazar.gateway import ProductGateway
from bazar.models import Category, Phase, Product
from bazar.normalizer import normalize
from bazar.session import ANONYMOUS, Session

__all__ = [
    "InventoryEvent",
    "InventorySync",
    "Notice",
    "REQUIRED_FIELDS",
    "validate_draft",
]

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "price", "stock", "categoryId", "image", "description")


@dataclass(frozen=True)
class Notice:
    """A user-facing outcome message ("info", "warning" or "error")."""

    level: str
    message: str


@dataclass(frozen=True)
class InventoryEvent:
    phase: Phase
    products: Tuple[Product, ...]
    categories: Tuple[Category, ...]
    error: Optional[str] = None
    notice: Optional[Notice] = None


Observer = Callable[[InventoryEvent], None]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _check_field(name: str, value: Any) -> None:
    if name == "price":
        if not _is_number(value) or value < 0:
            raise ValidationError(name, "must be a non-negative number")
    elif name == "stock":
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValidationError(name, "must be a non-negative integer")
    elif not isinstance(value, str) or not value.strip():
        raise ValidationError(name, "must not be empty")


def validate_draft(draft: Mapping[str, Any], partial: bool = False) -> None:
    """Raise ValidationError for the first bad field in ``draft``.

    With ``partial`` only the fields present are checked (updates send
    partial records); otherwise every required field must be there.
    """
    for name in REQUIRED_FIELDS:
        if name not in draft:
            if partial:
                continue
            raise ValidationError(name, "is required")
        _check_field(name, draft[name])
    if draft.get("oldPrice") is not None and not _is_number(draft["oldPrice"]):
        raise ValidationError("oldPrice", "must be a number")


def _unique(products: Iterable[Product]) -> Tuple[Product, ...]:
    seen = set()
    out: List[Product] = []
    for p in products:
        if p.id in seen:
            logger.warning("dropping duplicate product id %s", p.id)
            continue
        seen.add(p.id)
        out.append(p)
    return tuple(out)


def _categories(raw: Iterable[Any]) -> Tuple[Category, ...]:
    return tuple(
        Category(id=str(c.get("id", c.get("_id", ""))), name=str(c.get("name", "")))
        for c in raw
        if isinstance(c, Mapping)
    )


class InventorySync:
    def __init__(self, gateway: ProductGateway, fallback: FallbackCatalog, session: Session = ANONYMOUS):
        self.gateway = gateway
        self.fallback = fallback
        self.session = session
        self._phase = Phase.LOADING
        self._products: Tuple[Product, ...] = ()
        self._categories: Tuple[Category, ...] = ()
        self._error: Optional[str] = None
        self._observers: List[Observer] = []
        self._closed = False

    # ---------------------------
    # State
    # ---------------------------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def category_for(self, product: Product) -> Optional[Category]:
        for c in self._categories:
            if c.id == product.category_id:
                return c
        return None

    def snapshot(self, notice: Optional[Notice] = None) -> InventoryEvent:
        return InventoryEvent(self._phase, self._products, self._categories, self._error, notice)

    # ---------------------------
    # Observers
    # ---------------------------
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _emit(self, notice: Optional[Notice] = None) -> None:
        if self._closed:
            return
        event = self.snapshot(notice)
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("inventory observer %r failed", observer)

    def close(self) -> None:
        """Tear down; results of calls still in flight are dropped."""
        self._closed = True
        self._observers.clear()

    def _require_admin(self) -> None:
        if not self.session.is_admin:
            raise AccessDenied(f"{self.session.user_email or 'anonymous'} may not modify inventory")

    # ---------------------------
    # Operations
    # ---------------------------
    async def load(self) -> None:
        if self._closed:
            return
        self._phase = Phase.LOADING
        self._error = None
        self._emit()

        source = self.gateway
        try:
            raw = await self.gateway.list()
        except GatewayUnreachable as e:
            logger.warning("product api unavailable (%s); using fallback catalog", e)
            source = self.fallback
            try:
                raw = await self.fallback.list()
            except GatewayUnreachable as e2:
                logger.error("fallback catalog unavailable: %s", e2)
                if self._closed:
                    return
                self._products = ()
                self._phase = Phase.ERROR
                self._error = str(e2)
                self._emit(Notice("error", f"Could not load products: {e2}"))
                return

        products = _unique(normalize(r) for r in raw if isinstance(r, Mapping))
        categories = await self._load_categories(source)
        if self._closed:
            return
        self._products = products
        self._categories = categories
        self._phase = Phase.READY
        logger.info("loaded %d products", len(products))
        if source is self.fallback:
            self._emit(Notice("warning", "Product API unreachable; showing the public catalog"))
        else:
            self._emit()

    async def _load_categories(self, source) -> Tuple[Category, ...]:
        try:
            return _categories(await source.list_categories())
        except GatewayUnreachable as e:
            logger.warning("categories unavailable: %s", e)
            return ()

    def _local_id(self) -> str:
        ids = {p.id for p in self._products}
        while True:
            candidate = f"local-{uuid.uuid4().hex}"
            if candidate not in ids:
                return candidate

    async def create(self, draft: Mapping[str, Any]) -> Product:
        self._require_admin()
        validate_draft(draft)

        try:
            product = normalize(await self.gateway.create(draft))
            if not product.id:
                raise GatewayUnreachable("product api returned a record without an id")
            notice = Notice("info", f"Product '{product.name}' created")
        except GatewayUnreachable as e:
            logger.warning("create failed remotely (%s); keeping a local copy", e)
            product = normalize({**draft, "id": self._local_id()})
            notice = Notice("warning", f"Product '{product.name}' saved locally only")

        if self._closed:
            return product
        self._products = (product,) + tuple(p for p in self._products if p.id != product.id)
        logger.info("created product %s", product.id)
        self._emit(notice)
        return product

    async def update(self, product_id: str, draft: Mapping[str, Any]) -> Product:
        self._require_admin()
        validate_draft(draft, partial=True)

        try:
            raw = await self.gateway.update(product_id, draft)
            product = normalize({"id": product_id, **raw})
            notice = Notice("info", f"Product '{product.name}' updated")
        except NotFound:
            self._emit(Notice("error", f"Product {product_id} no longer exists"))
            raise
        except GatewayUnreachable as e:
            current = self.get(product_id)
            if current is None:
                self._emit(Notice("error", f"Product {product_id} not found"))
                raise NotFound(product_id) from e
            logger.warning("update failed remotely (%s); applying locally", e)
            product = normalize({**current.to_wire(), **draft, "id": product_id})
            notice = Notice("warning", f"Product '{product.name}' updated locally only")

        if self._closed:
            return product
        if self.get(product_id) is None:
            logger.info("product %s left the list before its update landed", product_id)
            return product
        self._products = tuple(product if p.id == product_id else p for p in self._products)
        logger.info("updated product %s", product_id)
        self._emit(notice)
        return product

    async def delete(self, product_id: str) -> None:
        """Remove ``product_id``; the caller has already confirmed."""
        self._require_admin()

        missing: Optional[NotFound] = None
        try:
            await self.gateway.delete(product_id)
            notice = Notice("info", "Product deleted")
        except NotFound as e:
            missing = e
            notice = Notice("warning", f"Product {product_id} was already gone")
        except GatewayUnreachable as e:
            logger.warning("delete failed remotely (%s); removing locally", e)
            notice = Notice("warning", "Product removed locally; the store may still have it")

        if not self._closed:
            self._products = tuple(p for p in self._products if p.id != product_id)
            logger.info("deleted product %s", product_id)
            self._emit(notice)
        if missing is not None:
            raise missing

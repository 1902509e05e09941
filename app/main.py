# app/main.py
from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.responses import JSONResponse
import logging, uuid

from app import config
from app.core import ProductIn, CategoryIn, ChargeIn, _make_product_dict, _merge_product_dict
from app.database import PRODUCTS, CATEGORIES, reset_stores
from app.payments import PaymentError, PaymentProcessor, get_processor

logger = logging.getLogger(__name__)

app = FastAPI(title="bazar-store (in-memory product api)")

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
async def list_products():
    return list(PRODUCTS.values())

@app.get("/api/products/{product_id}")
async def get_product(product_id: str):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p

@app.post("/api/products", status_code=201)
async def create_product(payload: ProductIn):
    pid = uuid.uuid4().hex
    PRODUCTS[pid] = _make_product_dict(pid, payload)
    logger.info("created product %s", pid)
    return PRODUCTS[pid]

@app.put("/api/products/{product_id}")
async def update_product(product_id: str, payload: ProductIn):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    PRODUCTS[product_id] = _merge_product_dict(p, payload)
    return PRODUCTS[product_id]

@app.delete("/api/products/{product_id}", status_code=204)
async def delete_product(product_id: str):
    if product_id not in PRODUCTS:
        raise HTTPException(status_code=404, detail="product not found")
    del PRODUCTS[product_id]
    logger.info("deleted product %s", product_id)
    return Response(status_code=204)

# ---------------------------
# Category endpoints
# ---------------------------
@app.get("/api/categories")
async def list_categories():
    return list(CATEGORIES.values())

@app.post("/api/categories", status_code=201)
async def create_category(payload: CategoryIn):
    if not payload.name.strip():
        raise HTTPException(status_code=400, detail="name must not be empty")
    cid = uuid.uuid4().hex
    CATEGORIES[cid] = {"id": cid, "name": payload.name}
    return CATEGORIES[cid]

# ---------------------------
# Payment
# ---------------------------
@app.post("/pay")
async def pay(payload: ChargeIn, processor: PaymentProcessor = Depends(get_processor)):
    if payload.amount <= 0:
        raise HTTPException(status_code=400, detail="amount must be > 0")
    try:
        processor.charge(payload.token.id, payload.amount)
    except PaymentError as e:
        logger.error("payment failed: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})
    return {"success": True}

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    reset_stores()
    return {"status": "reset"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)

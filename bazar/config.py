"""Client-side configuration for the inventory sync layer."""

import os

from dotenv import load_dotenv

load_dotenv()

# Authoritative product API (app/main.py)
API_URL = os.getenv("BAZAR_API_URL", "http://127.0.0.1:8085")

# Public read-only catalog used when the API is unreachable
FALLBACK_URL = os.getenv("BAZAR_FALLBACK_URL", "https://fakestoreapi.com")

# Seconds; applied to every remote call
TIMEOUT = float(os.getenv("BAZAR_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("BAZAR_LOG_LEVEL", "INFO").upper()

# Upper bound (inclusive) for stock synthesized on fallback records
FALLBACK_MAX_STOCK = int(os.getenv("BAZAR_FALLBACK_MAX_STOCK", "100"))

"""Runtime configuration defaults for the backend, pricing and notifications."""

from __future__ import annotations

import os

BACKEND_URL = os.environ.get("CANTEEN_BACKEND_URL", "").strip() or "http://localhost:8000"
REQUEST_TIMEOUT_SECONDS = 15.0

DEBUG_LOG_PATH = os.environ.get("CANTEEN_DEBUG_LOG", "").strip() or "/tmp/canteen-debug.log"

# Single accepted coupon and the pricing rules it unlocks.
COUPON_CODE = "RTU20"
DISCOUNT_THRESHOLD = 300
DISCOUNT_RATE = 0.20
DELIVERY_FEE = 10

CURRENCY_SYMBOL = "₹"
NOTIFICATION_DURATION_SECONDS = 2.5

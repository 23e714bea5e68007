# 📄 File: app/modules/orders/domain/services/order_number.py
# 🧭 Purpose (Layman Explanation):
# Makes the human-friendly order reference customers see, like ORD240115-3FA91C0B22D4.
# 🧪 Purpose (Technical Summary):
# Order number generation: "ORD" + YYMMDD + "-" + 48 random bits as upper-case hex from
# the secrets module. Uniqueness is probabilistic and backed by a unique constraint.
# 🔗 Dependencies:
# secrets, datetime
# 🔄 Connected Modules / Calls From:
# CreateOrderHandler, unit tests

import re
import secrets
from datetime import datetime
from typing import Optional

from app.shared.utils.helpers import utcnow

ORDER_NUMBER_PREFIX = "ORD"
RANDOM_BYTES = 6

ORDER_NUMBER_PATTERN = re.compile(r"^ORD\d{6}-[0-9A-F]{12}$")


def generate_order_number(now: Optional[datetime] = None) -> str:
    """Generate a new order number for an order placed at ``now`` (UTC)."""
    now = now or utcnow()
    return f"{ORDER_NUMBER_PREFIX}{now:%y%m%d}-{secrets.token_hex(RANDOM_BYTES).upper()}"

"""Deal price arithmetic. Pure functions, no database access."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

logger = logging.getLogger(__name__)

FIXED = "fixed"
CALCULATED = "calculated"


def round_half_up(value: float) -> int:
    """Round to a whole amount, .5 always going up (2.5 -> 3)"""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def items_subtotal(items: list[dict], prices: dict[str, float]) -> float:
    """Sum of product price x quantity. Unknown products count as 0."""
    subtotal = 0.0
    for item in items:
        price = prices.get(item["product"])
        if price is None:
            logger.warning(f"⚠️ Deal item '{item['product']}' has no matching product, priced at 0")
            price = 0
        subtotal += price * item["quantity"]
    return subtotal


def deal_price(
    pricing_mode: str,
    subtotal: float,
    price: Optional[float] = None,
    offer_price: Optional[float] = None,
    discount_percent: Optional[float] = None,
) -> float:
    """Price the customer pays.

    fixed:      offer price when set, otherwise the regular price
    calculated: subtotal less the discount, rounded half up
    """
    if pricing_mode == CALCULATED:
        discount = (discount_percent or 0) / 100
        return round_half_up(subtotal * (1 - discount))
    return offer_price if offer_price else (price or 0)


def savings(subtotal: float, final_price: float) -> float:
    return max(subtotal - final_price, 0)

"""
Coupon code generation and discount calculation.

Everything here works on plain values so it can be used both by the admin
API and by the storefront checkout preview.
"""

import secrets
import string
from dataclasses import dataclass
from datetime import date
from typing import Optional

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8

PERCENTAGE = "percentage"
FIXED_AMOUNT = "fixed_amount"
FREE_DELIVERY = "free_delivery"


class CouponRejected(Exception):
    """The coupon exists but cannot be used for this order"""


@dataclass
class CouponQuote:
    code: str
    discount: float
    free_delivery: bool
    order_amount: float
    final_amount: float

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "discount": self.discount,
            "freeDelivery": self.free_delivery,
            "orderAmount": self.order_amount,
            "finalAmount": self.final_amount,
        }


def generate_code(length: int = CODE_LENGTH) -> str:
    """Random code like 'K7Q2ZP9A'"""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def check_eligibility(
    *,
    status: str,
    order_amount: float,
    today: date,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    usage_limit: Optional[int] = None,
    used_count: int = 0,
    min_order_amount: Optional[float] = None,
    is_first_order_only: bool = False,
    is_first_order: bool = True,
) -> None:
    if status != "active":
        raise CouponRejected("This coupon is not active")
    if start_date and today < date.fromisoformat(start_date):
        raise CouponRejected("This coupon is not valid yet")
    if end_date and today > date.fromisoformat(end_date):
        raise CouponRejected("This coupon has expired")
    if usage_limit is not None and used_count >= usage_limit:
        raise CouponRejected("This coupon has reached its usage limit")
    if min_order_amount and order_amount < min_order_amount:
        raise CouponRejected(f"Minimum order amount for this coupon is {min_order_amount:g}")
    if is_first_order_only and not is_first_order:
        raise CouponRejected("This coupon is only valid on your first order")


def calculate_discount(
    discount_type: str,
    discount_value: float,
    order_amount: float,
    max_discount_amount: Optional[float] = None,
    delivery_fee: float = 0,
) -> float:
    """Amount taken off. Item discounts never exceed the order amount or the coupon's cap."""
    if discount_type == FREE_DELIVERY:
        return delivery_fee

    if discount_type == PERCENTAGE:
        discount = order_amount * discount_value / 100
    else:
        discount = discount_value

    if max_discount_amount:
        discount = min(discount, max_discount_amount)
    return round(min(discount, order_amount), 2)

# app/payments.py
import logging
from typing import Protocol

import stripe

from app import config

logger = logging.getLogger(__name__)


class PaymentError(Exception):
    """Raised when the payment processor rejects or fails a charge."""


class PaymentProcessor(Protocol):
    def charge(self, source: str, amount: int) -> None: ...


class StripeProcessor:
    """
    Charges a card token through Stripe.

    Args:
        api_key: Stripe Secret Key (sk_test_xxx or sk_live_xxx)
        currency: ISO currency code, lowercase
    """

    def __init__(self, api_key: str, currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency

    def charge(self, source: str, amount: int) -> None:
        if not self.api_key:
            raise PaymentError("payment processor is not configured")
        try:
            stripe.Charge.create(
                source=source,
                amount=amount,
                currency=self.currency,
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe charge failed: %s", e)
            raise PaymentError(e.user_message or str(e)) from e


def get_processor() -> PaymentProcessor:
    return StripeProcessor(config.STRIPE_SECRET_KEY, config.PAYMENT_CURRENCY)

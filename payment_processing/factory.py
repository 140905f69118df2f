"""Build processors by payment method name."""
from enum import Enum
from typing import Optional, Union

from payment_processing.config import PaymentSettings, get_settings
from payment_processing.exceptions import UnknownPaymentMethodError
from payment_processing.processors import (
    CashPaymentProcessor,
    Output,
    PaymentProcessor,
    PayPalProcessor,
    StripeProcessor,
)


class PaymentMethod(str, Enum):
    """Supported payment methods."""

    STRIPE = "stripe"
    PAYPAL = "paypal"
    CASH = "cash"

    @classmethod
    def parse(cls, value: Union[str, "PaymentMethod"]) -> "PaymentMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownPaymentMethodError(
                str(value), supported=[m.value for m in cls]
            ) from None


def create_processor(
    method: Union[str, PaymentMethod],
    api_key: Optional[str] = None,
    settings: Optional[PaymentSettings] = None,
    output: Output = print,
) -> PaymentProcessor:
    """
    Create the processor for a payment method.

    Online methods use ``api_key`` when given, otherwise the key from
    settings. The key is not validated here; that happens on first use.

    Args:
        method: Payment method or its name
        api_key: Explicit API key for online methods
        settings: Settings to read default keys from
        output: Sink for user-facing lines

    Returns:
        PaymentProcessor: Processor for the method

    Raises:
        UnknownPaymentMethodError: If the method is not supported
    """
    payment_method = PaymentMethod.parse(method)
    settings = settings or get_settings()

    if payment_method is PaymentMethod.STRIPE:
        key = settings.stripe_api_key if api_key is None else api_key
        return StripeProcessor(key, output=output)
    if payment_method is PaymentMethod.PAYPAL:
        key = settings.paypal_api_key if api_key is None else api_key
        return PayPalProcessor(key, output=output)
    return CashPaymentProcessor(output=output)

"""
Payment Processing - polymorphic payment handling

One capability (process / refund a payment), several processors with their
own credential rules, and an order workflow that only knows the capability:

    order = OrderProcessor(StripeProcessor("sk_test_123456"))
    order.process_order(100.00, "Book")
"""

from payment_processing.exceptions import (
    InvalidCredentialsError,
    PaymentProcessingError,
    UnknownPaymentMethodError,
)
from payment_processing.factory import PaymentMethod, create_processor
from payment_processing.orders import OrderProcessor
from payment_processing.processors import (
    PAYPAL,
    STRIPE,
    CashPaymentProcessor,
    OnlinePaymentProcessor,
    OnlineProvider,
    PaymentProcessor,
    PayPalProcessor,
    StripeProcessor,
)

__version__ = "1.0.0"

__all__ = [
    "PaymentProcessor",
    "OnlineProvider",
    "OnlinePaymentProcessor",
    "StripeProcessor",
    "PayPalProcessor",
    "CashPaymentProcessor",
    "STRIPE",
    "PAYPAL",
    "OrderProcessor",
    "PaymentMethod",
    "create_processor",
    "PaymentProcessingError",
    "InvalidCredentialsError",
    "UnknownPaymentMethodError",
]

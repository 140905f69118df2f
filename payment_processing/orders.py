"""Order workflow on top of any ``PaymentProcessor``."""
from typing import Sequence, Tuple, Union

from payment_processing.logging_config import get_logger
from payment_processing.processors import Amount, Output, PaymentProcessor

logger = get_logger(__name__)

Items = Union[str, Sequence[str]]


def normalize_items(items: Items) -> Tuple[str, ...]:
    """A single description is a one-item order."""
    if isinstance(items, str):
        return (items,)
    return tuple(items)


def describe_items(items: Items) -> str:
    return ", ".join(normalize_items(items))


class OrderProcessor:
    """
    Places and refunds orders through a single payment processor.

    The processor is fixed at construction. Invalid credentials are not
    handled here: ``InvalidCredentialsError`` reaches the caller untouched.
    """

    def __init__(self, payment_processor: PaymentProcessor, output: Output = print):
        """
        Initialize order processor.

        Args:
            payment_processor: Processor used for every order
            output: Sink for user-facing lines
        """
        self._payment_processor = payment_processor
        self._output = output

    @property
    def payment_processor(self) -> PaymentProcessor:
        return self._payment_processor

    def process_order(self, amount: Amount, items: Items) -> bool:
        """
        Charge an order.

        Args:
            amount: Order total
            items: One item description or a sequence of them

        Returns:
            bool: Whether the payment went through
        """
        items_list = describe_items(items)
        self._output(f"Processing order for items: {items_list}")
        logger.info("order_processing_started", items=items_list, amount=str(amount))

        if self._payment_processor.process_payment(amount):
            self._output("Order processed successfully")
            logger.info("order_processed", amount=str(amount))
            return True

        self._output("Order processing failed")
        logger.warning("order_failed", amount=str(amount))
        return False

    def refund_order(self, amount: Amount) -> bool:
        """Refund ``amount``; every call is an independent refund."""
        if self._payment_processor.refund_payment(amount):
            self._output("Refund processed successfully")
            logger.info("refund_order_processed", amount=str(amount))
            return True

        self._output("Refund failed")
        logger.warning("refund_order_failed", amount=str(amount))
        return False

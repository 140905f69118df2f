"""
Payment processors.

Every processor satisfies the ``PaymentProcessor`` capability: it can
process a payment and refund one, answering ``True`` or ``False``.

Online processors share one rule: credentials are checked before anything
is attempted. Rather than an abstract base with hook methods, each online
provider is described by an ``OnlineProvider`` bundle (a key-validation
function plus the two execution functions) and ``OnlinePaymentProcessor``
runs the check-then-execute flow for whichever bundle it is given:

    processor = OnlinePaymentProcessor(STRIPE, "sk_test_123456")
    processor.process_payment(100)  # validate -> execute -> True

Execution is simulated: it writes a line such as
``Processing Stripe payment of 100`` to the output sink and logs an event.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Protocol, Union, runtime_checkable

from payment_processing.exceptions import InvalidCredentialsError
from payment_processing.logging_config import get_logger

logger = get_logger(__name__)

Amount = Union[int, float, Decimal]
Output = Callable[[str], None]


def format_amount(amount: Amount) -> str:
    """
    Render an amount for display.

    Integral values drop their fractional part (``100.00`` -> ``"100"``),
    anything else keeps its natural form (``25.5`` -> ``"25.5"``).
    Large integral floats are written out in full, never in exponent form
    (``1e20`` -> ``"100000000000000000000"``).
    """
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    if isinstance(amount, Decimal) and amount.is_finite():
        if amount == amount.to_integral_value():
            return str(int(amount))
        return str(amount.normalize())
    return str(amount)


@runtime_checkable
class PaymentProcessor(Protocol):
    """Capability shared by all payment processors."""

    def process_payment(self, amount: Amount) -> bool:
        """Attempt to charge ``amount``."""
        ...

    def refund_payment(self, amount: Amount) -> bool:
        """Attempt to refund ``amount``."""
        ...


def simulate_execution(provider: str, action: str, amount: Amount, output: Output) -> bool:
    """
    Report a simulated provider call and succeed.

    Args:
        provider: Display name of the provider ("Stripe", "cash", ...)
        action: "payment" or "refund"
        amount: Amount being moved
        output: Sink for the user-facing line

    Returns:
        bool: Always True, nothing is sent anywhere
    """
    output(f"Processing {provider} {action} of {format_amount(amount)}")
    logger.info(f"{action}_executed", provider=provider, amount=str(amount))
    return True


def execute_payment(provider: str, amount: Amount, output: Output) -> bool:
    return simulate_execution(provider, "payment", amount, output)


def execute_refund(provider: str, amount: Amount, output: Output) -> bool:
    return simulate_execution(provider, "refund", amount, output)


def stripe_key_is_valid(api_key: str) -> bool:
    """Stripe secret keys start with ``sk_``."""
    return api_key.startswith("sk_")


def paypal_key_is_valid(api_key: str) -> bool:
    """PayPal keys are exactly 32 characters long."""
    return len(api_key) == 32


@dataclass(frozen=True)
class OnlineProvider:
    """
    Everything provider-specific about an online processor.

    Attributes:
        name: Display name used in output and errors
        validate_key: Returns True when the API key is well formed
        execute_payment: Performs the charge once the key is accepted
        execute_refund: Performs the refund once the key is accepted
    """

    name: str
    validate_key: Callable[[str], bool]
    execute_payment: Callable[[str, Amount, Output], bool] = execute_payment
    execute_refund: Callable[[str, Amount, Output], bool] = execute_refund


STRIPE = OnlineProvider(name="Stripe", validate_key=stripe_key_is_valid)
PAYPAL = OnlineProvider(name="PayPal", validate_key=paypal_key_is_valid)


class OnlinePaymentProcessor:
    """
    Processor for providers that require a valid API key.

    Both operations validate the key first and raise
    ``InvalidCredentialsError`` without executing anything when it is
    rejected. Otherwise the provider's execution result is returned as is.
    """

    def __init__(self, provider: OnlineProvider, api_key: str, output: Output = print):
        """
        Initialize online processor.

        Args:
            provider: Provider rules and execution functions
            api_key: Provider API key, never changed after construction
            output: Sink for user-facing lines
        """
        self._provider = provider
        self._api_key = api_key
        self._output = output

    @property
    def provider(self) -> OnlineProvider:
        return self._provider

    @property
    def api_key(self) -> str:
        return self._api_key

    def validate_api_key(self) -> bool:
        """Check the API key against the provider's format rule."""
        return self._provider.validate_key(self._api_key)

    def _ensure_valid_key(self) -> None:
        if not self.validate_api_key():
            logger.warning("api_key_rejected", provider=self._provider.name)
            raise InvalidCredentialsError(self._provider.name)

    def process_payment(self, amount: Amount) -> bool:
        """
        Charge ``amount`` through the provider.

        Raises:
            InvalidCredentialsError: If the API key fails validation
        """
        self._ensure_valid_key()
        return self._provider.execute_payment(self._provider.name, amount, self._output)

    def refund_payment(self, amount: Amount) -> bool:
        """
        Refund ``amount`` through the provider.

        Raises:
            InvalidCredentialsError: If the API key fails validation
        """
        self._ensure_valid_key()
        return self._provider.execute_refund(self._provider.name, amount, self._output)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self._provider.name!r})"


class StripeProcessor(OnlinePaymentProcessor):
    """Online processor bound to the Stripe rules."""

    def __init__(self, api_key: str, output: Output = print):
        super().__init__(STRIPE, api_key, output)


class PayPalProcessor(OnlinePaymentProcessor):
    """Online processor bound to the PayPal rules."""

    def __init__(self, api_key: str, output: Output = print):
        super().__init__(PAYPAL, api_key, output)


class CashPaymentProcessor:
    """Cash needs no credentials; payments and refunds always succeed."""

    name = "cash"

    def __init__(self, output: Output = print):
        self._output = output

    def process_payment(self, amount: Amount) -> bool:
        return execute_payment(self.name, amount, self._output)

    def refund_payment(self, amount: Amount) -> bool:
        return execute_refund(self.name, amount, self._output)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

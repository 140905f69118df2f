"""
Exceptions raised by payment processors.

Two kinds of failure are kept apart:
- A declined operation is reported as ``False`` by the processor.
- An operation that cannot be attempted at all (bad setup, bad credentials)
  raises one of the exceptions below.
"""
from typing import Any, Dict, Optional


class PaymentProcessingError(Exception):
    """Base exception for payment processing errors."""

    error_code = "payment_processing_error"

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        Initialize payment processing error.

        Args:
            message: Error message
            error_code: Machine-readable code, defaults to the class code
        """
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for machine-readable reporting."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "type": self.__class__.__name__,
            }
        }


class InvalidCredentialsError(PaymentProcessingError):
    """Raised when an online processor's API key fails its format check."""

    error_code = "invalid_credentials"

    def __init__(self, provider: str):
        # Never put the key itself in the message.
        super().__init__(f"{provider}: Invalid API key")
        self.provider = provider


class UnknownPaymentMethodError(PaymentProcessingError, ValueError):
    """Raised when no processor exists for the requested payment method."""

    error_code = "unknown_payment_method"

    def __init__(self, method: str, supported: Optional[list] = None):
        supported_list = ", ".join(supported or [])
        super().__init__(
            f"Unknown payment method '{method}'. Supported: {supported_list}"
        )
        self.method = method

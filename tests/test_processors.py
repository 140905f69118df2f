"""Tests for the payment processors."""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from payment_processing.exceptions import InvalidCredentialsError, PaymentProcessingError
from payment_processing.processors import (
    PAYPAL,
    STRIPE,
    CashPaymentProcessor,
    OnlinePaymentProcessor,
    OnlineProvider,
    PaymentProcessor,
    PayPalProcessor,
    StripeProcessor,
    format_amount,
)

AMOUNTS = [100, 100.00, 0, -5, 25.5, Decimal("19.99"), 1_000_000]


class TestFormatAmount:
    """Display formatting of amounts."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (100.00, "100"),
            (100, "100"),
            (25.5, "25.5"),
            (0.0, "0"),
            (-5, "-5"),
            (Decimal("150.00"), "150"),
            (Decimal("19.90"), "19.9"),
            (1e20, "100000000000000000000"),
        ],
    )
    def test_format_amount(self, amount, expected):
        assert format_amount(amount) == expected

    def test_non_finite_amount_passes_through(self):
        assert format_amount(float("inf")) == "inf"


class TestStripeProcessor:
    """Stripe accepts keys starting with sk_."""

    @pytest.mark.parametrize("key", ["sk_test_123456", "sk_live_abc", "sk_"])
    @pytest.mark.parametrize("amount", AMOUNTS)
    def test_valid_key_succeeds(self, key, amount, output):
        processor = StripeProcessor(key, output=output.append)

        assert processor.process_payment(amount) is True
        assert processor.refund_payment(amount) is True

    @pytest.mark.parametrize(
        "key", ["invalid_key", "", "pk_test_123", "SK_test", " sk_test", "s"]
    )
    def test_invalid_key_raises_on_both_operations(self, key, output):
        processor = StripeProcessor(key, output=output.append)

        with pytest.raises(InvalidCredentialsError):
            processor.process_payment(100)
        with pytest.raises(InvalidCredentialsError):
            processor.refund_payment(100)

        assert output == []

    def test_reports_payment_and_refund(self, stripe_key, output):
        processor = StripeProcessor(stripe_key, output=output.append)

        processor.process_payment(100.00)
        processor.refund_payment(25.00)

        assert output == [
            "Processing Stripe payment of 100",
            "Processing Stripe refund of 25",
        ]

    def test_validation_is_stable(self, stripe_key):
        processor = StripeProcessor(stripe_key)
        assert all(processor.validate_api_key() for _ in range(5))
        assert not any(StripeProcessor("bad").validate_api_key() for _ in range(5))


class TestPayPalProcessor:
    """PayPal accepts keys of exactly 32 characters."""

    @pytest.mark.parametrize("amount", AMOUNTS)
    def test_valid_key_succeeds(self, paypal_key, amount, output):
        processor = PayPalProcessor(paypal_key, output=output.append)

        assert processor.process_payment(amount) is True
        assert processor.refund_payment(amount) is True

    @pytest.mark.parametrize("length", [0, 1, 31, 33, 64])
    def test_other_lengths_raise(self, length, output):
        processor = PayPalProcessor("x" * length, output=output.append)

        with pytest.raises(InvalidCredentialsError):
            processor.process_payment(150)
        with pytest.raises(InvalidCredentialsError):
            processor.refund_payment(150)

        assert output == []

    def test_any_32_characters_are_accepted(self):
        assert PayPalProcessor("sk_" + "z" * 29).validate_api_key() is True

    def test_reports_payment_and_refund(self, paypal_key, output):
        processor = PayPalProcessor(paypal_key, output=output.append)

        processor.process_payment(150.00)
        processor.refund_payment(50.00)

        assert output == [
            "Processing PayPal payment of 150",
            "Processing PayPal refund of 50",
        ]


class TestCashPaymentProcessor:
    """Cash has no validation and always succeeds."""

    @pytest.mark.parametrize("amount", AMOUNTS)
    def test_always_succeeds(self, amount, output):
        processor = CashPaymentProcessor(output=output.append)

        assert processor.process_payment(amount) is True
        assert processor.refund_payment(amount) is True

    def test_reports_actions(self, output):
        processor = CashPaymentProcessor(output=output.append)

        processor.process_payment(50.00)
        processor.refund_payment(10)

        assert output == [
            "Processing cash payment of 50",
            "Processing cash refund of 10",
        ]

    def test_prints_by_default(self, capsys):
        CashPaymentProcessor().process_payment(50.00)

        assert "Processing cash payment of 50" in capsys.readouterr().out


class TestOnlinePaymentProcessor:
    """Check-then-execute flow shared by online providers."""

    def test_execution_result_is_returned_unchanged(self):
        declining = OnlineProvider(
            name="Declining",
            validate_key=lambda key: True,
            execute_payment=lambda name, amount, output: False,
            execute_refund=lambda name, amount, output: False,
        )
        processor = OnlinePaymentProcessor(declining, "any")

        assert processor.process_payment(10) is False
        assert processor.refund_payment(10) is False

    def test_execution_skipped_when_key_rejected(self):
        calls = []
        provider = OnlineProvider(
            name="Strict",
            validate_key=lambda key: False,
            execute_payment=lambda name, amount, output: calls.append(amount) or True,
            execute_refund=lambda name, amount, output: calls.append(amount) or True,
        )
        processor = OnlinePaymentProcessor(provider, "key")

        with pytest.raises(InvalidCredentialsError):
            processor.process_payment(10)
        with pytest.raises(InvalidCredentialsError):
            processor.refund_payment(10)

        assert calls == []

    def test_bindings_use_provider_rules(self, stripe_key, paypal_key):
        assert StripeProcessor(stripe_key).provider is STRIPE
        assert PayPalProcessor(paypal_key).provider is PAYPAL

    def test_api_key_is_read_only(self, stripe_key):
        processor = StripeProcessor(stripe_key)

        assert processor.api_key == stripe_key
        with pytest.raises(AttributeError):
            processor.api_key = "sk_other"

    def test_error_carries_provider_not_key(self):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            StripeProcessor("invalid_key").process_payment(1)

        error = exc_info.value
        assert isinstance(error, PaymentProcessingError)
        assert error.provider == "Stripe"
        assert "Invalid API key" in str(error)
        assert "invalid_key" not in str(error)
        assert error.to_dict()["error"]["code"] == "invalid_credentials"

    def test_rejection_is_logged(self):
        with capture_logs() as logs:
            with pytest.raises(InvalidCredentialsError):
                PayPalProcessor("short-key").refund_payment(1)

        rejected = [log for log in logs if log["event"] == "api_key_rejected"]
        assert len(rejected) == 1
        assert rejected[0]["provider"] == "PayPal"
        assert rejected[0]["log_level"] == "warning"
        assert "api_key" not in rejected[0]
        assert "short-key" not in rejected[0].values()


class TestCapability:
    """Every processor satisfies the PaymentProcessor protocol."""

    @pytest.mark.parametrize(
        "processor",
        [
            StripeProcessor("sk_test_123456"),
            PayPalProcessor("12345678901234567890123456789012"),
            CashPaymentProcessor(),
        ],
        ids=repr,
    )
    def test_is_payment_processor(self, processor):
        assert isinstance(processor, PaymentProcessor)

    def test_execution_is_logged(self, output):
        with capture_logs() as logs:
            CashPaymentProcessor(output=output.append).refund_payment(10)

        assert logs[0]["event"] == "refund_executed"
        assert logs[0]["provider"] == "cash"
        assert logs[0]["amount"] == "10"

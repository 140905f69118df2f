"""CLI for payment processing.

Runs the demonstration sequence and single order/refund calls against the
simulated processors.
"""

from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from payment_processing.config import get_settings
from payment_processing.exceptions import PaymentProcessingError
from payment_processing.factory import PaymentMethod, create_processor
from payment_processing.logging_config import setup_logging
from payment_processing.orders import OrderProcessor

app = typer.Typer(
    name="payments",
    help="Simulated payment processing for Stripe, PayPal and cash orders",
    add_completion=False,
)

console = Console()


def _configure(verbose: bool) -> None:
    setup_logging(level="DEBUG" if verbose else None)


def _order_processor(method: str, api_key: Optional[str]) -> OrderProcessor:
    processor = create_processor(method, api_key=api_key, output=typer.echo)
    return OrderProcessor(processor, output=typer.echo)


def _fail(error: PaymentProcessingError) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(error.message)}")
    raise typer.Exit(1)


@app.command()
def demo(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Run the fixed demonstration sequence of orders and refunds."""
    _configure(verbose)
    settings = get_settings()

    stripe_order = OrderProcessor(
        create_processor(PaymentMethod.STRIPE, settings=settings, output=typer.echo),
        output=typer.echo,
    )
    paypal_order = OrderProcessor(
        create_processor(PaymentMethod.PAYPAL, settings=settings, output=typer.echo),
        output=typer.echo,
    )
    cash_order = OrderProcessor(
        create_processor(PaymentMethod.CASH, settings=settings, output=typer.echo),
        output=typer.echo,
    )

    try:
        stripe_order.process_order(100.00, "Book")
        paypal_order.process_order(150.00, ["Book", "Movie"])
        cash_order.process_order(50.00, ["Apple", "Orange"])

        stripe_order.refund_order(25.00)
        paypal_order.refund_order(50.00)
    except PaymentProcessingError as e:
        _fail(e)


@app.command()
def order(
    method: str = typer.Argument(..., help="Payment method: stripe, paypal or cash"),
    amount: float = typer.Argument(..., help="Order total"),
    items: List[str] = typer.Argument(..., help="Item descriptions"),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key for online methods (defaults to configured key)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Place a single order."""
    _configure(verbose)

    try:
        succeeded = _order_processor(method, api_key).process_order(amount, items)
    except PaymentProcessingError as e:
        _fail(e)

    if not succeeded:
        raise typer.Exit(1)


@app.command()
def refund(
    method: str = typer.Argument(..., help="Payment method: stripe, paypal or cash"),
    amount: float = typer.Argument(..., help="Amount to refund"),
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key for online methods (defaults to configured key)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """Refund a single amount."""
    _configure(verbose)

    try:
        succeeded = _order_processor(method, api_key).refund_order(amount)
    except PaymentProcessingError as e:
        _fail(e)

    if not succeeded:
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

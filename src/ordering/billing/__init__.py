"""Payment processor factory.

Provides get_processor() / set_processor() to swap implementations.
"""

from ordering.billing.fake_adapter import FakePaymentProcessor
from ordering.billing.port import PaymentProcessor

_current_processor: PaymentProcessor | None = None


def get_processor() -> PaymentProcessor:
    """Return the current payment processor. Defaults to FakePaymentProcessor."""
    global _current_processor
    if _current_processor is None:
        _current_processor = FakePaymentProcessor()
    return _current_processor


def set_processor(processor: PaymentProcessor) -> None:
    """Override the active payment processor (useful for tests)."""
    global _current_processor
    _current_processor = processor


def reset_processor() -> None:
    """Reset to default processor."""
    global _current_processor
    _current_processor = None

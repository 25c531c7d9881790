"""Order total computation.

The lifecycle prices an order through a ``PricingPolicy`` so a catalogue
lookup can replace the flat rate without touching the command handlers.
"""

from collections.abc import Callable, Iterable

from ordering.settings import get_settings

PricingPolicy = Callable[[Iterable], float]


class FlatRatePricing:
    """Every unit of every product costs the same."""

    def __init__(self, unit_price: float) -> None:
        self.unit_price = unit_price

    def __call__(self, items: Iterable) -> float:
        return sum(item.quantity * self.unit_price for item in items)


_current_policy: PricingPolicy | None = None


def get_pricing() -> PricingPolicy:
    global _current_policy
    if _current_policy is None:
        _current_policy = FlatRatePricing(get_settings().unit_price)
    return _current_policy


def set_pricing(policy: PricingPolicy) -> None:
    global _current_policy
    _current_policy = policy


def reset_pricing() -> None:
    global _current_policy
    _current_policy = None

"""Service settings read from the environment."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    product_service_address: str
    payment_currency: str
    unit_price: float
    gateway_timeout_seconds: float
    reservation_backend: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            product_service_address=os.getenv("PRODUCT_SERVICE_ADDRESS", "http://localhost:8081"),
            payment_currency=os.getenv("PAYMENT_CURRENCY", "SEK"),
            unit_price=float(os.getenv("UNIT_PRICE", "100.0")),
            gateway_timeout_seconds=float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "10.0")),
            reservation_backend=os.getenv("RESERVATION_BACKEND", "fake").lower(),
        )


def get_settings() -> Settings:
    """Settings are re-read on each call so tests can patch the environment."""
    return Settings.from_env()

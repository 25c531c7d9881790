import pytest
from ordering.billing import reset_processor, set_processor
from ordering.billing.fake_adapter import FakePaymentProcessor
from ordering.checkout.pricing import reset_pricing
from ordering.reservations import reset_gateway, set_gateway
from ordering.reservations.fake_adapter import FakeReservationGateway
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def reservations():
    """A fresh fake reservation gateway per test."""
    gateway = FakeReservationGateway()
    set_gateway(gateway)
    yield gateway
    reset_gateway()


@pytest.fixture(autouse=True)
def payments():
    """A fresh fake payment processor per test."""
    processor = FakePaymentProcessor()
    set_processor(processor)
    yield processor
    reset_processor()


@pytest.fixture(autouse=True)
def _default_pricing():
    reset_pricing()
    yield
    reset_pricing()

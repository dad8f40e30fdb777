import json
import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("PAYMENT_GATEWAY", "fake")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Reset stores and the payment gateway after every test."""
    yield

    from protean import current_domain

    from storefront.payments.gateway import reset_gateway

    for _, provider in current_domain.providers.items():
        provider._data_reset()
    current_domain.event_store.store._data_reset()
    reset_gateway()


@pytest.fixture()
def fake_gateway():
    from storefront.payments.gateway import set_gateway
    from storefront.payments.gateway.fake_adapter import FakeGateway

    gateway = FakeGateway()
    set_gateway(gateway)
    return gateway


@pytest.fixture()
def make_category():
    from protean import current_domain

    from storefront.catalogue.category.management import CreateCategory

    def _make(name="Automáticas", **overrides):
        return current_domain.process(CreateCategory(name=name, **overrides), asynchronous=False)

    return _make


@pytest.fixture()
def make_product():
    from protean import current_domain

    from storefront.catalogue.product.management import CreateProduct

    def _make(name="Gorilla Glue Auto", price=100.0, stock=10, images=None, **overrides):
        command = CreateProduct(
            name=name,
            price=price,
            stock=stock,
            images=json.dumps(images or [f"https://cdn.example.com/{name.lower().replace(' ', '-')}.jpg"]),
            **overrides,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


VALID_ADDRESS = {
    "street": "Rua das Flores",
    "number": "123",
    "complement": "Apto 45",
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01310-100",
}


@pytest.fixture()
def valid_address():
    return dict(VALID_ADDRESS)

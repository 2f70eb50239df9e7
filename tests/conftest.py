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
    """Pytest hook to run before collecting tests.

    Sets PROTEAN_ENV so logging and domain configuration pick the test overlay.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Domains (cart, session and submission tests cross all three contexts)
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def identity_bed():
    from identity.domain import identity

    bed = DomainFixture(identity)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session", autouse=True)
def _domains(catalogue_bed, identity_bed, ordering_bed):
    from storefront.bootstrap import init_domains

    init_domains()


@pytest.fixture(autouse=True)
def _clear_log_context():
    yield

    from shared.logging import clear_context

    clear_context()


# ---------------------------------------------------------------------------
# Collaborators shared across contexts
# ---------------------------------------------------------------------------
@pytest.fixture()
def storage():
    from shared.storage import MemoryStorage

    return MemoryStorage()


@pytest.fixture(scope="session")
def static_catalogue():
    from catalogue.source import StaticCatalogue

    return StaticCatalogue()


@pytest.fixture()
def identity_provider():
    from identity.provider import FakeIdentityProvider

    return FakeIdentityProvider()


@pytest.fixture()
def order_service():
    from ordering.service import FakeOrderService

    return FakeOrderService()


@pytest.fixture()
def auth(identity_provider, storage):
    """An auth session that has not logged in yet."""
    from identity.session import AuthSession

    return AuthSession(identity_provider, storage)


@pytest.fixture()
def logged_in(auth):
    """An auth session logged in with the fake provider's code."""
    auth.send_otp("98765 43210")
    auth.verify_otp("123456")
    return auth


@pytest.fixture()
def shopper_with_address(logged_in):
    logged_in.complete_profile("Priya Sharma", "priya@example.com")
    logged_in.add_address("12 Station Road", "Bhagalpur", "812001", state="Bihar")
    return logged_in

"""Tests for domain initialization."""

from catalogue.domain import catalogue
from identity.domain import identity
from ordering.domain import ordering
from storefront import bootstrap
from storefront.bootstrap import init_domains
from storefront.session import ShopperSession


def test_init_domains_is_repeatable():
    init_domains()
    init_domains()


def test_init_domains_initializes_each_domain(monkeypatch):
    initialized = []
    monkeypatch.setattr(bootstrap, "_initialized", False)
    for domain in (catalogue, identity, ordering):
        monkeypatch.setattr(domain, "init", lambda traverse=True, d=domain: initialized.append((d.name, traverse)))

    init_domains()

    assert initialized == [(catalogue.name, False), (identity.name, False), (ordering.name, False)]


def test_session_starts_with_real_bootstrap():
    session = ShopperSession.start()

    assert not session.auth.is_authenticated
    assert session.catalogue.get_product("veg_tomato").name == "Desi Tomato"

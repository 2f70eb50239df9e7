import pytest


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def tomato(static_catalogue):
    return static_catalogue.get_product("veg_tomato")


@pytest.fixture()
def rice(static_catalogue):
    return static_catalogue.get_product("grain_rice")


@pytest.fixture()
def onion(static_catalogue):
    return static_catalogue.get_product("veg_onion")


@pytest.fixture()
def vegetable_combo(static_catalogue):
    return static_catalogue.get_combo_pack("combo-1")


@pytest.fixture()
def cart():
    from ordering.cart.cart import WeeklyCart

    return WeeklyCart.create()


@pytest.fixture()
def cart_store(storage):
    from ordering.cart.store import CartStore

    return CartStore(storage)


@pytest.fixture()
def cart_manager(cart, cart_store, shopper_with_address):
    from ordering.cart.management import CartManager

    return CartManager(cart, cart_store, shopper_with_address)


@pytest.fixture()
def submission(cart_manager, shopper_with_address, order_service):
    from ordering.request.submission import RequestSubmission

    return RequestSubmission(cart_manager, shopper_with_address, order_service)
